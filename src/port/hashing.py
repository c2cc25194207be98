"""Hashing ports — keyed token digests and password hashing."""

from typing import Protocol


class TokenHasher(Protocol):
    """Deterministic keyed hash of an opaque token string."""

    def hash(self, value: str) -> str: ...


class PasswordHasher(Protocol):
    """One-way password hashing with a constant-time verify.

    verify() returns False when the candidate does not match and raises
    for any other failure (for example a malformed stored hash).
    """

    def hash(self, password: str) -> str: ...

    def verify(self, password_hash: str, candidate: str) -> bool: ...

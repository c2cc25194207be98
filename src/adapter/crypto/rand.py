"""Cryptographically secure random tokens."""

import base64
import secrets

REMEMBER_TOKEN_BYTES = 32


def generate_bytes(n: int) -> bytes:
    """Return n random bytes from the OS entropy source."""
    return secrets.token_bytes(n)


def generate_string(n_bytes: int) -> str:
    """Return n_bytes of randomness as a URL-safe base64 string."""
    return base64.urlsafe_b64encode(generate_bytes(n_bytes)).decode('ascii')


def remember_token() -> str:
    """Generate a remember token of REMEMBER_TOKEN_BYTES random bytes."""
    return generate_string(REMEMBER_TOKEN_BYTES)

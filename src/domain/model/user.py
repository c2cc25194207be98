from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Domain model representing a user.

    ``password`` and ``remember`` hold plaintext values in memory only.
    Stores persist ``password_hash`` and ``remember_hash`` and never
    the plaintext fields.
    """
    id: int = 0
    name: str = ''
    email: str = ''
    age: int = 0
    password: str = ''
    password_hash: str = ''
    remember: str = ''
    remember_hash: str = ''
    created_at: datetime | None = None
    updated_at: datetime | None = None

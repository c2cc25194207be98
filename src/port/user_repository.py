from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Lookups raise NotFoundError when nothing matches. Writes raise
    DuplicateError on a uniqueness violation (email or remember_hash)
    and StoreError for any other backend failure.
    """
    def by_id(self, user_id: int) -> User:
        """Find a user by ID."""
        ...

    def by_email(self, email: str) -> User:
        """Find a user by email."""
        ...

    def by_remember_hash(self, remember_hash: str) -> User:
        """Find a user by the keyed hash of their remember token."""
        ...

    def by_age(self, age: int) -> User:
        """Find the first user (lowest ID) with the given age."""
        ...

    def create(self, user: User) -> None:
        """Persist a new user, backfilling id, created_at and updated_at."""
        ...

    def update(self, user: User) -> None:
        """Persist every stored field of an existing user by ID."""
        ...

    def delete(self, user_id: int) -> None:
        """Remove the user with the given ID."""
        ...

    def close(self) -> None: ...

    def auto_migrate(self) -> None:
        """Create the unique indexes the store relies on."""
        ...

    def destructive_reset(self) -> None:
        """Drop all users and rebuild the store. Test/dev use only."""
        ...

"""Domain-level exceptions.

Stores, the validation layer and the user service raise these errors.
Callers catch them and map them to user-facing messages.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested user does not exist."""

    def __init__(self, message: str = "models: resource not found"):
        super().__init__(message)


class InvalidIDError(DomainError):
    """ID provided to a method like delete was invalid."""

    def __init__(self, message: str = "models: ID provided was invalid"):
        super().__init__(message)


class InvalidPasswordError(DomainError):
    """Incorrect password provided when authenticating a user."""

    def __init__(self, message: str = "models: incorrect password provided"):
        super().__init__(message)


class DuplicateError(DomainError):
    """User with the same unique key already exists."""

    def __init__(self, field: str | None = None):
        self.field = field
        if field:
            super().__init__(f"models: duplicate value for unique field '{field}'")
        else:
            super().__init__("models: duplicate value for unique field")


class StoreError(DomainError):
    """Backing store failed for a reason other than not-found or duplicate."""

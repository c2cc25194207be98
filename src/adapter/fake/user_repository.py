"""In-memory implementation of UserRepository for testing."""

import itertools
import threading
from dataclasses import replace
from datetime import datetime, timezone
from domain.model.errors import DuplicateError, NotFoundError
from domain.model.user import User

_UNIQUE_FIELDS = ('email', 'remember_hash')


def _stored_copy(user: User) -> User:
    """Copy of user with the plaintext fields dropped."""
    return replace(user, password='', remember='')


class FakeUserRepository:
    def __init__(self):
        self.store: dict[int, User] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("user repository is closed")

    def _check_unique(self, user: User, exclude_id: int | None = None) -> None:
        for existing in self.store.values():
            if existing.id == exclude_id:
                continue
            # Empty values collide too, like a non-sparse unique index
            for field in _UNIQUE_FIELDS:
                if getattr(existing, field) == getattr(user, field):
                    raise DuplicateError(field)

    # ── write operations ─────────────────────────────────────

    def create(self, user: User) -> None:
        with self._lock:
            self._check_open()
            self._check_unique(user)

            now = datetime.now(timezone.utc)
            user.id = next(self._ids)
            user.created_at = now
            user.updated_at = now
            self.store[user.id] = _stored_copy(user)

    def update(self, user: User) -> None:
        with self._lock:
            self._check_open()
            existing = self.store.get(user.id)
            if existing is None:
                raise NotFoundError()
            self._check_unique(user, exclude_id=user.id)

            user.created_at = existing.created_at
            user.updated_at = datetime.now(timezone.utc)
            self.store[user.id] = _stored_copy(user)

    def delete(self, user_id: int) -> None:
        with self._lock:
            self._check_open()
            if self.store.pop(user_id, None) is None:
                raise NotFoundError()

    # ── read operations ──────────────────────────────────────

    def _first(self, predicate) -> User:
        with self._lock:
            self._check_open()
            for user_id in sorted(self.store):
                user = self.store[user_id]
                if predicate(user):
                    return replace(user)
        raise NotFoundError()

    def by_id(self, user_id: int) -> User:
        return self._first(lambda u: u.id == user_id)

    def by_email(self, email: str) -> User:
        return self._first(lambda u: u.email == email)

    def by_remember_hash(self, remember_hash: str) -> User:
        return self._first(lambda u: u.remember_hash == remember_hash)

    def by_age(self, age: int) -> User:
        return self._first(lambda u: u.age == age)

    # ── lifecycle ────────────────────────────────────────────

    def close(self) -> None:
        self._closed = True

    def auto_migrate(self) -> None:
        self._check_open()

    def destructive_reset(self) -> None:
        with self._lock:
            self._check_open()
            self.store.clear()
            self._ids = itertools.count(1)
        self.auto_migrate()

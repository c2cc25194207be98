"""Validation layer for users.

UserValidator wraps a UserRepository and normalizes users before they
reach the store: passwords are peppered and bcrypt-hashed, remember
tokens are minted and HMAC-hashed. Every write goes through here, so
the derivations run the same way whichever store is plugged in.
"""

from typing import Callable

from adapter.crypto import rand
from domain.model.errors import InvalidIDError
from domain.model.user import User
from port.hashing import PasswordHasher, TokenHasher
from port.user_repository import UserRepository

# A validation step mutates the user in place or raises.
UserValFn = Callable[[User], None]


def run_user_val_fns(user: User, *fns: UserValFn) -> None:
    """Run validation steps in order, stopping at the first error."""
    for fn in fns:
        fn(user)


class UserValidator:
    def __init__(
        self,
        repo: UserRepository,
        token_hasher: TokenHasher,
        password_hasher: PasswordHasher,
        token_factory: Callable[[], str] = rand.remember_token,
    ):
        self.repo = repo
        self.token_hasher = token_hasher
        self.password_hasher = password_hasher
        self.token_factory = token_factory

    # ── validation steps ─────────────────────────────────────

    def bcrypt_password(self, user: User) -> None:
        """Hash the plaintext password, if one was set, and clear it."""
        if not user.password:
            # Password unchanged
            return
        user.password_hash = self.password_hasher.hash(user.password)
        user.password = ''

    def set_remember_if_unset(self, user: User) -> None:
        if user.remember:
            return
        user.remember = self.token_factory()

    def hmac_remember(self, user: User) -> None:
        """Hash the remember token, if one was set.

        The plaintext stays on the in-memory user so the caller can hand
        it to the client once; stores never persist it.
        """
        if not user.remember:
            return
        user.remember_hash = self.token_hasher.hash(user.remember)

    def id_greater_than(self, n: int) -> UserValFn:
        def check(user: User) -> None:
            if user.id <= n:
                raise InvalidIDError()
        return check

    # ── intercepted operations ───────────────────────────────

    def by_remember(self, token: str) -> User:
        """Hash the remember token and look the user up by its digest."""
        user = User(remember=token)
        run_user_val_fns(user, self.hmac_remember)
        return self.repo.by_remember_hash(user.remember_hash)

    def create(self, user: User) -> None:
        """Hash password, mint and hash a remember token, then create the user."""
        run_user_val_fns(
            user,
            self.bcrypt_password,
            self.set_remember_if_unset,
            self.hmac_remember,
        )
        self.repo.create(user)

    def update(self, user: User) -> None:
        """Rehash a new password or remember token if present, then update.

        Never mints a remember token: without one the stored hash is kept.
        """
        run_user_val_fns(user, self.bcrypt_password, self.hmac_remember)
        self.repo.update(user)

    def delete(self, user_id: int) -> None:
        run_user_val_fns(User(id=user_id), self.id_greater_than(0))
        self.repo.delete(user_id)

    # ── pass-through ─────────────────────────────────────────

    def by_id(self, user_id: int) -> User:
        return self.repo.by_id(user_id)

    def by_email(self, email: str) -> User:
        return self.repo.by_email(email)

    def by_age(self, age: int) -> User:
        return self.repo.by_age(age)

    def close(self) -> None:
        self.repo.close()

    def auto_migrate(self) -> None:
        self.repo.auto_migrate()

    def destructive_reset(self) -> None:
        self.repo.destructive_reset()

"""User service — authentication on top of the validation layer.

Pure business logic with no HTTP dependencies. Raises domain errors
that callers map to user-facing messages.
"""

from adapter.crypto.passwords import BCRYPT_ROUNDS, BcryptPasswordHasher
from adapter.crypto.token_hasher import HMACTokenHasher
from adapter.mongodb.connection import DEFAULT_DATABASE_NAME, connect
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import InvalidPasswordError
from domain.model.user import User
from port.hashing import PasswordHasher
from services.user_validator import UserValidator
from utils.config import Settings


class UserService:
    """Set of methods used to manipulate and work with users.

    Forwards every storage operation to the wrapped UserValidator and
    adds authenticate().
    """

    def __init__(self, user_db: UserValidator, password_hasher: PasswordHasher):
        self.user_db = user_db
        self.password_hasher = password_hasher

    def authenticate(self, email: str, password: str) -> User:
        """Authenticate a user with the provided email address and password.

        Returns the matching User when both are correct.

        Raises:
            NotFoundError: no user with that email
            InvalidPasswordError: the password does not match
            Any other error from the store or the hasher, unchanged.
        """
        found_user = self.user_db.by_email(email)
        if not self.password_hasher.verify(found_user.password_hash, password):
            raise InvalidPasswordError()
        return found_user

    def by_id(self, user_id: int) -> User:
        return self.user_db.by_id(user_id)

    def by_email(self, email: str) -> User:
        return self.user_db.by_email(email)

    def by_remember(self, token: str) -> User:
        return self.user_db.by_remember(token)

    def by_age(self, age: int) -> User:
        return self.user_db.by_age(age)

    def create(self, user: User) -> None:
        self.user_db.create(user)

    def update(self, user: User) -> None:
        self.user_db.update(user)

    def delete(self, user_id: int) -> None:
        self.user_db.delete(user_id)

    def close(self) -> None:
        self.user_db.close()

    def auto_migrate(self) -> None:
        self.user_db.auto_migrate()

    def destructive_reset(self) -> None:
        self.user_db.destructive_reset()


def new_user_service(
    connection_info: str,
    secret_key: str,
    pepper: str,
    database_name: str = DEFAULT_DATABASE_NAME,
    bcrypt_rounds: int = BCRYPT_ROUNDS,
) -> UserService:
    """Wire a MongoDB-backed UserService.

    Creates the unique indexes before returning, so a fresh database
    rejects duplicate emails from the first request.

    Raises:
        StoreError: the database is unreachable, not configured,
            or the indexes could not be created
        ValueError: the HMAC secret key is empty
    """
    token_hasher = HMACTokenHasher(secret_key)
    password_hasher = BcryptPasswordHasher(pepper, rounds=bcrypt_rounds)
    repo = MongoUserRepository(connect(connection_info, database_name))
    repo.auto_migrate()
    validator = UserValidator(repo, token_hasher, password_hasher)
    return UserService(validator, password_hasher)


def new_user_service_from_settings(settings: Settings) -> UserService:
    return new_user_service(
        settings.mongo_url,
        settings.hmac_secret_key,
        settings.password_pepper,
        database_name=settings.database_name,
        bcrypt_rounds=settings.bcrypt_rounds,
    )

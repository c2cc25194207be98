"""Settings loaded from the environment.

Entry points call ``load_dotenv()`` first so a local ``.env`` file can
supply these variables.
"""

import os
from dataclasses import dataclass

from adapter.crypto.passwords import BCRYPT_ROUNDS
from adapter.mongodb.connection import DEFAULT_DATABASE_NAME


@dataclass(frozen=True)
class Settings:
    mongo_url: str | None
    hmac_secret_key: str
    password_pepper: str
    database_name: str = DEFAULT_DATABASE_NAME
    bcrypt_rounds: int = BCRYPT_ROUNDS


def _require(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(
            f"{name} environment variable is required. "
            "Generate a secure value with: openssl rand -hex 32"
        )
    return value


def load_settings() -> Settings:
    """Read Settings from environment variables.

    Raises:
        ValueError: HMAC_SECRET_KEY or USER_PW_PEPPER is missing,
            or BCRYPT_ROUNDS is not an integer
    """
    return Settings(
        mongo_url=os.getenv('MONGO_URL'),
        hmac_secret_key=_require('HMAC_SECRET_KEY'),
        password_pepper=_require('USER_PW_PEPPER'),
        database_name=os.getenv('MONGODB_DATABASE', DEFAULT_DATABASE_NAME),
        bcrypt_rounds=int(os.getenv('BCRYPT_ROUNDS', BCRYPT_ROUNDS)),
    )

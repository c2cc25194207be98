#!/usr/bin/env python3
"""Demo: reset the users collection, create a user, resume it by remember token.

WARNING: drops the users collection of MONGODB_DATABASE.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

from domain.model.user import User
from services.user_service import new_user_service_from_settings
from utils.config import load_settings
from utils.logging import setup_structured_logging


def main():
    load_dotenv()
    setup_structured_logging()

    us = new_user_service_from_settings(load_settings())
    try:
        us.destructive_reset()

        user = User(
            name="Michael Scott",
            email="michael@dundermifflin.com",
            password="bestboss",
            age=23,
        )
        us.create(user)
        print(user)
        if not user.remember:
            raise SystemExit("Invalid remember token")

        user2 = us.by_remember(user.remember)
        print(user2)

        user3 = us.authenticate(user.email, "bestboss")
        print(user3)
    finally:
        us.close()


if __name__ == "__main__":
    main()

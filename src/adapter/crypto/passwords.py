"""bcrypt implementation of PasswordHasher with an app-wide pepper."""

import base64
import hashlib

import bcrypt

BCRYPT_ROUNDS = 12
# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class BcryptPasswordHasher:
    """Hash passwords as bcrypt(password + pepper).

    bcrypt generates and embeds a per-hash salt; the pepper is a single
    secret shared by every password and kept out of the database.
    """

    def __init__(self, pepper: str, rounds: int = BCRYPT_ROUNDS):
        self._pepper = pepper
        self._rounds = rounds

    def _peppered(self, password: str) -> bytes:
        pw_bytes = (password + self._pepper).encode('utf-8')
        if len(pw_bytes) > BCRYPT_MAX_BYTES:
            # Pre-digest long inputs so nothing past byte 72 is ignored.
            pw_bytes = base64.b64encode(hashlib.sha256(pw_bytes).digest())
        return pw_bytes

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(self._peppered(password), salt).decode('utf-8')

    def verify(self, password_hash: str, candidate: str) -> bool:
        """Return True if candidate matches password_hash.

        A mismatch returns False. A malformed hash raises ValueError,
        which callers treat as an infrastructure failure.
        """
        return bcrypt.checkpw(self._peppered(candidate), password_hash.encode('utf-8'))

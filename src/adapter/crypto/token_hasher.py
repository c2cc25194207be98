"""HMAC implementation of TokenHasher.

Remember tokens are secrets held by the client. Only their keyed digest
is stored, so a leaked users table cannot be replayed as session cookies.
"""

import base64
import hashlib
import hmac


class HMACTokenHasher:
    def __init__(self, secret_key: str):
        if not isinstance(secret_key, str) or not secret_key:
            raise ValueError("HMAC secret key must be a non-empty string")
        self._key = secret_key.encode('utf-8')

    def hash(self, value: str) -> str:
        """Return the URL-safe base64 HMAC-SHA256 digest of value."""
        digest = hmac.new(self._key, value.encode('utf-8'), hashlib.sha256).digest()
        return base64.urlsafe_b64encode(digest).decode('ascii')

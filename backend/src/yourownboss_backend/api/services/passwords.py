"""Password hashing."""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets

PBKDF2_ITERATIONS = 100_000


class PasswordHasher:
    """Hashes passwords with PBKDF2-HMAC-SHA256 and a random salt."""

    def __init__(self, *, iterations: int = PBKDF2_ITERATIONS) -> None:
        self._iterations = iterations

    def hash(self, password: str) -> str:
        """Hash a password using PBKDF2 with a random salt."""

        salt = secrets.token_bytes(16)
        digest = hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), salt, self._iterations
        )
        return f"{base64.b64encode(salt).decode()}:{base64.b64encode(digest).decode()}"

    def verify(self, password: str, password_hash: str) -> bool:
        """Validate a password against a stored PBKDF2 hash."""

        try:
            salt_b64, hash_b64 = password_hash.split(":", 1)
            salt = base64.b64decode(salt_b64.encode(), validate=True)
            expected = base64.b64decode(hash_b64.encode(), validate=True)
        except ValueError:
            return False
        actual = hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), salt, self._iterations
        )
        return hmac.compare_digest(actual, expected)

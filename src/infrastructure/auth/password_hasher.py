"""Bcrypt password hashing."""

import logging

import bcrypt

from core.config import settings

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
_BCRYPT_MAX_BYTES = 72


class BcryptPasswordHasher:
    """Bcrypt password hashing utility."""

    def __init__(self, rounds: int = settings.bcrypt_rounds) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(self._encode(password), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash."""
        try:
            return bcrypt.checkpw(self._encode(password), password_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]

"""JWT token codec.

Tokens are HS256-signed with the process-wide secret and carry:
    {
        "sub": "user-uuid",
        "iat": 1234567000,
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable
from uuid import UUID

from jose import JWTError, jwt

from core.config import settings
from core.exceptions import ExpiredTokenError, InvalidTokenError
from infrastructure.auth.provider import IssuedToken

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JWTTokenCodec:
    """Issues and verifies signed identity tokens.

    The expiry check is done here rather than by ``jose`` so that a token
    is rejected as soon as the clock reaches ``exp`` and so tests can pin
    the clock.
    """

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._clock = clock

    def issue(self, subject_id: UUID) -> IssuedToken:
        """
        Create a signed token for a user.

        Args:
            subject_id: The user the token speaks for

        Returns:
            The issued token with its encoded value
        """
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + timedelta(minutes=self._expire_minutes)

        payload: dict[str, Any] = {
            "sub": str(subject_id),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        value = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

        return IssuedToken(
            subject_id=subject_id,
            issued_at=issued_at,
            expires_at=expires_at,
            value=value,
        )

    def verify(self, token: str) -> UUID:
        """
        Check a token and return the user id it carries.

        Raises:
            InvalidTokenError: Bad signature, malformed token or claims
            ExpiredTokenError: ``now >= exp`` with an otherwise valid token
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_aud": False},
            )
        except JWTError as exc:
            logger.debug("Token rejected: %s", exc)
            raise InvalidTokenError() from exc

        exp = payload.get("exp")
        if not isinstance(exp, (int, float)):
            raise InvalidTokenError("Token has no expiry")

        try:
            subject_id = UUID(str(payload.get("sub")))
        except ValueError as exc:
            raise InvalidTokenError("Token has no valid subject") from exc

        if self._clock().timestamp() >= exp:
            raise ExpiredTokenError()

        return subject_id

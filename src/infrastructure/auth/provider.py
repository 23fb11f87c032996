"""Authentication protocols."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class IssuedToken:
    """A signed credential and the claims it carries."""

    subject_id: UUID
    issued_at: datetime
    expires_at: datetime
    value: str


@dataclass(frozen=True)
class AuthenticatedUser:
    """The identity attached to a request once its token checks out."""

    id: UUID


class ITokenCodec(Protocol):
    """Protocol for signed identity tokens."""

    def issue(self, subject_id: UUID) -> IssuedToken:
        """
        Create a signed token for a user.

        Args:
            subject_id: The user the token speaks for

        Returns:
            The issued token with its encoded value
        """
        ...

    def verify(self, token: str) -> UUID:
        """
        Check a token and return the user id it carries.

        Raises:
            InvalidTokenError: Signature or claims are not acceptable
            ExpiredTokenError: The token lifetime has elapsed
        """
        ...


class IPasswordHasher(Protocol):
    """Protocol for password hashing."""

    def hash(self, password: str) -> str:
        """Hash a plain password for storage."""
        ...

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a plain password against a stored hash."""
        ...

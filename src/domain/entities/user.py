"""User (identity) domain entity."""

import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import urlencode
from uuid import UUID, uuid4

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar/"


def gravatar_url(email: str, size: int = 200) -> str:
    """Build the Gravatar avatar URL for an email address."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": size, "r": "pg", "d": "mm"})
    return f"{GRAVATAR_BASE_URL}{digest}?{query}"


@dataclass
class User:
    """Domain entity for a registered account.

    ``password`` always holds the bcrypt hash, never the plain secret.
    """

    name: str
    email: str
    password: str
    id: UUID = field(default_factory=uuid4)
    avatar: str = ""
    date: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Normalize the email and derive the avatar when missing."""
        self.email = self.email.strip().lower()
        if not self.avatar:
            self.avatar = gravatar_url(self.email)

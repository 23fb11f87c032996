"""Post domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass(frozen=True)
class Like:
    """Membership record of one user in a post's like set."""

    user_id: UUID


@dataclass(frozen=True)
class Comment:
    """A reply on a post. Name and avatar are copied from the author at write time."""

    user_id: UUID
    text: str
    name: str
    avatar: str
    id: UUID = field(default_factory=uuid4)
    date: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class Post:
    """Domain entity for a feed item.

    ``name`` and ``avatar`` snapshot the author at creation and are never
    resynced. ``likes`` and ``comments`` are newest first.
    """

    user_id: UUID
    text: str
    name: str
    avatar: str
    id: UUID = field(default_factory=uuid4)
    likes: tuple[Like, ...] = ()
    comments: tuple[Comment, ...] = ()
    date: datetime = field(default_factory=datetime.utcnow)
    version: int = 0

    def liked_by(self, user_id: UUID) -> bool:
        """Check whether ``user_id`` is in the like set."""
        return any(like.user_id == user_id for like in self.likes)

    def find_comment(self, comment_id: UUID) -> Comment | None:
        """Return the comment with ``comment_id`` if present."""
        return next((c for c in self.comments if c.id == comment_id), None)

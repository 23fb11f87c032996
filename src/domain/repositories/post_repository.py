"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Post


class IPostRepository(Protocol):
    """Repository interface for Post aggregates."""

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        ...

    async def get_all(self) -> list[Post]:
        """Get every post, newest first."""
        ...

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        ...

    async def update(self, post: Post) -> Post:
        """Write a post if its stored version still equals ``post.version``.

        Raises:
            StaleVersionError: If another writer got there first.
        """
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post and return success status."""
        ...

    async def delete_by_author(self, user_id: UUID) -> int:
        """Delete every post authored by a user and return the count."""
        ...

    async def get_with_activity_by(self, user_id: UUID) -> list[Post]:
        """Get posts that carry a like or comment from a user."""
        ...

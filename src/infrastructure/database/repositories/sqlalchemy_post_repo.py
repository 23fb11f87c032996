"""SQLAlchemy implementation of Post repository."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import StaleVersionError
from domain.entities.post import Comment, Like, Post
from infrastructure.database.models import PostModel


def comment_to_doc(comment: Comment) -> dict[str, Any]:
    """Serialize a comment into its embedded JSON form."""
    return {
        "id": str(comment.id),
        "user": str(comment.user_id),
        "text": comment.text,
        "name": comment.name,
        "avatar": comment.avatar,
        "date": comment.date.isoformat(),
    }


def comment_from_doc(doc: dict[str, Any]) -> Comment:
    """Deserialize an embedded comment document."""
    return Comment(
        id=UUID(doc["id"]),
        user_id=UUID(doc["user"]),
        text=doc["text"],
        name=doc["name"],
        avatar=doc.get("avatar", ""),
        date=datetime.fromisoformat(doc["date"]),
    )


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        stmt = (
            select(PostModel)
            .where(PostModel.id == id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Post]:
        """Get every post, newest first."""
        stmt = select(PostModel).order_by(PostModel.date.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = PostModel(
            id=post.id,
            user_id=post.user_id,
            text=post.text,
            name=post.name,
            avatar=post.avatar,
            likes=[{"user": str(like.user_id)} for like in post.likes],
            comments=[comment_to_doc(c) for c in post.comments],
            date=post.date,
            version=0,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, post: Post) -> Post:
        """Write likes and comments if nobody else has written since the read."""
        stmt = (
            update(PostModel)
            .where(PostModel.id == post.id, PostModel.version == post.version)
            .values(
                likes=[{"user": str(like.user_id)} for like in post.likes],
                comments=[comment_to_doc(c) for c in post.comments],
                version=post.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise StaleVersionError(str(post.id), post.version)

        stored = await self.get(post.id)
        if stored is None:
            raise StaleVersionError(str(post.id), post.version)
        return stored

    async def delete(self, id: UUID) -> bool:
        """Delete a post."""
        stmt = delete(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def delete_by_author(self, user_id: UUID) -> int:
        """Delete every post authored by a user."""
        stmt = delete(PostModel).where(PostModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return int(result.rowcount or 0)

    async def get_with_activity_by(self, user_id: UUID) -> list[Post]:
        """Get posts carrying a like or comment from a user.

        Filtered in Python so the same code runs on PostgreSQL JSONB and
        the SQLite JSON used in tests.
        """
        posts = await self.get_all()
        return [
            post
            for post in posts
            if post.liked_by(user_id) or any(c.user_id == user_id for c in post.comments)
        ]

    def _to_entity(self, model: PostModel) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar=model.avatar,
            likes=tuple(Like(user_id=UUID(doc["user"])) for doc in model.likes or ()),
            comments=tuple(comment_from_doc(doc) for doc in model.comments or ()),
            date=model.date,
            version=model.version,
        )

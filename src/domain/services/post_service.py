"""Post service layer with business logic."""

from typing import Callable, List, TypeVar
from uuid import UUID

import structlog

from core.exceptions import CommentNotFoundError, PostNotFoundError, UserNotFoundError
from domain.entities.post import Comment, Post
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services import collection_editor as editor
from domain.services.collection_editor import LikeResult
from domain.services.ownership import (
    may_delete_comment,
    may_delete_post,
    may_interact_with_post,
    require,
)
from domain.services.versioned_write import retry_on_stale

logger = structlog.get_logger()

T = TypeVar("T")


class PostService:
    """Service layer for the post feed, likes and comments."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        write_attempts: int = 3,
    ) -> None:
        self._uow_factory = uow_factory
        self._write_attempts = write_attempts

    async def get_all(self) -> List[Post]:
        """Get every post, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()

    async def get_by_id(self, post_id: UUID) -> Post:
        """Get a single post."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            return post

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post, snapshotting the author's name and avatar."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            post = Post(
                user_id=user_id,
                text=text,
                name=user.name,
                avatar=user.avatar,
            )
            created = await uow.posts.create(post)
            await uow.commit()
            return created

    async def delete(self, post_id: UUID, user_id: UUID) -> None:
        """Delete a post. Only its author may do this."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))

            require(may_delete_post(user_id, post))

            await uow.posts.delete(post_id)
            await uow.commit()
            logger.info("post_deleted", post_id=str(post_id))

    async def like(self, post_id: UUID, user_id: UUID) -> tuple[Post, LikeResult]:
        """Add the caller to the post's like set (idempotent)."""

        def edit(post: Post) -> tuple[Post, LikeResult]:
            require(may_interact_with_post(user_id, post))
            return editor.toggle_like(post, user_id)

        return await self._edit(post_id, edit)

    async def unlike(self, post_id: UUID, user_id: UUID) -> tuple[Post, LikeResult]:
        """Remove the caller from the post's like set (idempotent)."""

        def edit(post: Post) -> tuple[Post, LikeResult]:
            require(may_interact_with_post(user_id, post))
            return editor.unlike(post, user_id)

        return await self._edit(post_id, edit)

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> Post:
        """Prepend a comment by the caller."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

        draft = Comment(user_id=user_id, text=text, name=user.name, avatar=user.avatar)

        def edit(post: Post) -> tuple[Post, Comment]:
            require(may_interact_with_post(user_id, post))
            return editor.insert_front(post, "comments", draft)

        post, _ = await self._edit(post_id, edit)
        return post

    async def remove_comment(
        self, post_id: UUID, comment_id: UUID, user_id: UUID
    ) -> Post:
        """Remove a comment. Allowed for the comment's author and the post's author."""

        def edit(post: Post) -> tuple[Post, bool]:
            comment = post.find_comment(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))
            require(may_delete_comment(user_id, post, comment))
            return editor.remove_by_id(post, "comments", comment_id)

        post, _ = await self._edit(post_id, edit)
        return post

    async def _edit(
        self, post_id: UUID, edit: Callable[[Post], tuple[Post, T]]
    ) -> tuple[Post, T]:
        """Apply ``edit`` as one versioned read-modify-write on a post."""

        async def attempt() -> tuple[Post, T]:
            async with self._uow_factory() as uow:
                post = await uow.posts.get(post_id)
                if not post:
                    raise PostNotFoundError(str(post_id))

                updated, outcome = edit(post)
                if updated is post:
                    return post, outcome

                saved = await uow.posts.update(updated)
                await uow.commit()
                return saved, outcome

        return await retry_on_stale(
            attempt,
            attempts=self._write_attempts,
            resource="post",
            resource_id=str(post_id),
        )

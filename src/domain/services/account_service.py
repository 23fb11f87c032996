"""Account deletion across users, profiles and posts."""

from typing import Callable
from uuid import UUID

import structlog

from core.exceptions import UserNotFoundError
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.collection_editor import strip_user
from domain.services.versioned_write import retry_on_stale

logger = structlog.get_logger()


class AccountService:
    """Removes a user together with everything that hangs off them."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        cascade_delete_posts: bool = True,
        write_attempts: int = 3,
    ) -> None:
        self._uow_factory = uow_factory
        self._cascade_delete_posts = cascade_delete_posts
        self._write_attempts = write_attempts

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the user's profile, then (optionally) their posts, then the user.

        All steps share one transaction, so a failure at any step leaves
        nothing deleted. A missing profile is fine; a missing user is not.
        With ``cascade_delete_posts`` off, authored posts, likes and comments
        stay behind with a dangling author id.
        """

        async def attempt() -> tuple[bool, int, int]:
            async with self._uow_factory() as uow:
                profile_deleted = await uow.profiles.delete_by_user_id(user_id)

                posts_deleted = 0
                posts_stripped = 0
                if self._cascade_delete_posts:
                    posts_deleted = await uow.posts.delete_by_author(user_id)
                    for post in await uow.posts.get_with_activity_by(user_id):
                        stripped = strip_user(post, user_id)
                        if stripped is not post:
                            await uow.posts.update(stripped)
                            posts_stripped += 1

                if not await uow.users.delete(user_id):
                    raise UserNotFoundError(str(user_id))

                await uow.commit()
                return profile_deleted, posts_deleted, posts_stripped

        profile_deleted, posts_deleted, posts_stripped = await retry_on_stale(
            attempt,
            attempts=self._write_attempts,
            resource="user",
            resource_id=str(user_id),
        )
        logger.info(
            "account_deleted",
            user_id=str(user_id),
            profile_deleted=profile_deleted,
            posts_deleted=posts_deleted,
            posts_stripped=posts_stripped,
        )

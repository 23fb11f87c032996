"""Registration, login and identity lookup."""

from typing import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IPasswordHasher, IssuedToken, ITokenCodec

logger = structlog.get_logger()


class AuthService:
    """Service layer for user accounts and credentials."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        token_codec: ITokenCodec,
        password_hasher: IPasswordHasher,
    ) -> None:
        self._uow_factory = uow_factory
        self._tokens = token_codec
        self._hasher = password_hasher

    async def register(self, name: str, email: str, password: str) -> IssuedToken:
        """Create an account and return a token for it."""
        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email.strip().lower()):
                raise UserAlreadyExistsError()

            user = User(name=name, email=email, password=self._hasher.hash(password))
            created = await uow.users.create(user)
            await uow.commit()

        logger.info("user_registered", user_id=str(created.id))
        return self._tokens.issue(created.id)

    async def login(self, email: str, password: str) -> IssuedToken:
        """Exchange an email/password pair for a token.

        Unknown emails and wrong passwords fail the same way.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email.strip().lower())

        if not user or not self._hasher.verify(password, user.password):
            raise InvalidCredentialsError()

        return self._tokens.issue(user.id)

    async def get_user(self, user_id: UUID) -> User:
        """Get the account behind a verified token."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user

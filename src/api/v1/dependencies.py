"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from api.dependencies.auth import get_token_codec
from core.config import settings
from domain.services.account_service import AccountService
from domain.services.auth_service import AuthService
from domain.services.post_service import PostService
from domain.services.profile_service import ProfileService
from infrastructure.auth.password_hasher import BcryptPasswordHasher
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_auth_service() -> AuthService:
    """Get Auth service instance."""
    return AuthService(
        get_uow_factory(),
        token_codec=get_token_codec(),
        password_hasher=BcryptPasswordHasher(),
    )


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory(), write_attempts=settings.write_retry_attempts)


@lru_cache
def get_post_service() -> PostService:
    """Get Post service instance."""
    return PostService(get_uow_factory(), write_attempts=settings.write_retry_attempts)


@lru_cache
def get_account_service() -> AccountService:
    """Get Account service instance."""
    return AccountService(
        get_uow_factory(),
        cascade_delete_posts=settings.cascade_delete_posts,
        write_attempts=settings.write_retry_attempts,
    )

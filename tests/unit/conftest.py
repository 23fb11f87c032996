"""Shared fixtures for unit tests."""

from dataclasses import replace
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.post import Post
from domain.entities.profile import Profile
from domain.entities.user import User


class FakeUnitOfWork:
    """Fake Unit of Work with the 3 repository mocks for unit testing."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.profiles = AsyncMock()
        self.posts = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


def store_post(uow: FakeUnitOfWork, post: Post) -> None:
    """Make ``uow.posts`` behave like a one-row store holding ``post``."""
    uow.posts.get.return_value = post

    async def update(updated: Post) -> Post:
        saved = replace(updated, version=updated.version + 1)
        uow.posts.get.return_value = saved
        return saved

    uow.posts.update.side_effect = update


def store_profile(uow: FakeUnitOfWork, profile: Profile) -> None:
    """Make ``uow.profiles`` behave like a one-row store holding ``profile``."""
    uow.profiles.get_by_user_id.return_value = profile

    async def update(updated: Profile) -> Profile:
        saved = replace(updated, version=updated.version + 1)
        uow.profiles.get_by_user_id.return_value = saved
        return saved

    uow.profiles.update.side_effect = update


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def other_user_id() -> UUID:
    """A random user ID distinct from user_id."""
    return uuid4()


@pytest.fixture
def user(user_id: UUID) -> User:
    """A stored user matching user_id."""
    return User(id=user_id, name="Jane Doe", email="jane@example.com", password="hash")

"""Unit tests for AuthService."""

from uuid import UUID

import pytest

from core.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from domain.entities.user import User
from domain.services.auth_service import AuthService
from infrastructure.auth.jwt_provider import JWTTokenCodec
from infrastructure.auth.password_hasher import BcryptPasswordHasher
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def codec() -> JWTTokenCodec:
    return JWTTokenCodec(secret_key="unit-secret", algorithm="HS256", expire_minutes=5)


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def service(
    uow: FakeUnitOfWork, codec: JWTTokenCodec, hasher: BcryptPasswordHasher
) -> AuthService:
    return AuthService(lambda: uow, token_codec=codec, password_hasher=hasher)


class TestRegister:
    @pytest.mark.asyncio
    async def test_stores_hashed_password_and_issues_token(
        self, service: AuthService, uow: FakeUnitOfWork, codec: JWTTokenCodec
    ):
        uow.users.get_by_email.return_value = None
        uow.users.create.side_effect = lambda u: u

        issued = await service.register("Jane", "Jane@Example.com", "secret123")

        stored: User = uow.users.create.await_args.args[0]
        assert stored.email == "jane@example.com"
        assert stored.password != "secret123"
        assert codec.verify(issued.value) == stored.id
        assert uow.committed

    @pytest.mark.asyncio
    async def test_duplicate_email(
        self, service: AuthService, uow: FakeUnitOfWork, user: User
    ):
        uow.users.get_by_email.return_value = user

        with pytest.raises(UserAlreadyExistsError):
            await service.register("Jane", user.email, "secret123")

        uow.users.create.assert_not_called()


class TestLogin:
    @pytest.mark.asyncio
    async def test_valid_credentials(
        self,
        service: AuthService,
        uow: FakeUnitOfWork,
        codec: JWTTokenCodec,
        hasher: BcryptPasswordHasher,
        user_id: UUID,
    ):
        uow.users.get_by_email.return_value = User(
            id=user_id, name="Jane", email="jane@example.com", password=hasher.hash("pw1234")
        )

        issued = await service.login("JANE@example.com ", "pw1234")

        assert codec.verify(issued.value) == user_id
        uow.users.get_by_email.assert_awaited_once_with("jane@example.com")

    @pytest.mark.asyncio
    async def test_wrong_password(
        self, service: AuthService, uow: FakeUnitOfWork, hasher: BcryptPasswordHasher
    ):
        uow.users.get_by_email.return_value = User(
            name="Jane", email="jane@example.com", password=hasher.hash("pw1234")
        )

        with pytest.raises(InvalidCredentialsError):
            await service.login("jane@example.com", "nope")

    @pytest.mark.asyncio
    async def test_unknown_email(self, service: AuthService, uow: FakeUnitOfWork):
        uow.users.get_by_email.return_value = None

        with pytest.raises(InvalidCredentialsError):
            await service.login("ghost@example.com", "pw1234")


@pytest.mark.asyncio
async def test_get_user_missing(service: AuthService, uow: FakeUnitOfWork, user_id: UUID):
    uow.users.get.return_value = None

    with pytest.raises(UserNotFoundError):
        await service.get_user(user_id)

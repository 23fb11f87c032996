"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from uuid import UUID, uuid4

# Keep startup side effects out of tests
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTTokenCodec
from infrastructure.auth.password_hasher import BcryptPasswordHasher
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory, one shared connection per engine)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_SECRET = "test-secret-key"
TEST_PASSWORD = "secret123"


@dataclass
class AuthContext:
    """A registered test user and the headers that authenticate them."""

    id: UUID
    name: str
    headers: dict[str, str]


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def token_codec() -> JWTTokenCodec:
    """Create token codec for testing."""
    return JWTTokenCodec(
        secret_key=TEST_SECRET,
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def password_hasher() -> BcryptPasswordHasher:
    """Cheap bcrypt cost so tests stay fast."""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    token_codec: JWTTokenCodec,
    password_hasher: BcryptPasswordHasher,
) -> FastAPI:
    """
    Create the application wired to the test database.

    Auth is not bypassed: requests go through the real gate with tokens
    signed by the test codec.
    """
    from api.dependencies.auth import get_token_codec
    from api.v1.dependencies import (
        get_account_service,
        get_auth_service,
        get_post_service,
        get_profile_service,
    )
    from domain.services.account_service import AccountService
    from domain.services.auth_service import AuthService
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from infrastructure.database.session import get_async_session
    from main import create_app

    app = create_app()

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_token_codec] = lambda: token_codec
    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_auth_service] = lambda: AuthService(
        uow_factory, token_codec=token_codec, password_hasher=password_hasher
    )
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(uow_factory)
    app.dependency_overrides[get_post_service] = lambda: PostService(uow_factory)
    app.dependency_overrides[get_account_service] = lambda: AccountService(uow_factory)
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth headers)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client: AsyncClient) -> Callable[..., Awaitable[AuthContext]]:
    """Register a user through the API and return their auth context."""

    async def _make(name: str = "Test User", email: str | None = None) -> AuthContext:
        email = email or f"user-{uuid4().hex[:10]}@example.com"
        response = await client.post(
            "/api/v1/users",
            json={"name": name, "email": email, "password": TEST_PASSWORD},
        )
        assert response.status_code == 201, response.text
        headers = {"x-auth-token": response.json()["token"]}

        me = await client.get("/api/v1/auth", headers=headers)
        assert me.status_code == 200, me.text
        return AuthContext(id=UUID(me.json()["data"]["id"]), name=name, headers=headers)

    return _make

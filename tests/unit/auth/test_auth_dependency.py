"""Unit tests for authentication dependencies."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from starlette.requests import Request

from api.dependencies.auth import extract_token, get_current_user
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTTokenCodec


def _request() -> Request:
    return Request({"type": "http", "method": "GET", "path": "/", "headers": []})


@pytest.fixture
def codec() -> JWTTokenCodec:
    return JWTTokenCodec(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


class TestExtractToken:
    def test_prefers_x_auth_token_header(self):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="bearer-token")

        assert extract_token(credentials, "header-token") == "header-token"

    def test_falls_back_to_bearer(self):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="bearer-token")

        assert extract_token(credentials, None) == "bearer-token"

    def test_absent_token_is_none(self):
        assert extract_token(None, None) is None


class TestGetCurrentUser:
    @pytest.mark.asyncio
    async def test_returns_identity_with_valid_token(self, codec: JWTTokenCodec):
        subject = uuid4()
        token = codec.issue(subject).value
        request = _request()

        result = await get_current_user(request, token, codec)

        assert result.id == subject
        assert request.state.user_id == subject

    @pytest.mark.asyncio
    async def test_raises_when_no_token(self, codec: JWTTokenCodec):
        request = _request()

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(request, None, codec)

        assert exc_info.value.error_code == ErrorCode.UNAUTHORIZED
        assert exc_info.value.status_code == 401
        assert not hasattr(request.state, "user_id")

    @pytest.mark.asyncio
    async def test_raises_when_invalid_token(self, codec: JWTTokenCodec):
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_request(), "invalid.jwt.token", codec)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_raises_when_expired_token(self, codec: JWTTokenCodec):
        issued_long_ago = JWTTokenCodec(
            secret_key="test-secret",
            expire_minutes=30,
            clock=lambda: datetime.now(timezone.utc) - timedelta(hours=2),
        )
        token = issued_long_ago.issue(uuid4()).value

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_request(), token, codec)

        assert exc_info.value.error_code == ErrorCode.TOKEN_EXPIRED
        assert exc_info.value.status_code == 401

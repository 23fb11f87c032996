"""Authentication dependencies for FastAPI."""

from typing import Annotated

import structlog
from fastapi import Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTTokenCodec
from infrastructure.auth.provider import AuthenticatedUser

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

# Singleton token codec
_token_codec: JWTTokenCodec | None = None


def get_token_codec() -> JWTTokenCodec:
    """Get or create the token codec singleton."""
    global _token_codec
    if _token_codec is None:
        _token_codec = JWTTokenCodec()
    return _token_codec


def extract_token(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    x_auth_token: Annotated[str | None, Header()] = None,
) -> str | None:
    """Pull the raw token from ``x-auth-token`` or ``Authorization: Bearer``.

    A missing token is returned as ``None``; rejecting it is up to the gate.
    """
    if x_auth_token:
        return x_auth_token
    if credentials:
        return credentials.credentials
    return None


async def get_current_user(
    request: Request,
    token: Annotated[str | None, Depends(extract_token)],
    token_codec: JWTTokenCodec = Depends(get_token_codec),
) -> AuthenticatedUser:
    """
    Dependency to get the current authenticated user.

    On success the user id is attached to ``request.state`` and to the
    log context.

    Raises:
        AuthenticationError: If no token provided or token is invalid/expired
    """
    if not token:
        raise AuthenticationError(
            message="No token, authorization denied",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    user_id = token_codec.verify(token)

    request.state.user_id = user_id
    structlog.contextvars.bind_contextvars(user_id=str(user_id))
    return AuthenticatedUser(id=user_id)


# Type alias for convenience in route handlers
CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]

"""Authentication routes."""

from fastapi import APIRouter, Depends

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_auth_service
from api.v1.schemas.user import (
    LoginRequest,
    TokenResponse,
    UserDetailResponse,
    UserResponse,
)
from domain.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "",
    response_model=UserDetailResponse,
    summary="Get the authenticated user",
)
async def get_me(
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> UserDetailResponse:
    """Return the account behind the supplied token."""
    account = await service.get_user(user.id)
    return UserDetailResponse(data=UserResponse.model_validate(account))


@router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    responses={
        200: {"description": "Token issued"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange email and password for a token."""
    issued = await service.login(email=body.email, password=body.password)
    return TokenResponse(token=issued.value, expires_at=issued.expires_at)

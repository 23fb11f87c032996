"""User registration routes."""

from fastapi import APIRouter, Depends, status

from api.v1.dependencies import get_auth_service
from api.v1.schemas.user import TokenResponse, UserCreate
from domain.services.auth_service import AuthService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    responses={
        201: {"description": "User registered, token issued"},
        409: {"description": "Email already registered"},
    },
)
async def register_user(
    body: UserCreate,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Register a user. The avatar is taken from Gravatar for the email."""
    issued = await service.register(name=body.name, email=body.email, password=body.password)
    return TokenResponse(token=issued.value, expires_at=issued.expires_at)

"""Profile API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_account_service, get_profile_service
from api.v1.schemas.common import NOT_AUTHENTICATED, MessageResponse
from api.v1.schemas.profile import (
    EducationCreate,
    EducationResponse,
    ExperienceCreate,
    ExperienceResponse,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileOwner,
    ProfileResponse,
    ProfileUpsert,
)
from domain.entities.profile import EducationEntry, ExperienceEntry, Profile, ProfileView
from domain.services.account_service import AccountService
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profiles"], responses=NOT_AUTHENTICATED)


def _to_response(
    profile: Profile, owner_name: str | None = None, owner_avatar: str | None = None
) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        user=ProfileOwner(id=profile.user_id, name=owner_name, avatar=owner_avatar),
        status=profile.status,
        company=profile.company,
        website=profile.website,
        location=profile.location,
        bio=profile.bio,
        githubusername=profile.githubusername,
        skills=list(profile.skills),
        social=dict(profile.social),
        experience=[
            ExperienceResponse(
                id=e.id,
                title=e.title,
                company=e.company,
                location=e.location,
                from_date=e.from_date,
                to_date=e.to_date,
                current=e.current,
                description=e.description,
            )
            for e in profile.experience
        ],
        education=[
            EducationResponse(
                id=e.id,
                school=e.school,
                degree=e.degree,
                fieldofstudy=e.fieldofstudy,
                from_date=e.from_date,
                to_date=e.to_date,
                current=e.current,
                description=e.description,
            )
            for e in profile.education
        ],
        date=profile.date,
    )


def _view_to_response(view: ProfileView) -> ProfileResponse:
    return _to_response(view.profile, view.owner_name, view.owner_avatar)


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get my profile",
    responses={404: {"description": "No profile for this user"}},
)
async def get_my_profile(
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the authenticated user's profile."""
    view = await service.get_for_user(user.id)
    return ProfileDetailResponse(data=_view_to_response(view))


@router.post(
    "",
    response_model=ProfileDetailResponse,
    summary="Create or update my profile",
)
async def upsert_profile(
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Create the caller's profile, or update it if one exists."""
    view = await service.upsert(
        user_id=user.id,
        status=body.status,
        skills=body.skills,
        company=body.company,
        website=body.website,
        location=body.location,
        bio=body.bio,
        githubusername=body.githubusername,
        social=body.social_links(),
    )
    return ProfileDetailResponse(data=_view_to_response(view))


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List all profiles",
)
async def list_profiles(
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Get every profile with its owner's name and avatar."""
    views = await service.get_all()
    return ProfileListResponse(data=[_view_to_response(v) for v in views])


@router.get(
    "/user/{user_id}",
    response_model=ProfileDetailResponse,
    summary="Get a user's profile",
    responses={404: {"description": "Profile not found"}},
)
async def get_profile_by_user(
    user_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the profile owned by ``user_id``."""
    view = await service.get_for_user(user_id)
    return ProfileDetailResponse(data=_view_to_response(view))


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete my account",
)
async def delete_account(
    user: CurrentUser,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Delete the caller's profile, posts and user account."""
    await service.delete_account(user.id)
    return MessageResponse(message="User deleted")


@router.put(
    "/experience",
    response_model=ProfileDetailResponse,
    summary="Add an experience entry",
    status_code=status.HTTP_200_OK,
)
async def add_experience(
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Prepend an experience entry to the caller's profile."""
    profile = await service.add_experience(
        user.id,
        ExperienceEntry(
            title=body.title,
            company=body.company,
            location=body.location,
            from_date=body.from_date,
            to_date=body.to_date,
            current=body.current,
            description=body.description,
        ),
    )
    return ProfileDetailResponse(data=_to_response(profile))


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileDetailResponse,
    summary="Remove an experience entry",
    responses={404: {"description": "Profile or entry not found"}},
)
async def remove_experience(
    exp_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an experience entry from the caller's profile."""
    profile = await service.remove_experience(user.id, exp_id)
    return ProfileDetailResponse(data=_to_response(profile))


@router.put(
    "/education",
    response_model=ProfileDetailResponse,
    summary="Add an education entry",
)
async def add_education(
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Prepend an education entry to the caller's profile."""
    profile = await service.add_education(
        user.id,
        EducationEntry(
            school=body.school,
            degree=body.degree,
            fieldofstudy=body.fieldofstudy,
            from_date=body.from_date,
            to_date=body.to_date,
            current=body.current,
            description=body.description,
        ),
    )
    return ProfileDetailResponse(data=_to_response(profile))


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileDetailResponse,
    summary="Remove an education entry",
    responses={404: {"description": "Profile or entry not found"}},
)
async def remove_education(
    edu_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an education entry from the caller's profile."""
    profile = await service.remove_education(user.id, edu_id)
    return ProfileDetailResponse(data=_to_response(profile))

"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from typing import Annotated, Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SocialLinks(BaseModel):
    """Optional social network links."""

    youtube: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    Social links may be sent flat (as form-based clients do) or nested
    under ``social``.
    """

    status: str = Field(..., min_length=1, max_length=100)
    skills: Annotated[str, Field(min_length=1)] | Annotated[list[str], Field(min_length=1)]
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = None
    githubusername: str | None = Field(None, max_length=100)
    social: SocialLinks = Field(default_factory=SocialLinks)
    youtube: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)

    def social_links(self) -> dict[str, str | None]:
        """Merge flat and nested social links, nested values winning."""
        flat = {
            "youtube": self.youtube,
            "twitter": self.twitter,
            "facebook": self.facebook,
            "linkedin": self.linkedin,
            "instagram": self.instagram,
        }
        nested = self.social.model_dump(exclude_none=True)
        return {**flat, **nested}


class ExperienceCreate(BaseModel):
    """Schema for adding an experience entry."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None

    @model_validator(mode="after")
    def drop_end_when_current(self) -> Self:
        if self.current:
            self.to_date = None
        return self


class EducationCreate(BaseModel):
    """Schema for adding an education entry."""

    model_config = ConfigDict(populate_by_name=True)

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    fieldofstudy: str = Field(..., min_length=1, max_length=255)
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None

    @model_validator(mode="after")
    def drop_end_when_current(self) -> Self:
        if self.current:
            self.to_date = None
        return self


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool
    description: str | None = None


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    school: str
    degree: str
    fieldofstudy: str | None = None
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool
    description: str | None = None


class ProfileOwner(BaseModel):
    """Public fields of the profile's owner."""

    id: UUID
    name: str | None = None
    avatar: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user": {
                    "id": "456e4567-e89b-12d3-a456-426614174000",
                    "name": "Jane Doe",
                    "avatar": "https://www.gravatar.com/avatar/abc?s=200&r=pg&d=mm",
                },
                "status": "Developer",
                "skills": ["Python", "SQL"],
                "social": {"twitter": "https://twitter.com/jane"},
                "experience": [],
                "education": [],
                "date": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user: ProfileOwner
    status: str
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    skills: list[str]
    social: dict[str, str]
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    date: datetime


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class ProfileListResponse(BaseModel):
    """Schema for list of Profiles."""

    data: list[ProfileResponse]

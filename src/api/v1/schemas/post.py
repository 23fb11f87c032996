"""Pydantic schemas for Post API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a Post."""

    text: str = Field(..., min_length=1, max_length=5000)


class CommentCreate(BaseModel):
    """Schema for commenting on a Post."""

    text: str = Field(..., min_length=1, max_length=2000)


class LikeResponse(BaseModel):
    """Schema for a like record."""

    user: UUID


class CommentResponse(BaseModel):
    """Schema for a comment."""

    id: UUID
    user: UUID
    text: str
    name: str
    avatar: str
    date: datetime


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user": "456e4567-e89b-12d3-a456-426614174000",
                "text": "hello",
                "name": "Jane Doe",
                "avatar": "https://www.gravatar.com/avatar/abc?s=200&r=pg&d=mm",
                "likes": [],
                "comments": [],
                "date": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user: UUID
    text: str
    name: str
    avatar: str
    likes: list[LikeResponse]
    comments: list[CommentResponse]
    date: datetime


class PostDetailResponse(BaseModel):
    """Schema for single Post."""

    data: PostResponse


class PostListResponse(BaseModel):
    """Schema for list of Posts."""

    data: list[PostResponse]


class LikeListResponse(BaseModel):
    """Schema for a post's like set."""

    data: list[LikeResponse]


class CommentListResponse(BaseModel):
    """Schema for a post's comments."""

    data: list[CommentResponse]

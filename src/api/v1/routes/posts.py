"""Post API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_post_service
from api.v1.schemas.common import NOT_AUTHENTICATED, MessageResponse
from api.v1.schemas.post import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    LikeListResponse,
    LikeResponse,
    PostCreate,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
)
from core.exceptions import PostAlreadyLikedError, PostNotLikedError
from domain.entities.post import Post
from domain.services.collection_editor import LikeResult
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"], responses=NOT_AUTHENTICATED)


def _likes(post: Post) -> list[LikeResponse]:
    return [LikeResponse(user=like.user_id) for like in post.likes]


def _comments(post: Post) -> list[CommentResponse]:
    return [
        CommentResponse(
            id=c.id,
            user=c.user_id,
            text=c.text,
            name=c.name,
            avatar=c.avatar,
            date=c.date,
        )
        for c in post.comments
    ]


def _to_response(post: Post) -> PostResponse:
    return PostResponse(
        id=post.id,
        user=post.user_id,
        text=post.text,
        name=post.name,
        avatar=post.avatar,
        likes=_likes(post),
        comments=_comments(post),
        date=post.date,
    )


@router.post(
    "",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
async def create_post(
    body: PostCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Create a post as the authenticated user."""
    post = await service.create(user.id, body.text)
    return PostDetailResponse(data=_to_response(post))


@router.get(
    "",
    response_model=PostListResponse,
    summary="List all posts",
)
async def list_posts(
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostListResponse:
    """Get every post, newest first."""
    posts = await service.get_all()
    return PostListResponse(data=[_to_response(p) for p in posts])


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Get a post",
    responses={404: {"description": "Post not found"}},
)
async def get_post(
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Get a single post by ID."""
    post = await service.get_by_id(post_id)
    return PostDetailResponse(data=_to_response(post))


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Post not found"},
    },
)
async def delete_post(
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete a post. Only its author may do this."""
    await service.delete(post_id, user.id)
    return MessageResponse(message="Post removed")


@router.put(
    "/like/{post_id}",
    response_model=LikeListResponse,
    summary="Like a post",
    responses={
        404: {"description": "Post not found"},
        409: {"description": "Post already liked"},
    },
)
async def like_post(
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> LikeListResponse:
    """Add the caller to the post's likes."""
    post, result = await service.like(post_id, user.id)
    if result is LikeResult.ALREADY_LIKED:
        raise PostAlreadyLikedError(str(post_id))
    return LikeListResponse(data=_likes(post))


@router.put(
    "/unlike/{post_id}",
    response_model=LikeListResponse,
    summary="Unlike a post",
    responses={
        404: {"description": "Post not found"},
        409: {"description": "Post has not yet been liked"},
    },
)
async def unlike_post(
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> LikeListResponse:
    """Remove the caller from the post's likes."""
    post, result = await service.unlike(post_id, user.id)
    if result is LikeResult.NOT_LIKED:
        raise PostNotLikedError(str(post_id))
    return LikeListResponse(data=_likes(post))


@router.post(
    "/comment/{post_id}",
    response_model=CommentListResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={404: {"description": "Post not found"}},
)
async def add_comment(
    post_id: UUID,
    body: CommentCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> CommentListResponse:
    """Prepend a comment to a post and return all comments."""
    post = await service.add_comment(post_id, user.id, body.text)
    return CommentListResponse(data=_comments(post))


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=CommentListResponse,
    summary="Delete a comment",
    responses={
        403: {"description": "Neither the comment's nor the post's author"},
        404: {"description": "Post or comment not found"},
    },
)
async def remove_comment(
    post_id: UUID,
    comment_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> CommentListResponse:
    """Remove a comment and return the remaining ones."""
    post = await service.remove_comment(post_id, comment_id, user.id)
    return CommentListResponse(data=_comments(post))

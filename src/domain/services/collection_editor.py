"""Edits on the ordered sub-collections embedded in profiles and posts.

Parents are frozen dataclasses holding tuples, so every edit returns a new
parent snapshot and leaves its input untouched. When an edit turns out to
be a no-op the original parent object is returned as-is, which lets the
caller skip the write. Nothing here touches the store.
"""

from dataclasses import replace
from enum import StrEnum
from typing import Any, TypeVar
from uuid import UUID, uuid4

from domain.entities.post import Like, Post

P = TypeVar("P")
E = TypeVar("E")


class LikeResult(StrEnum):
    """Outcome of a like/unlike request."""

    ADDED = "added"
    ALREADY_LIKED = "already_liked"
    REMOVED = "removed"
    NOT_LIKED = "not_liked"


def _entries(parent: Any, collection: str) -> tuple[Any, ...]:
    entries = getattr(parent, collection)
    if not isinstance(entries, tuple):
        raise TypeError(f"{type(parent).__name__}.{collection} is not a sub-collection")
    return entries


def insert_front(parent: P, collection: str, entry: E) -> tuple[P, E]:
    """Give ``entry`` a fresh id and prepend it to ``parent.<collection>``.

    No duplicate detection is done: identical entries may coexist.

    Returns:
        The new parent snapshot and the entry as stored.
    """
    entries = _entries(parent, collection)
    stored = replace(entry, id=uuid4())  # type: ignore[type-var]
    return replace(parent, **{collection: (stored, *entries)}), stored  # type: ignore[type-var]


def remove_by_id(parent: P, collection: str, entry_id: UUID) -> tuple[P, bool]:
    """Drop the entry with ``entry_id``, keeping the others in order.

    Returns:
        ``(new_parent, True)`` when an entry was removed, otherwise
        ``(parent, False)`` with the very same parent object.
    """
    entries = _entries(parent, collection)
    remaining = tuple(e for e in entries if e.id != entry_id)
    if len(remaining) == len(entries):
        return parent, False
    return replace(parent, **{collection: remaining}), True  # type: ignore[type-var]


def toggle_like(post: Post, user_id: UUID) -> tuple[Post, LikeResult]:
    """Add ``user_id`` to the like set unless it is already there."""
    if post.liked_by(user_id):
        return post, LikeResult.ALREADY_LIKED
    return replace(post, likes=(Like(user_id=user_id), *post.likes)), LikeResult.ADDED


def unlike(post: Post, user_id: UUID) -> tuple[Post, LikeResult]:
    """Remove the single like record held by ``user_id``, if any."""
    if not post.liked_by(user_id):
        return post, LikeResult.NOT_LIKED
    likes = tuple(like for like in post.likes if like.user_id != user_id)
    return replace(post, likes=likes), LikeResult.REMOVED


def strip_user(post: Post, user_id: UUID) -> Post:
    """Remove every like and comment left by ``user_id``.

    Returns the same object when the user left nothing on the post.
    """
    likes = tuple(like for like in post.likes if like.user_id != user_id)
    comments = tuple(c for c in post.comments if c.user_id != user_id)
    if len(likes) == len(post.likes) and len(comments) == len(post.comments):
        return post
    return replace(post, likes=likes, comments=comments)

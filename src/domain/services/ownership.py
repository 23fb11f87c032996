"""Ownership rules deciding who may mutate which resource.

All predicates are pure. Callers check before mutating and use
``require`` to stop with a generic forbidden error that says nothing about
the target beyond what the caller could already read.
"""

from uuid import UUID

from core.exceptions import AuthorizationError
from domain.entities.post import Comment, Post
from domain.entities.profile import Profile


def may_mutate_profile(identity_id: UUID, profile: Profile) -> bool:
    """Only the owner may change or delete a profile."""
    return profile.user_id == identity_id


def may_remove_profile_entry(identity_id: UUID, profile: Profile) -> bool:
    """Experience/education entries follow their parent profile's owner."""
    return may_mutate_profile(identity_id, profile)


def may_delete_post(identity_id: UUID, post: Post) -> bool:
    """Only the author may delete a post."""
    return post.user_id == identity_id


def may_interact_with_post(identity_id: UUID, post: Post) -> bool:
    """Any verified identity may like, unlike or comment."""
    return True


def may_delete_comment(identity_id: UUID, post: Post, comment: Comment) -> bool:
    """The comment's author and the post's author may both remove a comment."""
    return identity_id in (comment.user_id, post.user_id)


def require(allowed: bool) -> None:
    """Raise the generic forbidden error unless ``allowed``."""
    if not allowed:
        raise AuthorizationError()

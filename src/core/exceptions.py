"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    EXPERIENCE_NOT_FOUND = "EXPERIENCE_NOT_FOUND"
    EDUCATION_NOT_FOUND = "EDUCATION_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    POST_ALREADY_LIKED = "POST_ALREADY_LIKED"
    POST_NOT_LIKED = "POST_NOT_LIKED"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"

    # Store errors (503)
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class InvalidTokenError(AuthenticationError):
    """Token signature or claims are not acceptable."""

    def __init__(self, message: str = "Token is not valid") -> None:
        super().__init__(message=message, error_code=ErrorCode.INVALID_TOKEN)


class ExpiredTokenError(AuthenticationError):
    """Token lifetime has elapsed."""

    def __init__(self) -> None:
        super().__init__(message="Token has expired", error_code=ErrorCode.TOKEN_EXPIRED)


class InvalidCredentialsError(AuthenticationError):
    """Email/password pair did not match."""

    def __init__(self) -> None:
        super().__init__(
            message="Invalid credentials",
            error_code=ErrorCode.INVALID_CREDENTIALS,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "User not authorized") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class UserNotFoundError(AppException):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, user_id: str = "") -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="There is no profile for this user",
            status_code=404,
            details={"user_id": user_id} if user_id else None,
        )


class PostNotFoundError(AppException):
    """Post not found."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_FOUND,
            message=f"Post not found: {post_id}",
            status_code=404,
            details={"post_id": post_id},
        )


class CommentNotFoundError(AppException):
    """Comment not found on a post."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.COMMENT_NOT_FOUND,
            message="Comment does not exist",
            status_code=404,
            details={"comment_id": comment_id},
        )


class ExperienceNotFoundError(AppException):
    """Experience entry not found on the caller's profile."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.EXPERIENCE_NOT_FOUND,
            message=f"Experience entry not found: {entry_id}",
            status_code=404,
            details={"experience_id": entry_id},
        )


class EducationNotFoundError(AppException):
    """Education entry not found on the caller's profile."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.EDUCATION_NOT_FOUND,
            message=f"Education entry not found: {entry_id}",
            status_code=404,
            details={"education_id": entry_id},
        )


class UserAlreadyExistsError(AppException):
    """A user with this email is already registered."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.USER_ALREADY_EXISTS,
            message="User already exists",
            status_code=409,
        )


class PostAlreadyLikedError(AppException):
    """The caller already likes this post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_ALREADY_LIKED,
            message="Post already liked",
            status_code=409,
            details={"post_id": post_id},
        )


class PostNotLikedError(AppException):
    """The caller has not liked this post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_LIKED,
            message="Post has not yet been liked",
            status_code=409,
            details={"post_id": post_id},
        )


class ConcurrentModificationError(AppException):
    """A conditional write kept losing to concurrent writers."""

    def __init__(self, resource: str, resource_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.CONCURRENT_MODIFICATION,
            message=f"The {resource} was modified concurrently, please retry",
            status_code=409,
            details={f"{resource}_id": resource_id},
        )


class StoreUnavailableError(AppException):
    """The persistent store could not be reached."""

    def __init__(self, message: str = "Storage is temporarily unavailable") -> None:
        super().__init__(
            error_code=ErrorCode.STORE_UNAVAILABLE,
            message=message,
            status_code=503,
        )


class StaleVersionError(Exception):
    """Raised by repositories when a versioned write matched no row."""

    def __init__(self, entity_id: str, expected_version: int) -> None:
        self.entity_id = entity_id
        self.expected_version = expected_version
        super().__init__(f"Stale version {expected_version} for {entity_id}")

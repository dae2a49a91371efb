"""Service-layer errors.

Services raise these instead of ``HTTPException`` so they can be used outside
a request. ``src.main`` maps each one to its HTTP status code.
"""

from fastapi import status


class BlogError(Exception):
    """Base class for errors that are safe to report to the client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BlogError):
    """Missing, malformed or out-of-range input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"

    def __init__(self, message: str | None = None, field: str | None = None):
        super().__init__(message)
        self.field = field


class ConflictError(BlogError):
    """A uniqueness constraint would be violated."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class AuthenticationError(BlogError):
    """Missing, invalid or expired credentials, or an unknown account."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid authentication credentials"


class AuthorizationError(BlogError):
    """Authenticated, but not allowed to perform the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You don't have permission to perform this action"


class NotFoundError(BlogError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(BlogError):
    """Unexpected failure such as the database being unavailable."""

"""Typed errors raised by services and mapped to HTTP responses in one place."""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class BlogError(HTTPException):
    """Base exception for every service-level failure.

    Carries a machine readable ``code`` next to the HTTP status so the
    exception handler in ``blog_backend.main`` can render the
    ``{"status", "message", "code"}`` envelope.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"
    default_detail: str = "Internal server error"

    def __init__(
        self,
        detail: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class ValidationError(BlogError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    default_detail = "Validation error"

    def __init__(self, detail: Optional[str] = None, errors: Optional[list[Any]] = None):
        super().__init__(detail)
        self.errors = errors or []


class UnauthorizedError(BlogError):
    """Missing or invalid credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"
    default_detail = "Could not validate credentials"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class InvalidTokenError(UnauthorizedError):
    """Token failed signature, format or expiry checks."""

    code = "INVALID_TOKEN"
    default_detail = "Invalid token"


class ForbiddenError(BlogError):
    """Authenticated, but not owner/admin, or content not yet published."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    default_detail = "Forbidden"


class NotFoundError(BlogError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    default_detail = "Resource not found"


class ConflictError(BlogError):
    """Unique constraint violation (duplicate name or email)."""

    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"
    default_detail = "Resource already exists"


class InternalError(BlogError):
    pass


__all__ = [
    "BlogError",
    "ValidationError",
    "UnauthorizedError",
    "InvalidTokenError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
]

"""
Custom exception classes for the Urban Listings API.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        errors: Optional[Dict[str, List[str]]] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code
        self.errors = errors


class BadRequestError(APIException):
    """Malformed input or business-rule violation."""

    def __init__(self, detail: str, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="BAD_REQUEST",
            errors=errors
        )


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, resource: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
            error_code="NOT_FOUND"
        )


class UnauthorizedError(APIException):
    """Authentication required exception."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class ForbiddenError(APIException):
    """Access forbidden exception."""

    def __init__(self, detail: str = "Access forbidden"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN"
        )


class ConflictError(APIException):
    """Resource conflict exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code="CONFLICT"
        )


# Authentication specific exceptions
class InvalidCredentialsError(UnauthorizedError):
    """Invalid login credentials exception."""

    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(detail)


class InvalidTokenError(UnauthorizedError):
    """Invalid or expired JWT token exception."""

    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(detail)


class InsufficientPermissionsError(ForbiddenError):
    """Authenticated, but the role is not allowed."""

    def __init__(self, detail: str = "Insufficient permissions"):
        super().__init__(detail)


# File upload exceptions
class FileUploadError(BadRequestError):
    """File upload error exception."""

    def __init__(self, detail: str):
        super().__init__(detail)

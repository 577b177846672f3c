"""
Utility modules for the Urban Listings API.
"""

from .auth import (
    create_access_token,
    create_refresh_token,
    verify_access_token,
    verify_refresh_token,
    hash_password,
    verify_password,
    TokenPayload
)
from .exceptions import (
    APIException,
    BadRequestError,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    ConflictError,
    InvalidCredentialsError,
    InvalidTokenError,
    InsufficientPermissionsError,
    FileUploadError
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    # Auth utilities
    "create_access_token",
    "create_refresh_token",
    "verify_access_token",
    "verify_refresh_token",
    "hash_password",
    "verify_password",
    "TokenPayload",

    # Exceptions
    "APIException",
    "BadRequestError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "InsufficientPermissionsError",
    "FileUploadError",
]

"""
FastAPI dependency injection utilities for authentication, services and request bodies.
Provides reusable dependencies for route protection and identity extraction.
"""

from typing import Any, Dict, List, Optional, Tuple
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile as StarletteUploadFile
from app.database import get_db
from app.models.user import UserRole
from app.services.auth import AuthService
from app.services.property import PropertyService
from app.services.area import AreaService
from app.services.favorite import FavoriteService
from app.services.inquiry import ContactInquiryService
from app.services.upload import UploadService
from app.utils.auth import verify_access_token
from app.utils.exceptions import (
    BadRequestError,
    UnauthorizedError,
    InvalidTokenError,
    InsufficientPermissionsError
)
import json
import logging
import uuid

logger = logging.getLogger(__name__)


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


class CurrentUser:
    """Identity taken from a verified access token; no database lookup."""

    def __init__(self, id: uuid.UUID, email: str, role: UserRole):
        self.id = id
        self.email = email
        self.role = role

    def __repr__(self) -> str:
        return f"<CurrentUser(id={self.id}, role={self.role.value})>"


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    return PropertyService(db)


async def get_area_service(db: AsyncSession = Depends(get_db)) -> AreaService:
    return AreaService(db)


async def get_favorite_service(db: AsyncSession = Depends(get_db)) -> FavoriteService:
    return FavoriteService(db)


async def get_inquiry_service(db: AsyncSession = Depends(get_db)) -> ContactInquiryService:
    return ContactInquiryService(db)


def get_upload_service() -> UploadService:
    return UploadService()


def _identity_from_token(token: str) -> Optional[CurrentUser]:
    payload = verify_access_token(token)
    if payload is None:
        return None

    role = UserRole.parse(payload.role)
    try:
        user_id = uuid.UUID(payload.user_id)
    except ValueError:
        return None
    if role is None:
        return None

    return CurrentUser(id=user_id, email=payload.email, role=role)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    """
    Get current authenticated identity from the bearer token.

    Raises:
        UnauthorizedError: If no bearer token was sent
        InvalidTokenError: If the token does not verify
    """
    if not credentials or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError("Missing or invalid authorization header")

    current_user = _identity_from_token(credentials.credentials)
    if current_user is None:
        raise InvalidTokenError()

    return current_user


def require_roles(*roles: UserRole):
    """
    Create a dependency that admits only the given roles.

    Args:
        roles: Allowed user roles

    Returns:
        Dependency function
    """
    allowed = set(roles)

    async def role_dependency(
        current_user: CurrentUser = Depends(get_current_user)
    ) -> CurrentUser:
        if current_user.role not in allowed:
            logger.warning(f"Role {current_user.role.value} rejected for user {current_user.id}")
            raise InsufficientPermissionsError()
        return current_user

    return role_dependency


# Optional authentication dependency (for public endpoints that record the caller when known)
async def get_optional_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[CurrentUser]:
    """
    Get current identity if a valid token is provided, otherwise None.
    Invalid tokens are treated as anonymous.
    """
    if not credentials:
        return None
    return _identity_from_token(credentials.credentials)


def _is_upload(value: Any) -> bool:
    return isinstance(value, StarletteUploadFile)


async def read_payload(request: Request) -> Tuple[Dict[str, Any], List[StarletteUploadFile]]:
    """
    Read a JSON or multipart/form body.

    Returns:
        Tuple of (fields, uploaded files under the "images" key). Form fields
        sent more than once become lists and blank form values are dropped.

    Raises:
        BadRequestError: If a JSON body cannot be parsed into an object
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("multipart/form-data") or content_type.startswith("application/x-www-form-urlencoded"):
        form = await request.form()
        fields: Dict[str, Any] = {}
        files: List[StarletteUploadFile] = []
        for key in form.keys():
            values = form.getlist(key)
            if key == "images" and any(_is_upload(v) for v in values):
                files.extend(v for v in values if _is_upload(v))
                continue
            values = [v for v in values if not _is_upload(v) and v != ""]
            if not values:
                continue
            fields[key] = values if len(values) > 1 else values[0]
        return fields, files

    body = await request.body()
    if not body:
        return {}, []
    try:
        data = json.loads(body)
    except ValueError:
        raise BadRequestError("Invalid JSON body")
    if not isinstance(data, dict):
        raise BadRequestError("Request body must be a JSON object")
    return data, []


def as_list(value: Any) -> List[Any]:
    """Normalise a field that may arrive once, several times or as a JSON array string."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, str) and value.strip().startswith("["):
        try:
            parsed = json.loads(value)
        except ValueError:
            return [value]
        return parsed if isinstance(parsed, list) else [value]
    return [value]

"""
Authentication utilities for JWT token management and password hashing.
Provides access/refresh token signing and verification and bcrypt hashing.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext
from app.config import settings
import logging
import uuid

logger = logging.getLogger(__name__)


# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds
)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenPayload:
    """Verified JWT claims."""

    def __init__(self, user_id: str, email: str, role: str, exp: datetime):
        self.user_id = user_id
        self.email = email
        self.role = role
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """Create TokenPayload from decoded claims."""
        return cls(
            user_id=data["sub"],
            email=data["email"],
            role=data["role"],
            exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc)
        )


def _encode(payload: Dict[str, Any], token_type: str, secret: str, lifetime: timedelta) -> str:
    issued_at = datetime.now(timezone.utc)
    to_encode = {
        "sub": str(payload["user_id"]),
        "email": payload["email"],
        "role": str(getattr(payload["role"], "value", payload["role"])),
        "type": token_type,
        "iat": issued_at,
        "exp": issued_at + lifetime,
        # Two tokens minted in the same second must still differ
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(to_encode, secret, algorithm=settings.jwt_algorithm)


def create_access_token(payload: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a short-lived access token.

    Args:
        payload: Mapping with user_id, email and role
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    return _encode(payload, ACCESS_TOKEN_TYPE, settings.jwt_secret_key, lifetime)


def create_refresh_token(payload: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a long-lived refresh token, signed with its own secret.

    Args:
        payload: Mapping with user_id, email and role
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT refresh token string
    """
    lifetime = expires_delta or timedelta(days=settings.refresh_token_expire_days)
    return _encode(payload, REFRESH_TOKEN_TYPE, settings.jwt_refresh_secret_key, lifetime)


def _verify(token: Optional[str], token_type: str, secret: str) -> Optional[TokenPayload]:
    if not token:
        return None

    try:
        payload = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug(f"Rejected {token_type} token: {e}")
        return None

    if payload.get("type") != token_type:
        return None

    if not payload.get("sub") or not payload.get("email") or not payload.get("role") or "exp" not in payload:
        return None

    try:
        return TokenPayload.from_dict(payload)
    except (KeyError, TypeError, ValueError, OverflowError):
        return None


def verify_access_token(token: Optional[str]) -> Optional[TokenPayload]:
    """
    Verify and decode an access token.

    Returns:
        TokenPayload if valid, None for any malformed, expired or foreign token
    """
    return _verify(token, ACCESS_TOKEN_TYPE, settings.jwt_secret_key)


def verify_refresh_token(token: Optional[str]) -> Optional[TokenPayload]:
    """
    Verify and decode a refresh token.

    Returns:
        TokenPayload if valid, None otherwise
    """
    return _verify(token, REFRESH_TOKEN_TYPE, settings.jwt_refresh_secret_key)


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify password against hash.

    Returns:
        True if password matches, False otherwise (including unreadable hashes)
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


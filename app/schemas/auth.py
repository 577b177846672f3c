"""
Pydantic schemas for authentication requests.
Format and policy checks live in the service so their messages stay uniform.
"""

from pydantic import Field
from typing import Optional
from app.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """Schema for account registration."""

    email: str = Field(..., examples=["agent@example.com"])
    password: str = Field(..., examples=["Secur3P@ss"])
    first_name: str = Field(..., min_length=1, max_length=100, examples=["Ada"])
    last_name: str = Field(..., min_length=1, max_length=100, examples=["Obi"])
    phone: Optional[str] = Field(None, max_length=30, examples=["08012345678"])


class LoginRequest(CamelModel):
    """Schema for user login request."""

    email: str = Field(..., examples=["agent@example.com"])
    password: str = Field(..., examples=["Secur3P@ss"])


class RefreshTokenRequest(CamelModel):
    """Schema for token refresh request."""

    refresh_token: str = Field(..., description="Refresh token issued at login")


class ChangePasswordRequest(CamelModel):

    old_password: str
    new_password: str

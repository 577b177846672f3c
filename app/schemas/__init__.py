"""
Pydantic schemas for request validation and response documentation.
"""

# Envelope
from .common import (
    CamelModel,
    ErrorResponse,
    envelope,
)

# Authentication schemas
from .auth import (
    RegisterRequest,
    LoginRequest,
    RefreshTokenRequest,
    ChangePasswordRequest,
)

# Property schemas
from .property import (
    PropertyCreate,
    PropertyUpdate,
)

# Area schemas
from .area import (
    AreaCreate,
    AreaUpdate,
)

# Inquiry schemas
from .inquiry import (
    InquiryCreate,
    InquiryStatusUpdate,
)

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "envelope",

    # Authentication
    "RegisterRequest",
    "LoginRequest",
    "RefreshTokenRequest",
    "ChangePasswordRequest",

    # Property
    "PropertyCreate",
    "PropertyUpdate",

    # Area
    "AreaCreate",
    "AreaUpdate",

    # Inquiry
    "InquiryCreate",
    "InquiryStatusUpdate",
]

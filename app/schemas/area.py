"""
Pydantic schemas for area requests.
"""

from pydantic import Field, field_validator
from typing import List, Optional
from app.schemas.common import CamelModel


class AreaCreate(CamelModel):

    name: str = Field(..., min_length=1, max_length=255, examples=["Maitama"])
    description: Optional[str] = None
    image: Optional[str] = None
    images: Optional[List[str]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Area name is required and stored trimmed."""
        if not v.strip():
            raise ValueError("Area name is required")
        return v.strip()


class AreaUpdate(CamelModel):
    """Fields left out keep their current value."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = None
    images: Optional[List[str]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Area name cannot be empty")
        return v.strip() if v is not None else v

"""
Pydantic schemas for property requests.
Handles listing creation and partial updates.
"""

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from decimal import Decimal
import uuid
from app.models.property import PropertyCategory, PropertyType, PropertyStatus
from app.schemas.common import CamelModel


class PropertyCreate(CamelModel):
    """Schema for creating a new listing."""

    title: str = Field(..., min_length=1, max_length=255, examples=["3 Bedroom Flat in Jabi"])
    description: str = Field(..., min_length=1, examples=["Serviced flat close to Jabi Lake Mall."])
    category: PropertyCategory = Field(..., examples=["Rent"])
    property_type: PropertyType = Field(..., examples=["Flat"])
    price: Decimal = Field(..., ge=0, max_digits=15, decimal_places=2, examples=[3500000])
    address: str = Field(..., min_length=1, max_length=500)
    city: str = Field("Abuja", max_length=100)
    state: str = Field("FCT", max_length=100)
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    rooms: int = Field(0, ge=0)
    bathrooms: int = Field(0, ge=0)
    parking: int = Field(0, ge=0)
    water: bool = False
    electricity: str = Field("None", max_length=100)
    status: PropertyStatus = PropertyStatus.AVAILABLE
    featured: bool = False
    agent_fee: Decimal = Field(Decimal("0"), ge=0, max_digits=15, decimal_places=2)
    inspection_fee: Decimal = Field(Decimal("0"), ge=0, max_digits=15, decimal_places=2)
    area_id: uuid.UUID
    images: List[str] = Field(default_factory=list, description="Image URLs in display order")

    @field_validator('title', 'description', 'address')
    @classmethod
    def strip_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()


class PropertyUpdate(CamelModel):
    """
    Partial update of a listing.

    Only the fields listed here can change; unknown keys are rejected. When
    images is present, even as an empty list, it replaces the whole gallery.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[PropertyCategory] = None
    property_type: Optional[PropertyType] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=2)
    address: Optional[str] = Field(None, min_length=1, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    rooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    parking: Optional[int] = Field(None, ge=0)
    water: Optional[bool] = None
    electricity: Optional[str] = Field(None, max_length=100)
    status: Optional[PropertyStatus] = None
    featured: Optional[bool] = None
    agent_fee: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=2)
    inspection_fee: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=2)
    area_id: Optional[uuid.UUID] = None
    images: Optional[List[str]] = None


# Columns that may be cleared with an explicit null
NULLABLE_PROPERTY_FIELDS = {"latitude", "longitude"}

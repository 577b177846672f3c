"""
Property model for rental, sale and land listings.
Handles listing data with location, pricing, amenities and relationship management.
"""

from sqlalchemy import String, Text, Integer, Numeric, Boolean, Enum as SQLEnum, Index, ForeignKey, Uuid, inspect
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base, TimestampMixin
from decimal import Decimal
import enum
import uuid
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.area import Area
    from app.models.image import PropertyImage
    from app.models.favorite import Favorite
    from app.models.inquiry import ContactInquiry


class PropertyCategory(str, enum.Enum):
    """Listing category."""
    RENT = "Rent"
    SALE = "Sale"
    LAND = "Land"


class PropertyType(str, enum.Enum):
    """Kind of building on offer."""
    FLAT = "Flat"
    DUPLEX = "Duplex"
    HOUSE = "House"
    LAND = "Land"
    SELF_CONTAIN = "Self-Contain"


class PropertyStatus(str, enum.Enum):
    """Availability of a listing."""
    AVAILABLE = "Available"
    RENTED = "Rented"
    SOLD = "Sold"


def _enum_column(enum_class, name: str) -> SQLEnum:
    # Persist enum values ("Self-Contain"), not member names
    return SQLEnum(enum_class, name=name, values_callable=lambda e: [m.value for m in e])


def _decimal_to_float(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


class Property(TimestampMixin, Base):
    """
    Property model for managing listings.
    Every listing belongs to an owning agent and an area.
    """

    __tablename__ = "properties"

    # Basic property information
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property listing title"
    )

    slug: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="URL slug derived from the title at creation"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Detailed property description"
    )

    category: Mapped[PropertyCategory] = mapped_column(
        _enum_column(PropertyCategory, "property_category"),
        nullable=False,
        index=True
    )

    property_type: Mapped[PropertyType] = mapped_column(
        _enum_column(PropertyType, "property_type"),
        nullable=False,
        index=True
    )

    # Pricing information
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        nullable=False,
        index=True,
        comment="Asking price in local currency"
    )

    agent_fee: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        nullable=False,
        default=Decimal("0")
    )

    inspection_fee: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        nullable=False,
        default=Decimal("0")
    )

    # Location information
    address: Mapped[str] = mapped_column(String(500), nullable=False)

    city: Mapped[str] = mapped_column(String(100), nullable=False)

    state: Mapped[str] = mapped_column(String(100), nullable=False)

    latitude: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=10, scale=8),
        nullable=True,
        comment="Property latitude coordinate"
    )

    longitude: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=11, scale=8),
        nullable=True,
        comment="Property longitude coordinate"
    )

    # Specifications and amenities
    rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    parking: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    water: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    electricity: Mapped[str] = mapped_column(String(100), nullable=False, default="None")

    # Status and visibility
    status: Mapped[PropertyStatus] = mapped_column(
        _enum_column(PropertyStatus, "property_status"),
        nullable=False,
        default=PropertyStatus.AVAILABLE,
        index=True
    )

    featured: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True
    )

    # Ownership
    area_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("areas.id"),
        nullable=False,
        index=True
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="ID of the agent who listed this property"
    )

    # Relationships; owner and area always travel with the listing
    owner: Mapped["User"] = relationship(
        "User",
        back_populates="properties",
        lazy="selectin"
    )

    area: Mapped["Area"] = relationship(
        "Area",
        back_populates="properties",
        lazy="selectin"
    )

    images: Mapped[List["PropertyImage"]] = relationship(
        "PropertyImage",
        back_populates="property_rel",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PropertyImage.order"
    )

    favorites: Mapped[List["Favorite"]] = relationship(
        "Favorite",
        back_populates="property_rel",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    inquiries: Mapped[List["ContactInquiry"]] = relationship(
        "ContactInquiry",
        back_populates="property_rel",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, slug={self.slug}, price={self.price})>"

    def _is_loaded(self, attribute: str) -> bool:
        # Touching an unloaded relationship would trigger lazy IO on an async session
        return attribute not in inspect(self).unloaded

    def to_dict(self) -> dict:
        """
        Convert property to dictionary.

        Related owner, area and images are included only when they were
        loaded with the listing.

        Returns:
            Dictionary representation of property
        """
        result = {
            "id": str(self.id),
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "category": self.category.value,
            "propertyType": self.property_type.value,
            "price": _decimal_to_float(self.price),
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "latitude": _decimal_to_float(self.latitude),
            "longitude": _decimal_to_float(self.longitude),
            "rooms": self.rooms,
            "bathrooms": self.bathrooms,
            "parking": self.parking,
            "water": self.water,
            "electricity": self.electricity,
            "status": self.status.value,
            "featured": self.featured,
            "agentFee": _decimal_to_float(self.agent_fee),
            "inspectionFee": _decimal_to_float(self.inspection_fee),
            "areaId": str(self.area_id),
            "ownerId": str(self.owner_id),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

        if self._is_loaded("owner") and self.owner is not None:
            result["owner"] = self.owner.to_dict()

        if self._is_loaded("area") and self.area is not None:
            result["area"] = self.area.to_dict()

        if self._is_loaded("images"):
            result["images"] = [image.to_dict() for image in self.images]

        return result


# Composite index for the featured listing query
featured_status_index = Index(
    'idx_properties_featured_status',
    Property.featured,
    Property.status,
    Property.created_at.desc()
)

# Composite index for filtered browsing by area
area_category_index = Index(
    'idx_properties_area_category',
    Property.area_id,
    Property.category,
    Property.price
)

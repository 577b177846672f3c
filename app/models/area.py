"""
Area model for neighbourhood metadata.
"""

from sqlalchemy import String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base, TimestampMixin
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.property import Property


class Area(TimestampMixin, Base):
    """A named district that listings belong to."""

    __tablename__ = "areas"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    image: Mapped[str] = mapped_column(Text, nullable=False, default="", comment="Primary image URL")

    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list, comment="Ordered image URLs")

    properties: Mapped[List["Property"]] = relationship(
        "Property",
        back_populates="area"
    )

    def __repr__(self) -> str:
        return f"<Area(id={self.id}, slug={self.slug})>"

    def to_dict(self, property_count: Optional[int] = None) -> dict:
        result = {
            "id": str(self.id),
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "image": self.image,
            "images": list(self.images or []),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        if property_count is not None:
            result["propertyCount"] = property_count
        return result

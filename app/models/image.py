"""
PropertyImage model for listing image galleries.
"""

from sqlalchemy import Text, Integer, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.property import Property


class PropertyImage(Base):
    """
    PropertyImage model for uploaded listing images.
    Rows are removed by the database when their property is deleted.
    """

    __tablename__ = "property_images"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the property this image belongs to"
    )

    url: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Public URL of the stored image"
    )

    order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Display position within the gallery"
    )

    property_rel: Mapped["Property"] = relationship(
        "Property",
        back_populates="images"
    )

    def __repr__(self) -> str:
        """String representation of the property image."""
        return f"<PropertyImage(id={self.id}, property_id={self.property_id}, order={self.order})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "url": self.url,
            "order": self.order,
            "propertyId": str(self.property_id),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


# Gallery lookups always read a property's images in display order
property_images_order_index = Index(
    'idx_property_images_property_order',
    PropertyImage.property_id,
    PropertyImage.order
)

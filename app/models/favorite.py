"""
Favorite model linking users to listings they bookmarked.
"""

from sqlalchemy import ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.property import Property


class Favorite(Base):
    """A (user, property) bookmark; each pair exists at most once."""

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "property_id", name="uq_favorites_user_property"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    user: Mapped["User"] = relationship("User", back_populates="favorites")

    property_rel: Mapped["Property"] = relationship("Property", back_populates="favorites")

    def __repr__(self) -> str:
        return f"<Favorite(user_id={self.user_id}, property_id={self.property_id})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "propertyId": str(self.property_id),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

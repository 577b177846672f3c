"""
ContactInquiry model for messages sent about a listing.
"""

from sqlalchemy import String, Text, ForeignKey, Enum as SQLEnum, Uuid, inspect
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
import enum
import uuid
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.property import Property


class InquiryStatus(str, enum.Enum):
    """Follow-up state of an inquiry."""
    PENDING = "Pending"
    CONTACTED = "Contacted"
    CLOSED = "Closed"


class ContactInquiry(Base):
    """
    Inquiry about a property.
    Deleted with its property; the sender link is cleared when the user goes away.
    """

    __tablename__ = "contact_inquiries"

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    phone: Mapped[str] = mapped_column(String(30), nullable=False)

    message: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[InquiryStatus] = mapped_column(
        SQLEnum(InquiryStatus, name="inquiry_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=InquiryStatus.PENDING,
        index=True
    )

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Sender, when the inquiry was made while signed in"
    )

    property_rel: Mapped["Property"] = relationship("Property", back_populates="inquiries")

    user: Mapped[Optional["User"]] = relationship("User", back_populates="inquiries")

    def __repr__(self) -> str:
        return f"<ContactInquiry(id={self.id}, property_id={self.property_id}, status={self.status})>"

    def to_dict(self) -> dict:
        result = {
            "id": str(self.id),
            "email": self.email,
            "phone": self.phone,
            "message": self.message,
            "status": self.status.value,
            "propertyId": str(self.property_id),
            "userId": str(self.user_id) if self.user_id else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
        if "property_rel" not in inspect(self).unloaded and self.property_rel is not None:
            result["property"] = self.property_rel.to_dict()
        return result

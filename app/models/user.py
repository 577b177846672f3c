"""
User model with authentication and role management.
Handles user accounts for agents and administrators.
"""

from sqlalchemy import String, Text, Boolean, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base, TimestampMixin
import enum

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.property import Property
    from app.models.favorite import Favorite
    from app.models.inquiry import ContactInquiry


class UserRole(str, enum.Enum):
    """User role enumeration for role-based access control."""
    ADMIN = "admin"
    AGENT = "agent"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["UserRole"]:
        """Case-insensitive lookup; unknown values give None."""
        if value is None:
            return None
        try:
            return cls(str(value).lower())
        except ValueError:
            return None


class User(TimestampMixin, Base):
    """
    User model for authentication and authorization.
    Owns property listings, favorites and inquiries.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)

    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.AGENT,
        index=True,
        comment="User role for access control"
    )

    is_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False
    )

    refresh_token: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="The single refresh token currently accepted for this user"
    )

    # Relationships
    properties: Mapped[List["Property"]] = relationship(
        "Property",
        back_populates="owner",
        passive_deletes=True
    )

    favorites: Mapped[List["Favorite"]] = relationship(
        "Favorite",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    inquiries: Mapped[List["ContactInquiry"]] = relationship(
        "ContactInquiry",
        back_populates="user",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"

    def to_dict(self) -> dict:
        """
        Public projection of the user.
        Never includes the password hash or the stored refresh token.
        """
        return {
            "id": str(self.id),
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phone": self.phone,
            "role": self.role.value,
        }

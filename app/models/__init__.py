"""
Database models for the Urban Listings API.
Includes User, Property, PropertyImage, Area, Favorite and ContactInquiry models.
"""

from app.models.user import User, UserRole
from app.models.area import Area
from app.models.property import Property, PropertyCategory, PropertyType, PropertyStatus
from app.models.image import PropertyImage
from app.models.favorite import Favorite
from app.models.inquiry import ContactInquiry, InquiryStatus

# Export all models for easy importing
__all__ = [
    "User",
    "UserRole",
    "Area",
    "Property",
    "PropertyCategory",
    "PropertyType",
    "PropertyStatus",
    "PropertyImage",
    "Favorite",
    "ContactInquiry",
    "InquiryStatus",
]

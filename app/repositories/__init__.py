"""
Repository layer for data access operations.
Each repository wraps one model and takes the session at construction.
"""

from app.repositories.base import BaseRepository
from app.repositories.user import UserRepository
from app.repositories.area import AreaRepository
from app.repositories.property import PropertyRepository, PropertySearchFilters
from app.repositories.image import ImageRepository
from app.repositories.favorite import FavoriteRepository
from app.repositories.inquiry import InquiryRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "AreaRepository",
    "PropertyRepository",
    "PropertySearchFilters",
    "ImageRepository",
    "FavoriteRepository",
    "InquiryRepository",
]

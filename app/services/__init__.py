"""
Service layer for business logic implementation.
Contains services for authentication, listings, areas, favorites, inquiries, uploads and error handling.
"""

from .auth import AuthService
from .property import PropertyService
from .area import AreaService
from .favorite import FavoriteService
from .inquiry import ContactInquiryService
from .upload import UploadService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "PropertyService",
    "AreaService",
    "FavoriteService",
    "ContactInquiryService",
    "UploadService",
    "ErrorHandlerService"
]

"""
API route handlers for the Urban Listings API.
Provides organized routing for different API endpoints.
"""

from .auth import router as auth_router
from .properties import router as properties_router
from .areas import router as areas_router
from .favorites import router as favorites_router
from .inquiries import router as inquiries_router

__all__ = [
    "auth_router",
    "properties_router",
    "areas_router",
    "favorites_router",
    "inquiries_router",
]

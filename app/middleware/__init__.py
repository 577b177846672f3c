"""
Middleware package for the Urban Listings API.
"""

from .request_logging import RequestLoggingMiddleware

__all__ = [
    "RequestLoggingMiddleware",
]

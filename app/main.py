"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
import logging

from app.config import settings
from app.database import check_database_connection, close_db_connection, create_tables
from app.routers import auth_router, properties_router, areas_router, favorites_router, inquiries_router
from app.utils.exceptions import APIException
from app.services.error_handler import ErrorHandlerService
from app.middleware.request_logging import RequestLoggingMiddleware

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    db_connected = await check_database_connection()
    if not db_connected:
        logger.error("Failed to connect to database on startup")
    elif settings.is_development:
        # Development databases follow the models; other environments use migrate.py
        await create_tables()

    yield

    # Shutdown
    logger.info("Shutting down application")
    await close_db_connection()


# Create FastAPI application instance
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    REST backend for a real-estate listing platform.

    ## Features

    * **Listings**: create, browse, filter and manage rental, sale and land listings
    * **Areas**: neighbourhood pages with images and listing counts
    * **Favorites**: per-user bookmarks
    * **Inquiries**: contact requests about a listing
    * **Authentication**: JWT access and refresh tokens with role-based access control

    ## Authentication

    Obtain tokens from `/api/auth/login`, then send `Authorization: Bearer <accessToken>`.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Authentication", "description": "Accounts and token management"},
        {"name": "Properties", "description": "Listing management and search"},
        {"name": "Areas", "description": "Neighbourhood metadata"},
        {"name": "Favorites", "description": "User bookmarks"},
        {"name": "Inquiries", "description": "Contact requests about listings"},
        {"name": "Health", "description": "Liveness and readiness probes"},
    ],
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Processing-Time"],
)

# Add request logging middleware; a full property upload is the largest legal body
app.add_middleware(
    RequestLoggingMiddleware,
    max_request_size=settings.max_file_size * settings.max_property_images + 1024 * 1024,
    enable_request_logging=not settings.is_testing
)

# Include API routers
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(properties_router, prefix=settings.api_prefix)
app.include_router(areas_router, prefix=settings.api_prefix)
app.include_router(favorites_router, prefix=settings.api_prefix)
app.include_router(inquiries_router, prefix=settings.api_prefix)

# Uploaded images
app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions with structured error responses."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors with per-field messages."""
    return ErrorHandlerService.handle_validation_error(exc.errors(), request)


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
    """Handle schema validation of form and JSON bodies parsed inside routes."""
    return ErrorHandlerService.handle_validation_error(exc.errors(), request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors with appropriate error responses."""
    return ErrorHandlerService.handle_database_error(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle framework HTTP exceptions, including unknown routes."""
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with secure error responses."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Liveness probe. Does not touch the database.
    """
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@app.get("/health/db", tags=["Health"])
async def database_health_check():
    """
    Readiness probe; 503 when the database cannot be reached.
    """
    if not await check_database_connection():
        return JSONResponse(
            status_code=503,
            content={"status": "UNAVAILABLE", "database": "disconnected"}
        )

    return {"status": "OK", "database": "connected"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

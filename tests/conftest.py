"""
Test configuration and fixtures for the Urban Listings API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os
import tempfile

# Settings are read once at import time, so the environment is prepared first
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-access-secret"
os.environ["JWT_REFRESH_SECRET_KEY"] = "test-refresh-secret"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="urban-listings-uploads-")

import io
import uuid
import pytest
from decimal import Decimal
from typing import AsyncGenerator, Dict, List, Optional
from httpx import AsyncClient, ASGITransport
from PIL import Image
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.main import app as fastapi_app
from app.database import Base, get_db, enable_sqlite_foreign_keys
from app.models.user import User, UserRole
from app.models.area import Area
from app.models.property import Property, PropertyCategory, PropertyType, PropertyStatus
from app.repositories.user import UserRepository
from app.repositories.area import AreaRepository
from app.repositories.property import PropertyRepository
from app.repositories.image import ImageRepository
from app.utils.auth import create_access_token, hash_password
from app.utils.validators import generate_slug


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEFAULT_PASSWORD = "Passw0rd!"


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Async test client; every request gets its own session on the test database."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://test") as client:
        yield client

    fastapi_app.dependency_overrides.clear()


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    async def create_user(
        db: AsyncSession,
        email: Optional[str] = None,
        password: str = DEFAULT_PASSWORD,
        first_name: str = "Test",
        last_name: str = "Agent",
        phone: Optional[str] = "08012345678",
        role: UserRole = UserRole.AGENT
    ) -> User:
        """Create a test user in the database."""
        return await UserRepository(db).create({
            "email": email or f"user{uuid.uuid4().hex[:8]}@example.com",
            "hashed_password": hash_password(password),
            "first_name": first_name,
            "last_name": last_name,
            "phone": phone,
            "role": role,
        })


class AreaFactory:
    """Factory for creating test areas."""

    @staticmethod
    async def create_area(
        db: AsyncSession,
        name: Optional[str] = None,
        description: str = "A quiet district",
        image: str = "",
        images: Optional[List[str]] = None
    ) -> Area:
        name = name or f"Area {uuid.uuid4().hex[:6]}"
        return await AreaRepository(db).create({
            "name": name,
            "slug": generate_slug(name),
            "description": description,
            "image": image,
            "images": images or [],
        })


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        area_id: uuid.UUID,
        title: str = "Test Property",
        **overrides
    ) -> dict:
        """Request body for the create endpoint, camelCase like the API."""
        data = {
            "title": title,
            "description": "A beautiful test property",
            "category": PropertyCategory.RENT.value,
            "propertyType": PropertyType.FLAT.value,
            "price": 2500000,
            "address": "12 Test Close",
            "areaId": str(area_id),
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_property(
        db: AsyncSession,
        owner: User,
        area: Area,
        title: Optional[str] = None,
        price: Decimal = Decimal("2500000.00"),
        category: PropertyCategory = PropertyCategory.RENT,
        property_type: PropertyType = PropertyType.FLAT,
        status: PropertyStatus = PropertyStatus.AVAILABLE,
        featured: bool = False,
        images: Optional[List[str]] = None
    ) -> Property:
        """Create a test property in the database."""
        title = title or f"Test Property {uuid.uuid4().hex[:6]}"
        property_obj = await PropertyRepository(db).create({
            "title": title,
            "slug": generate_slug(title),
            "description": "A beautiful test property",
            "category": category,
            "property_type": property_type,
            "price": price,
            "address": "12 Test Close",
            "city": "Abuja",
            "state": "FCT",
            "status": status,
            "featured": featured,
            "area_id": area.id,
            "owner_id": owner.id,
        })
        if images:
            await ImageRepository(db).add_images(property_obj.id, images)
        return property_obj


# Common test fixtures
@pytest.fixture
async def test_agent(db_session: AsyncSession) -> User:
    """Create a test agent user."""
    return await UserFactory.create_user(db_session, email="agent@test.com", first_name="Ada")


@pytest.fixture
async def other_agent(db_session: AsyncSession) -> User:
    return await UserFactory.create_user(db_session, email="other@test.com", first_name="Bola")


@pytest.fixture
async def test_admin(db_session: AsyncSession) -> User:
    """Create a test admin user."""
    return await UserFactory.create_user(
        db_session,
        email="admin@test.com",
        first_name="Chidi",
        last_name="Admin",
        role=UserRole.ADMIN
    )


@pytest.fixture
async def test_area(db_session: AsyncSession) -> Area:
    return await AreaFactory.create_area(db_session, name="Jabi")


@pytest.fixture
async def test_property(db_session: AsyncSession, test_agent: User, test_area: Area) -> Property:
    """Create a test property with two images."""
    return await PropertyFactory.create_property(
        db_session,
        owner=test_agent,
        area=test_area,
        title="Lake View Flat",
        images=["http://test/uploads/properties/a.jpg", "http://test/uploads/properties/b.jpg"]
    )


# Utility functions for tests
def auth_headers(user: User) -> Dict[str, str]:
    """Bearer header carrying a fresh access token for user."""
    token = create_access_token({"user_id": user.id, "email": user.email, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


def make_image_bytes(image_format: str = "PNG") -> bytes:
    """A tiny real image in the given format."""
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buffer, format=image_format)
    return buffer.getvalue()

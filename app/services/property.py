"""
Property service for managing listings with business logic validation.
Handles CRUD operations, ownership checks, filtering and the featured feed.
"""

from typing import Optional, Dict, Any
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.property import PropertyRepository, PropertySearchFilters
from app.repositories.area import AreaRepository
from app.repositories.image import ImageRepository
from app.models.property import Property
from app.models.user import UserRole
from app.schemas.property import PropertyCreate, PropertyUpdate, NULLABLE_PROPERTY_FIELDS
from app.utils.validators import generate_slug, get_pagination_params, total_pages
from app.utils.exceptions import NotFoundError, ForbiddenError, ConflictError
import uuid
import logging

logger = logging.getLogger(__name__)

DEFAULT_FEATURED_LIMIT = 6
DUPLICATE_TITLE_MESSAGE = "Property with similar title already exists"


class PropertyService:
    """
    Property service for listing management.
    Agents edit their own listings and admins edit any; only owners delete.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.area_repo = AreaRepository(db_session)
        self.image_repo = ImageRepository(db_session)

    async def create_property(self, property_data: PropertyCreate, owner_id: uuid.UUID) -> Property:
        """
        Create a new listing owned by owner_id.

        Args:
            property_data: Listing fields plus image URLs in display order
            owner_id: ID of the creating agent

        Returns:
            Created property with images, area and owner loaded

        Raises:
            NotFoundError: If the area does not exist
            ConflictError: If the title maps to a slug already in use
        """
        if not await self.area_repo.exists(property_data.area_id):
            raise NotFoundError("Area")

        slug = generate_slug(property_data.title)
        if await self.property_repo.slug_exists(slug):
            logger.warning(f"Duplicate listing slug rejected: {slug}")
            raise ConflictError(DUPLICATE_TITLE_MESSAGE)

        fields = property_data.model_dump(exclude={"images"})
        try:
            property_obj = await self.property_repo.create({**fields, "slug": slug, "owner_id": owner_id})
        except IntegrityError:
            # Either the slug was taken or the area vanished since the checks above
            if not await self.area_repo.exists(property_data.area_id):
                raise NotFoundError("Area")
            raise ConflictError(DUPLICATE_TITLE_MESSAGE)

        if property_data.images:
            await self.image_repo.add_images(property_obj.id, property_data.images)

        logger.info(f"Property created by user {owner_id}: {property_obj.title} (ID: {property_obj.id})")
        return await self.property_repo.get_property_with_details(property_obj.id)

    async def get_properties(
        self,
        filters: PropertySearchFilters,
        page: Any = None,
        limit: Any = None
    ) -> Dict[str, Any]:
        """
        Filtered, paginated listings, newest first.

        Returns:
            Mapping with data, total, page, limit and totalPages
        """
        page, limit = get_pagination_params(page, limit)
        properties, total = await self.property_repo.search_properties(
            filters,
            skip=(page - 1) * limit,
            limit=limit
        )
        return {
            "data": properties,
            "total": total,
            "page": page,
            "limit": limit,
            "totalPages": total_pages(total, limit),
        }

    async def get_property_by_slug(self, slug: str) -> Property:
        property_obj = await self.property_repo.get_by_slug(slug)
        if not property_obj:
            raise NotFoundError("Property")
        return property_obj

    async def get_property_by_id(self, property_id: uuid.UUID) -> Property:
        """Listing with owner and area; the gallery is not loaded."""
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise NotFoundError("Property")
        return property_obj

    async def update_property(
        self,
        property_id: uuid.UUID,
        user_id: uuid.UUID,
        user_role: UserRole,
        update_data: PropertyUpdate
    ) -> Property:
        """
        Apply a partial update to a listing.

        The slug keeps its original value when the title changes. A present
        images field replaces the gallery, an absent one leaves it alone.

        Raises:
            NotFoundError: If the listing (or a new area) does not exist
            ForbiddenError: If the caller is neither owner nor admin
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise NotFoundError("Property")

        if property_obj.owner_id != user_id and user_role != UserRole.ADMIN:
            logger.warning(f"User {user_id} tried to edit property {property_id} owned by {property_obj.owner_id}")
            raise ForbiddenError("You can only edit your own properties")

        changes = {
            field: value
            for field, value in update_data.model_dump(exclude_unset=True, exclude={"images"}).items()
            if value is not None or field in NULLABLE_PROPERTY_FIELDS
        }

        if "area_id" in changes and not await self.area_repo.exists(changes["area_id"]):
            raise NotFoundError("Area")

        if changes:
            await self.property_repo.update(property_obj, changes)

        if "images" in update_data.model_fields_set:
            await self.image_repo.replace_images(property_id, update_data.images or [])

        logger.info(f"Property updated by user {user_id}: {property_id}")
        return await self.get_property_by_id(property_id)

    async def delete_property(self, property_id: uuid.UUID, owner_id: uuid.UUID) -> None:
        """
        Delete a listing; images, favorites and inquiries go with it.

        Raises:
            NotFoundError: If the listing does not exist
            ForbiddenError: If the caller does not own it (admins included)
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise NotFoundError("Property")

        if property_obj.owner_id != owner_id:
            logger.warning(f"User {owner_id} tried to delete property {property_id} owned by {property_obj.owner_id}")
            raise ForbiddenError("You can only delete your own properties")

        await self.property_repo.delete(property_id)
        logger.info(f"Property deleted by user {owner_id}: {property_id}")

    async def get_featured_properties(self, limit: Optional[int] = None):
        return await self.property_repo.get_featured(limit or DEFAULT_FEATURED_LIMIT)

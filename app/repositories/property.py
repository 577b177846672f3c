"""
Property repository for managing listings with filtering and pagination.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, func, desc
from sqlalchemy.orm import selectinload
from app.repositories.base import BaseRepository
from app.models.property import Property, PropertyCategory, PropertyType, PropertyStatus
from app.models.area import Area
from app.utils.validators import is_uuid
from typing import Optional, List, Tuple
from decimal import Decimal
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertySearchFilters:
    """Optional listing filters; None means the filter is not applied."""

    def __init__(
        self,
        category: Optional[PropertyCategory] = None,
        property_type: Optional[PropertyType] = None,
        status: Optional[PropertyStatus] = None,
        featured: Optional[bool] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        area: Optional[str] = None
    ):
        self.category = category
        self.property_type = property_type
        self.status = status
        self.featured = featured
        self.min_price = min_price
        self.max_price = max_price
        self.area = area


def detail_options() -> list:
    """Loader options for a listing with its gallery, owner and area."""
    return [
        selectinload(Property.images),
        selectinload(Property.owner),
        selectinload(Property.area),
    ]


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    Owner and area are always loaded; the gallery only on request.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def get_property_with_details(self, property_id: uuid.UUID) -> Optional[Property]:
        """
        Get property with all related data (owner, area and images).

        Returns:
            Property with loaded relationships or None if not found
        """
        return await self.get_by_id(property_id, options=detail_options())

    async def get_by_slug(self, slug: str) -> Optional[Property]:
        """Get a listing by slug with all related data."""
        return await self.get_by_field("slug", slug, options=detail_options())

    async def slug_exists(self, slug: str) -> bool:
        result = await self.db.execute(select(func.count(Property.id)).where(Property.slug == slug))
        return result.scalar() > 0

    def _build_filter_conditions(self, filters: PropertySearchFilters) -> Tuple[List, bool]:
        """
        Build SQLAlchemy filter conditions from search filters.

        Returns:
            Tuple of (conditions, whether the Area table must be joined)
        """
        conditions = []
        join_area = False

        if filters.category is not None:
            conditions.append(Property.category == filters.category)
        if filters.property_type is not None:
            conditions.append(Property.property_type == filters.property_type)
        if filters.status is not None:
            conditions.append(Property.status == filters.status)
        if filters.featured is not None:
            conditions.append(Property.featured == filters.featured)

        # Price range filters, both bounds inclusive
        if filters.min_price is not None:
            conditions.append(Property.price >= filters.min_price)
        if filters.max_price is not None:
            conditions.append(Property.price <= filters.max_price)

        # Area accepts either an id or a slug
        if filters.area:
            if is_uuid(filters.area):
                conditions.append(Property.area_id == uuid.UUID(filters.area))
            else:
                conditions.append(Area.slug == filters.area)
                join_area = True

        return conditions, join_area

    async def search_properties(
        self,
        filters: PropertySearchFilters,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[Property], int]:
        """
        Filter listings, newest first, with pagination.

        Args:
            filters: PropertySearchFilters instance with search criteria
            skip: Number of records to skip for pagination
            limit: Maximum number of records to return

        Returns:
            Tuple of (properties list, total count)
        """
        try:
            query = select(Property).options(*detail_options())
            count_query = select(func.count(Property.id))

            conditions, join_area = self._build_filter_conditions(filters)
            if join_area:
                query = query.join(Area, Property.area_id == Area.id)
                count_query = count_query.join(Area, Property.area_id == Area.id)
            if conditions:
                query = query.where(and_(*conditions))
                count_query = count_query.where(and_(*conditions))

            count_result = await self.db.execute(count_query)
            total_count = count_result.scalar()

            query = (
                query.order_by(desc(Property.created_at))
                .offset(skip)
                .limit(limit)
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            properties = result.scalars().all()

            logger.debug(f"Property search returned {len(properties)} of {total_count} total results")
            return list(properties), total_count
        except Exception as e:
            logger.error(f"Failed to search properties: {e}")
            raise

    async def get_featured(self, limit: int) -> List[Property]:
        """Featured, available listings, newest first."""
        try:
            query = (
                select(Property)
                .options(*detail_options())
                .where(
                    and_(
                        Property.featured.is_(True),
                        Property.status == PropertyStatus.AVAILABLE
                    )
                )
                .order_by(desc(Property.created_at))
                .limit(limit)
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to get featured properties: {e}")
            raise

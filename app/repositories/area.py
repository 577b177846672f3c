"""
Area repository for neighbourhood metadata.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from app.repositories.base import BaseRepository
from app.models.area import Area
from app.models.property import Property
from typing import List, Optional, Tuple
import uuid
import logging

logger = logging.getLogger(__name__)


class AreaRepository(BaseRepository[Area]):
    """Repository for areas and their listing counts."""

    def __init__(self, db: AsyncSession):
        super().__init__(Area, db)

    async def get_by_slug(self, slug: str) -> Optional[Area]:
        return await self.get_by_field("slug", slug)

    async def slug_exists(self, slug: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
        """True when another area already uses the slug."""
        query = select(func.count(Area.id)).where(Area.slug == slug)
        if exclude_id is not None:
            query = query.where(Area.id != exclude_id)
        result = await self.db.execute(query)
        return result.scalar() > 0

    async def count_properties(self, area_id: uuid.UUID) -> int:
        result = await self.db.execute(
            select(func.count(Property.id)).where(Property.area_id == area_id)
        )
        return result.scalar()

    async def get_all_with_counts(self) -> List[Tuple[Area, int]]:
        """
        All areas ordered by name, each paired with its listing count.
        """
        try:
            counts = (
                select(Property.area_id, func.count(Property.id).label("property_count"))
                .group_by(Property.area_id)
                .subquery()
            )
            query = (
                select(Area, func.coalesce(counts.c.property_count, 0))
                .outerjoin(counts, counts.c.area_id == Area.id)
                .order_by(Area.name)
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            rows = [(area, int(count)) for area, count in result.all()]
            logger.debug(f"Retrieved {len(rows)} areas")
            return rows
        except Exception as e:
            logger.error(f"Failed to list areas: {e}")
            raise


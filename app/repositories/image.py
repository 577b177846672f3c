"""
Repository for PropertyImage model operations.
"""

import uuid
from typing import List
from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.image import PropertyImage
from app.repositories.base import BaseRepository


class ImageRepository(BaseRepository[PropertyImage]):
    """Repository for PropertyImage database operations."""

    def __init__(self, db_session: AsyncSession):
        super().__init__(PropertyImage, db_session)

    async def get_by_property_id(self, property_id: uuid.UUID) -> List[PropertyImage]:
        """
        Get all images for a property in display order.
        """
        query = (
            select(PropertyImage)
            .where(PropertyImage.property_id == property_id)
            .order_by(PropertyImage.order.asc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count_by_property_id(self, property_id: uuid.UUID) -> int:
        query = select(func.count(PropertyImage.id)).where(PropertyImage.property_id == property_id)
        result = await self.db.execute(query)
        return result.scalar()

    async def add_images(self, property_id: uuid.UUID, urls: List[str]) -> List[PropertyImage]:
        """
        Attach images to a property; order follows the position in urls.
        """
        if not urls:
            return []
        return await self.bulk_create([
            {"property_id": property_id, "url": url, "order": index}
            for index, url in enumerate(urls)
        ])

    async def replace_images(self, property_id: uuid.UUID, urls: List[str]) -> List[PropertyImage]:
        """
        Replace a property's whole gallery in one transaction.
        An empty list leaves the property without images.
        """
        try:
            await self.db.execute(delete(PropertyImage).where(PropertyImage.property_id == property_id))
            self.db.add_all([
                PropertyImage(property_id=property_id, url=url, order=index)
                for index, url in enumerate(urls)
            ])
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return await self.get_by_property_id(property_id)

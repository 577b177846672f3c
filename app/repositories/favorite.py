"""
Favorite repository for user bookmarks.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, func, desc
from sqlalchemy.orm import selectinload
from app.repositories.base import BaseRepository
from app.models.favorite import Favorite
from app.models.property import Property
from typing import List, Optional, Tuple
import uuid
import logging

logger = logging.getLogger(__name__)


class FavoriteRepository(BaseRepository[Favorite]):

    def __init__(self, db: AsyncSession):
        super().__init__(Favorite, db)

    async def get_for_user(self, user_id: uuid.UUID, property_id: uuid.UUID) -> Optional[Favorite]:
        query = select(Favorite).where(
            and_(Favorite.user_id == user_id, Favorite.property_id == property_id)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_user_favorites(
        self,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[Favorite], int]:
        """
        A user's favorites, most recently added first, each with its listing.

        Returns:
            Tuple of (favorites list, total count)
        """
        try:
            count_result = await self.db.execute(
                select(func.count(Favorite.id)).where(Favorite.user_id == user_id)
            )
            total_count = count_result.scalar()

            query = (
                select(Favorite)
                .where(Favorite.user_id == user_id)
                .options(
                    selectinload(Favorite.property_rel).selectinload(Property.images),
                    selectinload(Favorite.property_rel).selectinload(Property.owner),
                    selectinload(Favorite.property_rel).selectinload(Property.area),
                )
                .order_by(desc(Favorite.created_at))
                .offset(skip)
                .limit(limit)
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            favorites = list(result.scalars().all())

            logger.debug(f"Retrieved {len(favorites)} of {total_count} favorites for user {user_id}")
            return favorites, total_count
        except Exception as e:
            logger.error(f"Failed to get favorites for user {user_id}: {e}")
            raise

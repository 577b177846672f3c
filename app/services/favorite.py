"""
Favorite service for user bookmarks.
"""

from typing import Any, Dict
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.favorite import FavoriteRepository
from app.repositories.property import PropertyRepository
from app.models.favorite import Favorite
from app.utils.validators import get_pagination_params, total_pages
from app.utils.exceptions import ConflictError, NotFoundError
import uuid
import logging

logger = logging.getLogger(__name__)


class FavoriteService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.favorite_repo = FavoriteRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def add_favorite(self, user_id: uuid.UUID, property_id: uuid.UUID) -> Favorite:
        """
        Bookmark a listing for a user.

        Raises:
            NotFoundError: If the listing does not exist
            ConflictError: If it is already bookmarked
        """
        if not await self.property_repo.exists(property_id):
            raise NotFoundError("Property")

        if await self.favorite_repo.get_for_user(user_id, property_id):
            raise ConflictError("Property already in favorites")

        try:
            favorite = await self.favorite_repo.create({"user_id": user_id, "property_id": property_id})
        except IntegrityError:
            if not await self.property_repo.exists(property_id):
                raise NotFoundError("Property")
            raise ConflictError("Property already in favorites")

        logger.info(f"User {user_id} favorited property {property_id}")
        return favorite

    async def remove_favorite(self, user_id: uuid.UUID, property_id: uuid.UUID) -> None:
        favorite = await self.favorite_repo.get_for_user(user_id, property_id)
        if not favorite:
            raise NotFoundError("Favorite")
        await self.favorite_repo.delete(favorite.id)
        logger.info(f"User {user_id} removed favorite {property_id}")

    async def get_user_favorites(self, user_id: uuid.UUID, page: Any = None, limit: Any = None) -> Dict[str, Any]:
        """
        The user's favorited listings, most recently added first.

        Returns:
            Mapping with data (properties), total, page, limit and totalPages
        """
        page, limit = get_pagination_params(page, limit)
        favorites, total = await self.favorite_repo.get_user_favorites(
            user_id,
            skip=(page - 1) * limit,
            limit=limit
        )
        return {
            "data": [favorite.property_rel for favorite in favorites],
            "total": total,
            "page": page,
            "limit": limit,
            "totalPages": total_pages(total, limit),
        }

    async def is_favorited(self, user_id: uuid.UUID, property_id: uuid.UUID) -> bool:
        return await self.favorite_repo.get_for_user(user_id, property_id) is not None

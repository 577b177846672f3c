"""
Area service for neighbourhood metadata.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.area import AreaRepository
from app.models.area import Area
from app.schemas.area import AreaUpdate
from app.utils.validators import generate_slug
from app.utils.exceptions import BadRequestError, NotFoundError
import uuid
import logging

logger = logging.getLogger(__name__)


def _duplicate_name(name: str) -> BadRequestError:
    return BadRequestError(f'Area with name "{name}" already exists')


class AreaService:
    """Creates, updates and looks up areas; lookups carry a propertyCount."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.area_repo = AreaRepository(db_session)

    async def _with_count(self, area: Area) -> Dict[str, Any]:
        return area.to_dict(property_count=await self.area_repo.count_properties(area.id))

    async def get_all_areas(self) -> List[Dict[str, Any]]:
        return [area.to_dict(property_count=count) for area, count in await self.area_repo.get_all_with_counts()]

    async def get_area_by_slug(self, slug: str) -> Dict[str, Any]:
        area = await self.area_repo.get_by_slug(slug)
        if not area:
            raise NotFoundError("Area")
        return await self._with_count(area)

    async def get_area_by_id(self, area_id: uuid.UUID) -> Dict[str, Any]:
        area = await self.area_repo.get_by_id(area_id)
        if not area:
            raise NotFoundError("Area")
        return await self._with_count(area)

    async def create_area(
        self,
        name: str,
        description: Optional[str] = None,
        image: Optional[str] = None,
        images: Optional[List[str]] = None
    ) -> Area:
        """
        Create an area with a slug derived from its name.

        Raises:
            BadRequestError: If another area already has the same slug
        """
        slug = generate_slug(name)
        if await self.area_repo.slug_exists(slug):
            logger.warning(f"Duplicate area rejected: {name}")
            raise _duplicate_name(name)

        try:
            area = await self.area_repo.create({
                "name": name,
                "slug": slug,
                "description": description or "",
                "image": image or "",
                "images": list(images or []),
            })
        except IntegrityError:
            raise _duplicate_name(name)

        logger.info(f"Area created: {area.name} (ID: {area.id})")
        return area

    async def update_area(self, area_id: uuid.UUID, update_data: AreaUpdate) -> Area:
        """
        Overwrite the provided fields; a new name also regenerates the slug.

        Raises:
            NotFoundError: If the area does not exist
            BadRequestError: If the new name collides with another area
        """
        area = await self.area_repo.get_by_id(area_id)
        if not area:
            raise NotFoundError("Area")

        changes = update_data.model_dump(exclude_unset=True, exclude_none=True)

        if "name" in changes:
            changes["slug"] = generate_slug(changes["name"])
            if await self.area_repo.slug_exists(changes["slug"], exclude_id=area_id):
                raise _duplicate_name(changes["name"])

        try:
            area = await self.area_repo.update(area, changes)
        except IntegrityError:
            raise _duplicate_name(changes.get("name", ""))

        logger.info(f"Area updated: {area_id}")
        return area

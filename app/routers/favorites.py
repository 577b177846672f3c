"""
Favorites API endpoints. All routes act on the authenticated caller's bookmarks.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional
import uuid
from app.schemas.common import ERROR_RESPONSES, envelope
from app.services.favorite import FavoriteService
from app.utils.dependencies import CurrentUser, get_current_user, get_favorite_service


router = APIRouter(prefix="/favorites", tags=["Favorites"], responses=ERROR_RESPONSES)


@router.post("/{property_id}", status_code=status.HTTP_201_CREATED, summary="Add favorite")
async def add_favorite(
    property_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
):
    """
    Bookmark a listing.

    Raises:
        NotFoundError: If the listing does not exist
        ConflictError: If it is already bookmarked
    """
    favorite = await favorite_service.add_favorite(current_user.id, property_id)
    return envelope("Property added to favorites", favorite.to_dict())


@router.delete("/{property_id}", status_code=status.HTTP_200_OK, summary="Remove favorite")
async def remove_favorite(
    property_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
):
    await favorite_service.remove_favorite(current_user.id, property_id)
    return envelope("Property removed from favorites")


@router.get("", status_code=status.HTTP_200_OK, summary="List my favorites")
async def list_favorites(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    current_user: CurrentUser = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
):
    result = await favorite_service.get_user_favorites(current_user.id, page=page, limit=limit)
    result["data"] = [property_obj.to_dict() for property_obj in result["data"]]
    return envelope("User favorites retrieved successfully", result)


@router.get("/{property_id}/check", status_code=status.HTTP_200_OK, summary="Is favorited")
async def check_favorite(
    property_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
):
    favorited = await favorite_service.is_favorited(current_user.id, property_id)
    return envelope("Favorite status retrieved successfully", {"favorited": favorited})

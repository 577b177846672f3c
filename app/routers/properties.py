"""
Property listing API endpoints.
Public browsing and lookups; authenticated creation, update and deletion with image uploads.
"""

from fastapi import APIRouter, Depends, Query, Request, status
from typing import Optional
from decimal import Decimal
import uuid
from app.config import settings
from app.models.property import PropertyCategory, PropertyType, PropertyStatus
from app.repositories.property import PropertySearchFilters
from app.schemas.common import ERROR_RESPONSES, envelope
from app.schemas.property import PropertyCreate, PropertyUpdate
from app.services.property import PropertyService
from app.services.upload import UploadService, PROPERTY_FOLDER
from app.utils.dependencies import (
    CurrentUser,
    as_list,
    get_current_user,
    get_property_service,
    get_upload_service,
    read_payload
)


router = APIRouter(prefix="/properties", tags=["Properties"], responses=ERROR_RESPONSES)


def _serialize_page(result: dict) -> dict:
    return {**result, "data": [property_obj.to_dict() for property_obj in result["data"]]}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    description="Create a listing from a multipart form (fields plus up to 10 'images' files) or a JSON body."
)
async def create_property(
    request: Request,
    current_user: CurrentUser = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service),
    upload_service: UploadService = Depends(get_upload_service)
):
    """
    Create a new property listing owned by the caller.

    Returns:
        Created property with images, area and owner

    Raises:
        NotFoundError: If the area does not exist
        ConflictError: If a listing with a similar title exists
        FileUploadError: If an uploaded file is rejected
    """
    fields, files = await read_payload(request)
    if "images" in fields:
        fields["images"] = as_list(fields["images"])

    # Validate the fields before anything is written to disk
    property_data = PropertyCreate.model_validate(fields)

    urls = []
    if files:
        urls = await upload_service.save_images(
            files,
            PROPERTY_FOLDER,
            str(request.base_url),
            settings.max_property_images
        )
        property_data = property_data.model_copy(update={"images": urls})

    try:
        property_obj = await property_service.create_property(property_data, current_user.id)
    except Exception:
        upload_service.remove_images(urls, PROPERTY_FOLDER)
        raise
    return envelope("Property created successfully", property_obj.to_dict())


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    summary="List properties with filtering",
    description="Paginated listings, newest first. Filters that are not given are not applied."
)
async def list_properties(
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    limit: Optional[str] = Query(None, description="Page size (default 20, max 100)"),
    category: Optional[PropertyCategory] = Query(None),
    property_type: Optional[PropertyType] = Query(None, alias="propertyType"),
    area: Optional[str] = Query(None, description="Area id or slug"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    featured: Optional[bool] = Query(None),
    property_status: Optional[PropertyStatus] = Query(None, alias="status"),
    property_service: PropertyService = Depends(get_property_service)
):
    filters = PropertySearchFilters(
        category=category,
        property_type=property_type,
        status=property_status,
        featured=featured,
        min_price=min_price,
        max_price=max_price,
        area=area
    )
    result = await property_service.get_properties(filters, page=page, limit=limit)
    return envelope("Properties retrieved successfully", _serialize_page(result))


@router.get(
    "/featured",
    status_code=status.HTTP_200_OK,
    summary="Featured properties"
)
async def featured_properties(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Number of listings (default 6)"),
    property_service: PropertyService = Depends(get_property_service)
):
    properties = await property_service.get_featured_properties(limit)
    return envelope(
        "Featured properties retrieved successfully",
        [property_obj.to_dict() for property_obj in properties]
    )


@router.get(
    "/slug/{slug}",
    status_code=status.HTTP_200_OK,
    summary="Get property by slug"
)
async def get_property_by_slug(
    slug: str,
    property_service: PropertyService = Depends(get_property_service)
):
    property_obj = await property_service.get_property_by_slug(slug)
    return envelope("Property retrieved successfully", property_obj.to_dict())


@router.get(
    "/{property_id}",
    status_code=status.HTTP_200_OK,
    summary="Get property by id",
    description="Listing with owner and area; images are not included."
)
async def get_property(
    property_id: uuid.UUID,
    property_service: PropertyService = Depends(get_property_service)
):
    property_obj = await property_service.get_property_by_id(property_id)
    return envelope("Property retrieved successfully", property_obj.to_dict())


@router.patch(
    "/{property_id}",
    status_code=status.HTTP_200_OK,
    summary="Update property",
    description=(
        "Partial update by the owner or an admin. Send JSON, or a multipart form where "
        "'existingImages' URLs followed by new 'images' files replace the gallery."
    )
)
async def update_property(
    property_id: uuid.UUID,
    request: Request,
    current_user: CurrentUser = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service),
    upload_service: UploadService = Depends(get_upload_service)
):
    """
    Update a property listing.

    Raises:
        NotFoundError: If the listing does not exist
        ForbiddenError: If the caller is neither owner nor admin
    """
    fields, files = await read_payload(request)

    existing_images = fields.pop("existingImages", None)
    if "images" in fields:
        fields["images"] = as_list(fields["images"])

    update_data = PropertyUpdate.model_validate(fields)

    new_urls = []
    if files or existing_images is not None:
        new_urls = await upload_service.save_images(
            files,
            PROPERTY_FOLDER,
            str(request.base_url),
            settings.max_property_images
        )
        update_data = PropertyUpdate.model_validate({
            **update_data.model_dump(exclude_unset=True),
            "images": as_list(existing_images) + new_urls
        })

    try:
        property_obj = await property_service.update_property(
            property_id,
            current_user.id,
            current_user.role,
            update_data
        )
    except Exception:
        upload_service.remove_images(new_urls, PROPERTY_FOLDER)
        raise
    return envelope("Property updated successfully", property_obj.to_dict())


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete property",
    description="Only the owner can delete a listing."
)
async def delete_property(
    property_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
):
    await property_service.delete_property(property_id, current_user.id)
    return envelope("Property deleted successfully")

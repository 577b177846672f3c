"""
Area API endpoints.
Public lookups; agents and admins create and update areas with up to 5 images.
"""

from fastapi import APIRouter, Depends, Request, status
import uuid
from app.config import settings
from app.models.user import UserRole
from app.schemas.area import AreaCreate, AreaUpdate
from app.schemas.common import ERROR_RESPONSES, envelope
from app.services.area import AreaService
from app.services.upload import UploadService, AREA_FOLDER
from app.utils.dependencies import (
    CurrentUser,
    as_list,
    get_area_service,
    get_upload_service,
    read_payload,
    require_roles
)


router = APIRouter(prefix="/areas", tags=["Areas"], responses=ERROR_RESPONSES)

require_area_editor = require_roles(UserRole.ADMIN, UserRole.AGENT)


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    summary="List areas",
    description="All areas ordered by name, each with its propertyCount."
)
async def list_areas(area_service: AreaService = Depends(get_area_service)):
    return envelope("Areas retrieved successfully", await area_service.get_all_areas())


@router.get("/slug/{slug}", status_code=status.HTTP_200_OK, summary="Get area by slug")
async def get_area_by_slug(slug: str, area_service: AreaService = Depends(get_area_service)):
    return envelope("Area retrieved successfully", await area_service.get_area_by_slug(slug))


@router.get("/{area_id}", status_code=status.HTTP_200_OK, summary="Get area by id")
async def get_area(area_id: uuid.UUID, area_service: AreaService = Depends(get_area_service)):
    return envelope("Area retrieved successfully", await area_service.get_area_by_id(area_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create area",
    description="Multipart form with name, description and up to 5 'images' files; JSON is accepted too."
)
async def create_area(
    request: Request,
    current_user: CurrentUser = Depends(require_area_editor),
    area_service: AreaService = Depends(get_area_service),
    upload_service: UploadService = Depends(get_upload_service)
):
    """
    Create an area. The first uploaded image becomes the primary image.

    Raises:
        BadRequestError: If the name is taken or an upload is rejected
    """
    fields, files = await read_payload(request)
    if "images" in fields:
        fields["images"] = as_list(fields["images"])
    area_data = AreaCreate.model_validate(fields)

    urls = await upload_service.save_images(files, AREA_FOLDER, str(request.base_url), settings.max_area_images)

    if urls:
        image, images = urls[0], urls
    else:
        image = area_data.image
        images = area_data.images if area_data.images is not None else ([area_data.image] if area_data.image else [])

    try:
        area = await area_service.create_area(
            name=area_data.name,
            description=area_data.description,
            image=image,
            images=images
        )
    except Exception:
        upload_service.remove_images(urls, AREA_FOLDER)
        raise
    return envelope("Area created successfully", area.to_dict())


@router.patch(
    "/{area_id}",
    status_code=status.HTTP_200_OK,
    summary="Update area",
    description="'existingImages' URLs followed by new 'images' files replace the image list."
)
async def update_area(
    area_id: uuid.UUID,
    request: Request,
    current_user: CurrentUser = Depends(require_area_editor),
    area_service: AreaService = Depends(get_area_service),
    upload_service: UploadService = Depends(get_upload_service)
):
    fields, files = await read_payload(request)
    existing_images = fields.pop("existingImages", None)
    if "images" in fields:
        fields["images"] = as_list(fields["images"])
    update_data = AreaUpdate.model_validate(fields)

    new_urls = []
    if files or existing_images is not None:
        new_urls = await upload_service.save_images(files, AREA_FOLDER, str(request.base_url), settings.max_area_images)
        images = as_list(existing_images) + new_urls
        changes = {"images": images}
        if images:
            changes["image"] = images[0]
        update_data = AreaUpdate.model_validate({**update_data.model_dump(exclude_unset=True), **changes})

    try:
        area = await area_service.update_area(area_id, update_data)
    except Exception:
        upload_service.remove_images(new_urls, AREA_FOLDER)
        raise
    return envelope("Area updated successfully", area.to_dict())

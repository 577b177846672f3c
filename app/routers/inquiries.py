"""
Contact inquiry API endpoints.
Anyone can send an inquiry; signed-in users manage them.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional
import uuid
from app.models.inquiry import InquiryStatus
from app.schemas.common import ERROR_RESPONSES, envelope
from app.schemas.inquiry import InquiryCreate, InquiryStatusUpdate
from app.services.inquiry import ContactInquiryService
from app.utils.dependencies import (
    CurrentUser,
    get_current_user,
    get_inquiry_service,
    get_optional_current_user
)


router = APIRouter(prefix="/inquiries", tags=["Inquiries"], responses=ERROR_RESPONSES)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Send inquiry",
    description="Public. The sender is recorded when a valid bearer token accompanies the request."
)
async def create_inquiry(
    inquiry_data: InquiryCreate,
    current_user: Optional[CurrentUser] = Depends(get_optional_current_user),
    inquiry_service: ContactInquiryService = Depends(get_inquiry_service)
):
    """
    Create an inquiry about a listing.

    Raises:
        BadRequestError: If the email or phone is invalid
        NotFoundError: If the listing does not exist
    """
    inquiry = await inquiry_service.create_inquiry(
        property_id=inquiry_data.property_id,
        email=inquiry_data.email,
        phone=inquiry_data.phone,
        message=inquiry_data.message,
        user_id=current_user.id if current_user else None
    )
    return envelope("Inquiry created successfully", inquiry.to_dict())


@router.get("", status_code=status.HTTP_200_OK, summary="List inquiries")
async def list_inquiries(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    inquiry_status: Optional[InquiryStatus] = Query(None, alias="status"),
    property_id: Optional[uuid.UUID] = Query(None, alias="propertyId"),
    current_user: CurrentUser = Depends(get_current_user),
    inquiry_service: ContactInquiryService = Depends(get_inquiry_service)
):
    result = await inquiry_service.get_inquiries(
        status=inquiry_status,
        property_id=property_id,
        page=page,
        limit=limit
    )
    result["data"] = [inquiry.to_dict() for inquiry in result["data"]]
    return envelope("Inquiries retrieved successfully", result)


@router.patch("/{inquiry_id}/status", status_code=status.HTTP_200_OK, summary="Update inquiry status")
async def update_inquiry_status(
    inquiry_id: uuid.UUID,
    status_data: InquiryStatusUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    inquiry_service: ContactInquiryService = Depends(get_inquiry_service)
):
    inquiry = await inquiry_service.update_inquiry_status(inquiry_id, status_data.status)
    return envelope("Inquiry status updated successfully", inquiry.to_dict())


@router.delete("/{inquiry_id}", status_code=status.HTTP_200_OK, summary="Delete inquiry")
async def delete_inquiry(
    inquiry_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    inquiry_service: ContactInquiryService = Depends(get_inquiry_service)
):
    await inquiry_service.delete_inquiry(inquiry_id)
    return envelope("Inquiry deleted successfully")

"""
Contact inquiry service.
Validates inquiries sent about listings and manages their follow-up status.
"""

from typing import Any, Dict, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.inquiry import InquiryRepository
from app.repositories.property import PropertyRepository
from app.models.inquiry import ContactInquiry, InquiryStatus
from app.utils.validators import validate_email, validate_phone, get_pagination_params, total_pages
from app.utils.exceptions import BadRequestError, NotFoundError
import uuid
import logging

logger = logging.getLogger(__name__)


class ContactInquiryService:
    """
    Inquiry workflow: created as Pending, then moved freely between statuses.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.inquiry_repo = InquiryRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def create_inquiry(
        self,
        property_id: uuid.UUID,
        email: str,
        phone: str,
        message: str,
        user_id: Optional[uuid.UUID] = None
    ) -> ContactInquiry:
        """
        Record an inquiry about a listing.

        Args:
            property_id: Listing the inquiry is about
            email: Contact email of the sender
            phone: Contact phone of the sender
            message: Free text
            user_id: Sender, when signed in

        Raises:
            BadRequestError: If the email or phone is invalid
            NotFoundError: If the listing does not exist
        """
        if not validate_email(email):
            raise BadRequestError("Invalid email format")

        if not validate_phone(phone):
            raise BadRequestError("Invalid phone number")

        if not await self.property_repo.exists(property_id):
            raise NotFoundError("Property")

        inquiry = await self.inquiry_repo.create({
            "property_id": property_id,
            "email": email,
            "phone": phone,
            "message": message,
            "user_id": user_id,
            "status": InquiryStatus.PENDING,
        })
        logger.info(f"Inquiry {inquiry.id} received for property {property_id}")
        return inquiry

    async def get_inquiries(
        self,
        status: Optional[InquiryStatus] = None,
        property_id: Optional[uuid.UUID] = None,
        page: Any = None,
        limit: Any = None
    ) -> Dict[str, Any]:
        page, limit = get_pagination_params(page, limit)
        inquiries, total = await self.inquiry_repo.search_inquiries(
            status=status,
            property_id=property_id,
            skip=(page - 1) * limit,
            limit=limit
        )
        return {
            "data": inquiries,
            "total": total,
            "page": page,
            "limit": limit,
            "totalPages": total_pages(total, limit),
        }

    async def update_inquiry_status(self, inquiry_id: uuid.UUID, status: InquiryStatus) -> ContactInquiry:
        inquiry = await self.inquiry_repo.get_by_id(inquiry_id)
        if not inquiry:
            raise NotFoundError("Inquiry")
        inquiry = await self.inquiry_repo.update(inquiry, {"status": status})
        logger.info(f"Inquiry {inquiry_id} marked {status.value}")
        return inquiry

    async def delete_inquiry(self, inquiry_id: uuid.UUID) -> None:
        if not await self.inquiry_repo.delete(inquiry_id):
            raise NotFoundError("Inquiry")
        logger.info(f"Inquiry {inquiry_id} deleted")

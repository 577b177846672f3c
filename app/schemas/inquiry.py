"""
Pydantic schemas for contact inquiries.
"""

from pydantic import Field
import uuid
from app.models.inquiry import InquiryStatus
from app.schemas.common import CamelModel


class InquiryCreate(CamelModel):
    """Schema for sending an inquiry about a listing."""

    property_id: uuid.UUID
    email: str = Field(..., examples=["buyer@example.com"])
    phone: str = Field(..., examples=["08012345678"])
    message: str = Field(..., min_length=1, examples=["Is this flat still available?"])


class InquiryStatusUpdate(CamelModel):

    status: InquiryStatus

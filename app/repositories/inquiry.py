"""
Contact inquiry repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, func, desc
from sqlalchemy.orm import selectinload
from app.repositories.base import BaseRepository
from app.models.inquiry import ContactInquiry, InquiryStatus
from typing import List, Optional, Tuple
import uuid
import logging

logger = logging.getLogger(__name__)


class InquiryRepository(BaseRepository[ContactInquiry]):

    def __init__(self, db: AsyncSession):
        super().__init__(ContactInquiry, db)

    async def search_inquiries(
        self,
        status: Optional[InquiryStatus] = None,
        property_id: Optional[uuid.UUID] = None,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[ContactInquiry], int]:
        """
        Inquiries newest first, optionally narrowed by status and property.

        Returns:
            Tuple of (inquiries list, total count)
        """
        try:
            conditions = []
            if status is not None:
                conditions.append(ContactInquiry.status == status)
            if property_id is not None:
                conditions.append(ContactInquiry.property_id == property_id)

            count_query = select(func.count(ContactInquiry.id))
            query = select(ContactInquiry).options(selectinload(ContactInquiry.property_rel))
            if conditions:
                count_query = count_query.where(and_(*conditions))
                query = query.where(and_(*conditions))

            count_result = await self.db.execute(count_query)
            total_count = count_result.scalar()

            query = (
                query.order_by(desc(ContactInquiry.created_at))
                .offset(skip)
                .limit(limit)
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            inquiries = list(result.scalars().all())

            logger.debug(f"Inquiry search returned {len(inquiries)} of {total_count} total results")
            return inquiries, total_count
        except Exception as e:
            logger.error(f"Failed to search inquiries: {e}")
            raise

"""
User repository for authentication and account operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.repositories.base import BaseRepository
from app.models.user import User
from typing import Optional
import logging

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Emails are stored and compared trimmed and lowercased."""
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.
    Password hashing happens in the service layer; this class only persists hashes.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for

        Returns:
            User instance if found, None otherwise
        """
        try:
            query = (
                select(User)
                .where(User.email == normalize_email(email))
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            user = result.scalar_one_or_none()

            if user:
                logger.debug(f"Retrieved user by email: {email}")
            else:
                logger.debug(f"User with email {email} not found")

            return user
        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {e}")
            raise

    async def set_refresh_token(self, user: User, refresh_token: Optional[str]) -> User:
        """Store (or clear, with None) the single accepted refresh token."""
        return await self.update(user, {"refresh_token": refresh_token})

    async def update_password(self, user: User, hashed_password: str) -> User:
        """
        Replace the user's password hash.

        Args:
            user: User to update
            hashed_password: Already hashed password

        Returns:
            Updated user instance
        """
        updated_user = await self.update(user, {"hashed_password": hashed_password})
        logger.info(f"Password updated for user: {updated_user.email}")
        return updated_user

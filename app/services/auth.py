"""
Authentication service for registration, login, token management and password changes.
Handles credential checks, refresh-token rotation and the password policy.
"""

from typing import Optional, Dict, Any
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.user import UserRepository, normalize_email
from app.models.user import User, UserRole
from app.utils.auth import (
    create_access_token,
    create_refresh_token,
    verify_refresh_token,
    hash_password,
    verify_password,
)
from app.utils.validators import validate_email, validate_password_strength
from app.utils.exceptions import (
    BadRequestError,
    ConflictError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    UnauthorizedError,
)
import uuid
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for account lifecycle and token management.
    Each user has at most one accepted refresh token, replaced on every login.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    def create_tokens(self, user: User) -> Dict[str, str]:
        """
        Create access and refresh tokens for user.

        Returns:
            Mapping with accessToken and refreshToken
        """
        payload = {"user_id": user.id, "email": user.email, "role": user.role}
        return {
            "accessToken": create_access_token(payload),
            "refreshToken": create_refresh_token(payload),
        }

    async def _issue_session(self, user: User) -> Dict[str, Any]:
        tokens = self.create_tokens(user)
        await self.user_repo.set_refresh_token(user, tokens["refreshToken"])
        return {**tokens, "user": user.to_dict()}

    async def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Register a new agent account and sign it in.

        Returns:
            Mapping with accessToken, refreshToken and the public user

        Raises:
            BadRequestError: If the email is malformed or the password is weak
            ConflictError: If the email is already registered
        """
        if not validate_email(email):
            raise BadRequestError("Invalid email format")

        password_check = validate_password_strength(password)
        if not password_check.valid:
            raise BadRequestError(
                "Password does not meet requirements",
                errors={"password": password_check.errors}
            )

        if await self.user_repo.get_by_email(email):
            logger.warning(f"Registration rejected, email already registered: {email}")
            raise ConflictError("Email already registered")

        try:
            user = await self.user_repo.create({
                "email": normalize_email(email),
                "hashed_password": hash_password(password),
                "first_name": first_name,
                "last_name": last_name,
                "phone": phone,
                "role": UserRole.AGENT,
            })
        except IntegrityError:
            raise ConflictError("Email already registered")

        logger.info(f"User registered: {user.email} (ID: {user.id})")
        return await self._issue_session(user)

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Authenticate user and create tokens.

        Unknown email and wrong password are indistinguishable to the caller.

        Raises:
            InvalidCredentialsError: If credentials are invalid
        """
        user = await self.user_repo.get_by_email(email) if email else None

        if not user or not verify_password(password or "", user.hashed_password):
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise InvalidCredentialsError()

        logger.info(f"User authenticated successfully: {user.email}")
        return await self._issue_session(user)

    async def refresh_access_token(self, refresh_token: str) -> Dict[str, str]:
        """
        Create new access token from the user's current refresh token.

        Raises:
            InvalidTokenError: If the refresh token does not verify
            UnauthorizedError: If it is not the token currently stored for the user
        """
        payload = verify_refresh_token(refresh_token)
        if payload is None:
            raise InvalidTokenError("Invalid or expired refresh token")

        user = await self._get_user(payload.user_id)
        if not user or user.refresh_token != refresh_token:
            logger.warning(f"Refresh token mismatch for user: {payload.user_id}")
            raise UnauthorizedError("Refresh token mismatch")

        return {
            "accessToken": create_access_token(
                {"user_id": user.id, "email": user.email, "role": user.role}
            )
        }

    async def logout(self, user_id: uuid.UUID) -> None:
        """Forget the stored refresh token; a missing user is not an error."""
        user = await self._get_user(user_id)
        if user:
            await self.user_repo.set_refresh_token(user, None)
            logger.info(f"User logged out: {user.email}")

    async def change_password(self, user_id: uuid.UUID, old_password: str, new_password: str) -> None:
        """
        Change a user's password after checking the current one.
        The stored refresh token is left as it is.

        Raises:
            NotFoundError: If the user does not exist
            UnauthorizedError: If the current password is wrong
            BadRequestError: If the new password violates the policy
        """
        user = await self._get_user(user_id)
        if not user:
            raise NotFoundError("User")

        if not verify_password(old_password or "", user.hashed_password):
            raise UnauthorizedError("Current password is incorrect")

        password_check = validate_password_strength(new_password)
        if not password_check.valid:
            raise BadRequestError(
                "New password does not meet requirements",
                errors={"newPassword": password_check.errors}
            )

        await self.user_repo.update_password(user, hash_password(new_password))

    async def _get_user(self, user_id) -> Optional[User]:
        try:
            user_uuid = user_id if isinstance(user_id, uuid.UUID) else uuid.UUID(str(user_id))
        except ValueError:
            return None
        return await self.user_repo.get_by_id(user_uuid)

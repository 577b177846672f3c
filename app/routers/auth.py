"""
Authentication API endpoints for registration, login, token refresh and password changes.
"""

from fastapi import APIRouter, Depends, status
from app.services.auth import AuthService
from app.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    RefreshTokenRequest,
    ChangePasswordRequest
)
from app.schemas.common import ERROR_RESPONSES, envelope
from app.utils.dependencies import CurrentUser, get_auth_service, get_current_user


router = APIRouter(prefix="/auth", tags=["Authentication"], responses=ERROR_RESPONSES)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create an agent account and return access and refresh tokens"
)
async def register(
    register_data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new user.

    Returns:
        Envelope with accessToken, refreshToken and the public user

    Raises:
        BadRequestError: If the email is malformed or the password is weak
        ConflictError: If the email is already registered
    """
    result = await auth_service.register(
        email=register_data.email,
        password=register_data.password,
        first_name=register_data.first_name,
        last_name=register_data.last_name,
        phone=register_data.phone
    )
    return envelope("User registered successfully", result)


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate user with email and password, returns JWT tokens"
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Authenticate user and return JWT tokens.

    Raises:
        InvalidCredentialsError: If credentials are invalid
    """
    result = await auth_service.login(email=login_data.email, password=login_data.password)
    return envelope("Login successful", result)


@router.post(
    "/refresh-token",
    status_code=status.HTTP_200_OK,
    summary="Refresh access token",
    description="Exchange the current refresh token for a new access token"
)
async def refresh_token(
    refresh_data: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    result = await auth_service.refresh_access_token(refresh_data.refresh_token)
    return envelope("Token refreshed successfully", result)


@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    summary="Logout",
    description="Invalidate the stored refresh token"
)
async def logout(
    current_user: CurrentUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    await auth_service.logout(current_user.id)
    return envelope("Logged out successfully")


@router.post(
    "/change-password",
    status_code=status.HTTP_200_OK,
    summary="Change password"
)
async def change_password(
    password_data: ChangePasswordRequest,
    current_user: CurrentUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Change the caller's password.

    Raises:
        UnauthorizedError: If the current password is wrong
        BadRequestError: If the new password violates the policy
    """
    await auth_service.change_password(
        current_user.id,
        password_data.old_password,
        password_data.new_password
    )
    return envelope("Password changed successfully")

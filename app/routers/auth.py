"""
PayrollHub - Authentication Router

API endpoints for user authentication.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_active_user
from app.models.user import User
from app.schemas.auth import TokenResponse, UserLoginRequest, UserResponse
from app.services.auth_service import AuthService
from app.utils.error_handling import AccountDisabledException, AuthenticationException


router = APIRouter()


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login user",
    description="Authenticate with email and password and receive a bearer token.",
)
async def login(
    request: UserLoginRequest,
    db: AsyncSession = Depends(get_async_session),
):
    """Login with email and password."""
    auth_service = AuthService(db)

    user = await auth_service.authenticate_user(
        email=request.email,
        password=request.password,
    )

    if not user:
        raise AuthenticationException("Incorrect email or password")

    if not user.is_active:
        raise AccountDisabledException("User account is deactivated")

    return auth_service.create_tokens(user)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
)
async def get_me(current_user: User = Depends(get_current_active_user)):
    """Return the authenticated user."""
    return current_user

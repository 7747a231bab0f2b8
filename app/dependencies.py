"""
PayrollHub - FastAPI Dependencies

Shared dependencies for authentication, database sessions and the
request context recorded in activity logs.
"""

import uuid
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.models.user import User
from app.services.audit_service import AuditContext
from app.utils.error_handling import (
    AccountDisabledException,
    AuthenticationException,
    TokenInvalidException,
)
from app.utils.security import verify_access_token


# HTTP Bearer token security
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Get the current authenticated user from the bearer token.

    Raises:
        AuthenticationException: If no token was sent
        TokenExpiredException: If the token has expired
        TokenInvalidException: If the token or its subject is invalid
    """
    if not credentials:
        raise AuthenticationException("Not authenticated")

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise TokenInvalidException()

    user_id = payload.get("sub")
    if not user_id:
        raise TokenInvalidException("Invalid token payload")

    try:
        user_uuid = uuid.UUID(user_id)
    except ValueError:
        raise TokenInvalidException("Invalid user ID in token")

    result = await db.execute(select(User).where(User.id == user_uuid))
    user = result.scalar_one_or_none()

    if not user:
        raise TokenInvalidException("User not found")

    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """Get current user and verify they are active."""
    if not current_user.is_active:
        raise AccountDisabledException()
    return current_user


def get_client_ip(request: Request) -> Optional[str]:
    """Client address, honouring a reverse proxy's X-Forwarded-For."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else None


async def get_audit_context(
    request: Request,
    current_user: User = Depends(get_current_active_user),
) -> AuditContext:
    """Who is acting, and from where, for activity log entries."""
    return AuditContext(
        user_id=current_user.id,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )

"""
PayrollHub - Activity Log Router

Read-only browsing of the activity log written by every mutating endpoint.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_active_user
from app.models.activity_log import ActivityAction
from app.models.user import User
from app.schemas.common import ApiResponse
from app.services.audit_service import ActivityLogService
from app.utils.error_handling import ValidationException


router = APIRouter()


@router.get("", response_model=ApiResponse, summary="Search activity logs")
async def list_activity_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=200),
    action: Optional[ActivityAction] = Query(None),
    module: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Matches description or IP address"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    if start_date and end_date and start_date > end_date:
        raise ValidationException("start_date must be on or before end_date", field="start_date")

    result = await ActivityLogService(db).list_logs(
        page=page,
        limit=limit,
        action=action.value if action else None,
        module=module,
        search=search,
        start_date=start_date,
        end_date=end_date,
    )
    return ApiResponse.ok(result)

"""
PayrollHub - Bonus Router

Endpoints:
- GET    /api/bonuses          List bonuses
- GET    /api/bonuses/search   Bonuses grouped per employee
- POST   /api/bonuses          Create or reconcile bonuses for a period
- DELETE /api/bonuses/bulk     Delete several bonuses
- GET    /api/bonuses/{id}     Get a bonus
- PUT    /api/bonuses/{id}     Update a bonus
- DELETE /api/bonuses/{id}     Delete a bonus
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_audit_context, get_current_active_user
from app.models.user import User
from app.schemas.common import ApiResponse, BulkIdsRequest, StatusValue
from app.schemas.payroll import BonusCreateRequest, BonusUpdate
from app.services.audit_service import AuditContext
from app.services.bonus_service import BonusService


router = APIRouter()


@router.get("", response_model=ApiResponse)
async def list_bonuses(
    employee_id: Optional[UUID] = Query(None),
    bonus_type_id: Optional[UUID] = Query(None),
    bonus_month_year: Optional[str] = Query(None, description="YYYY-MM"),
    bonus_month: Optional[int] = Query(None, ge=1, le=12),
    bonus_year: Optional[int] = Query(None),
    status_filter: Optional[StatusValue] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    return await BonusService(db).list(
        employee_id=employee_id,
        bonus_type_id=bonus_type_id,
        bonus_month_year=bonus_month_year,
        bonus_month=bonus_month,
        bonus_year=bonus_year,
        status=status_filter,
    )


@router.get("/search", response_model=ApiResponse)
async def search_bonuses(
    employee_ids: List[UUID] = Query(..., min_length=1),
    bonus_month_year: Optional[str] = Query(None, description="YYYY-MM"),
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    """Bonuses for the given employees with a per-employee total."""
    return await BonusService(db).search(employee_ids, bonus_month_year)


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_bonuses(
    request: BonusCreateRequest,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    """
    Save one bonus per line item.

    A line item for an employee who already has this bonus type in the
    period is merged into the existing row instead of creating a new one.
    """
    return await BonusService(db).create(request, ctx)


@router.delete("/bulk", response_model=ApiResponse)
async def delete_bonuses(
    request: BulkIdsRequest,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await BonusService(db).remove_bulk(request.ids, ctx)


@router.get("/{bonus_id}", response_model=ApiResponse)
async def get_bonus(
    bonus_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    return await BonusService(db).get(bonus_id)


@router.put("/{bonus_id}", response_model=ApiResponse)
async def update_bonus(
    bonus_id: UUID,
    request: BonusUpdate,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await BonusService(db).update(bonus_id, request, ctx)


@router.delete("/{bonus_id}", response_model=ApiResponse)
async def delete_bonus(
    bonus_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await BonusService(db).remove(bonus_id, ctx)

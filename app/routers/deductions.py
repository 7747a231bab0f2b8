"""
PayrollHub - Deduction Router
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_audit_context, get_current_active_user
from app.models.user import User
from app.schemas.common import ApiResponse, BulkIdsRequest, StatusValue
from app.schemas.payroll import DeductionCreateRequest, DeductionUpdate
from app.services.audit_service import AuditContext
from app.services.deduction_service import DeductionService


router = APIRouter()


@router.get("", response_model=ApiResponse)
async def list_deductions(
    employee_id: Optional[UUID] = Query(None),
    deduction_head_id: Optional[UUID] = Query(None),
    month: Optional[str] = Query(None, pattern=r"^\d{1,2}$"),
    year: Optional[str] = Query(None, pattern=r"^\d{4}$"),
    status_filter: Optional[StatusValue] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    return await DeductionService(db).list(
        employee_id=employee_id,
        deduction_head_id=deduction_head_id,
        month=month,
        year=year,
        status=status_filter,
    )


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_deductions(
    request: DeductionCreateRequest,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    """Save deductions for a month, merging into existing rows per employee and head."""
    return await DeductionService(db).create(request, ctx)


@router.delete("/bulk", response_model=ApiResponse)
async def delete_deductions(
    request: BulkIdsRequest,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await DeductionService(db).remove_bulk(request.ids, ctx)


@router.get("/{deduction_id}", response_model=ApiResponse)
async def get_deduction(
    deduction_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    return await DeductionService(db).get(deduction_id)


@router.put("/{deduction_id}", response_model=ApiResponse)
async def update_deduction(
    deduction_id: UUID,
    request: DeductionUpdate,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await DeductionService(db).update(deduction_id, request, ctx)


@router.delete("/{deduction_id}", response_model=ApiResponse)
async def delete_deduction(
    deduction_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await DeductionService(db).remove(deduction_id, ctx)

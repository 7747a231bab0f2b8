"""
PayrollHub - Employee Router
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_audit_context, get_current_active_user
from app.models.user import User
from app.schemas.common import ApiResponse, BulkIdsRequest, StatusValue
from app.schemas.employee import EmployeeCreate, EmployeeTransferRequest, EmployeeUpdate
from app.services.audit_service import AuditContext
from app.services.employee_service import EmployeeService


router = APIRouter()


@router.get("", response_model=ApiResponse)
async def list_employees(
    department_id: Optional[UUID] = Query(None),
    designation_id: Optional[UUID] = Query(None),
    status_filter: Optional[StatusValue] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    return await EmployeeService(db).list({
        "department_id": department_id,
        "designation_id": designation_id,
        "status": status_filter,
    })


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    request: EmployeeCreate,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await EmployeeService(db).create(request, ctx)


@router.delete("/bulk", response_model=ApiResponse)
async def delete_employees(
    request: BulkIdsRequest,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await EmployeeService(db).remove_bulk(request.ids, ctx)


@router.get("/{employee_id}", response_model=ApiResponse)
async def get_employee(
    employee_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    return await EmployeeService(db).get(employee_id)


@router.put("/{employee_id}", response_model=ApiResponse)
async def update_employee(
    employee_id: UUID,
    request: EmployeeUpdate,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await EmployeeService(db).update(employee_id, request, ctx)


@router.delete("/{employee_id}", response_model=ApiResponse)
async def delete_employee(
    employee_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await EmployeeService(db).remove(employee_id, ctx)


@router.post("/{employee_id}/transfer", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def transfer_employee(
    employee_id: UUID,
    request: EmployeeTransferRequest,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    """Move the employee to a new posting and record the transfer history."""
    return await EmployeeService(db).transfer(employee_id, request, ctx)


@router.get("/{employee_id}/transfers", response_model=ApiResponse)
async def list_employee_transfers(
    employee_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    return await EmployeeService(db).list_transfers(employee_id)

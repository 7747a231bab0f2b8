"""
PayrollHub - Chart of Accounts Router
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_audit_context, get_current_active_user
from app.models.user import User
from app.schemas.accounting import ChartOfAccountCreate, ChartOfAccountUpdate
from app.schemas.common import ApiResponse
from app.services.audit_service import AuditContext
from app.services.chart_of_account_service import ChartOfAccountService


router = APIRouter()


@router.get("", response_model=ApiResponse, summary="List accounts ordered by code")
async def list_accounts(
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    return await ChartOfAccountService(db).list()


@router.get("/tree", response_model=ApiResponse, summary="Accounts as a nested tree")
async def account_tree(
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    return await ChartOfAccountService(db).tree()


@router.get("/{account_id}", response_model=ApiResponse)
async def get_account(
    account_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    return await ChartOfAccountService(db).get(account_id)


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_account(
    request: ChartOfAccountCreate,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    """Create an account; the parent, when given, must be a group account."""
    return await ChartOfAccountService(db).create(request, ctx)


@router.put("/{account_id}", response_model=ApiResponse)
async def update_account(
    account_id: UUID,
    request: ChartOfAccountUpdate,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await ChartOfAccountService(db).update(account_id, request, ctx)


@router.delete("/{account_id}", response_model=ApiResponse)
async def delete_account(
    account_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    """Delete a leaf account. Accounts with children are refused with 422."""
    return await ChartOfAccountService(db).remove(account_id, ctx)

"""
PayrollHub - Chart of Accounts Service

CRUD over the account tree with the structural rules enforced:
- code is globally unique
- a parent must exist and be a group account
- an account cannot be its own parent or move under a descendant
- an account with children cannot be deleted
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.accounting import ChartOfAccount
from app.schemas.accounting import ChartOfAccountCreate, ChartOfAccountUpdate
from app.schemas.common import ApiResponse
from app.services.audit_service import AuditContext
from app.services.crud_service import AuditedCrudService
from app.utils.error_handling import (
    AccountCycleException,
    AccountHasChildrenException,
    DuplicateEntryException,
    InvalidParentAccountException,
)

logger = logging.getLogger(__name__)


def build_account_tree(accounts: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Nest flat account rows under their parents, ordered by code."""
    nodes = {a["id"]: dict(a, children=[]) for a in accounts}
    roots = []
    for node in sorted(nodes.values(), key=lambda n: n["code"]):
        parent = nodes.get(node["parent_id"])
        if parent is not None:
            parent["children"].append(node)
        else:
            roots.append(node)
    return roots


class ChartOfAccountService(AuditedCrudService):
    """Service for chart of accounts operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(
            db,
            model=ChartOfAccount,
            module="chart-of-accounts",
            entity="ChartOfAccount",
            label="account",
        )

    async def list(self, filters: Optional[Dict[str, Any]] = None) -> ApiResponse:
        """Accounts ordered by code."""
        query = select(ChartOfAccount)
        for key, value in (filters or {}).items():
            if value is not None:
                query = query.where(getattr(ChartOfAccount, key) == value)
        result = await self.db.execute(query.order_by(ChartOfAccount.code))
        return ApiResponse.ok([a.to_dict() for a in result.scalars().all()])

    async def tree(self) -> ApiResponse:
        result = await self.db.execute(select(ChartOfAccount).order_by(ChartOfAccount.code))
        return ApiResponse.ok(build_account_tree([a.to_dict() for a in result.scalars().all()]))

    async def _ensure_code_free(self, code: str) -> None:
        result = await self.db.execute(select(ChartOfAccount.id).where(ChartOfAccount.code == code))
        if result.scalar_one_or_none() is not None:
            raise DuplicateEntryException("Account", "code", code)

    async def _ensure_group_parent(self, parent_id: uuid.UUID) -> None:
        parent = await self.fetch(parent_id)
        if parent is None:
            raise InvalidParentAccountException("Parent account not found", parent_id)
        if not parent.is_group:
            raise InvalidParentAccountException(
                f"Parent account {parent.code} is not a group account", parent_id
            )

    async def _ensure_not_descendant(self, account_id: uuid.UUID, parent_id: uuid.UUID) -> None:
        # Walk up from the proposed parent; reaching the account means a loop
        current: Optional[uuid.UUID] = parent_id
        seen = set()
        while current is not None and current not in seen:
            if current == account_id:
                raise AccountCycleException(account_id, parent_id)
            seen.add(current)
            result = await self.db.execute(
                select(ChartOfAccount.parent_id).where(ChartOfAccount.id == current)
            )
            current = result.scalar_one_or_none()

    async def create(self, payload: ChartOfAccountCreate, ctx: Optional[AuditContext] = None) -> ApiResponse:
        """
        Raises:
            DuplicateEntryException: code already used
            InvalidParentAccountException: parent missing or not a group
        """
        await self._ensure_code_free(payload.code)
        if payload.parent_id is not None:
            await self._ensure_group_parent(payload.parent_id)
        return await super().create(payload, ctx)

    async def update(
        self,
        id: uuid.UUID,
        payload: ChartOfAccountUpdate,
        ctx: Optional[AuditContext] = None,
    ) -> ApiResponse:
        """
        Raises:
            DuplicateEntryException: new code already used
            InvalidParentAccountException: self-parent, missing or non-group parent
            AccountCycleException: new parent is a descendant
        """
        account = await self.fetch(id)
        if account is None:
            return ApiResponse.fail("Account not found")

        changes = payload.model_dump(exclude_unset=True)
        if changes.get("code") and changes["code"] != account.code:
            await self._ensure_code_free(changes["code"])

        parent_id = changes.get("parent_id")
        if parent_id is not None and parent_id != account.parent_id:
            if parent_id == id:
                raise InvalidParentAccountException("An account cannot be its own parent", parent_id)
            await self._ensure_group_parent(parent_id)
            await self._ensure_not_descendant(id, parent_id)

        if changes.get("is_group") is False and await self._child_count(id):
            raise InvalidParentAccountException(
                f"Account {account.code} has child accounts and must remain a group", id
            )

        return await super().update(id, payload, ctx)

    async def _child_count(self, id: uuid.UUID) -> int:
        result = await self.db.execute(
            select(func.count(ChartOfAccount.id)).where(ChartOfAccount.parent_id == id)
        )
        return result.scalar_one()

    async def remove(self, id: uuid.UUID, ctx: Optional[AuditContext] = None) -> ApiResponse:
        """
        Raises:
            AccountHasChildrenException: the account still has children
        """
        account = await self.fetch(id)
        if account is None:
            return ApiResponse.fail("Account not found")

        children = await self._child_count(id)
        if children:
            raise AccountHasChildrenException(account.code, children)
        return await super().remove(id, ctx)

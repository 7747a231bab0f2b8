"""
PayrollHub - Deduction Service

Same period reconciliation as bonuses, keyed on
(employee, deduction head, month, year).
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity_log import ActivityAction
from app.models.base import STATUS_ACTIVE
from app.models.employee import Employee
from app.models.master_data import DeductionHead
from app.models.payroll import Deduction
from app.schemas.common import ApiResponse
from app.schemas.payroll import DeductionCreateRequest, DeductionUpdate
from app.services.audit_service import ActivityEvent, ActivityLogService, AuditContext
from app.services.crud_service import AuditedCrudService
from app.services.payroll_period import reconcile_amount

logger = logging.getLogger(__name__)

MODULE = "deductions"
ENTITY = "Deduction"


class DeductionService:
    """Service for deduction operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = ActivityLogService(db)
        self.crud = AuditedCrudService(db, Deduction, MODULE, ENTITY, "deduction")

    def _listing_query(self):
        return (
            select(Deduction, Employee.employee_code, Employee.employee_name, DeductionHead.name)
            .join(Employee, Employee.id == Deduction.employee_id)
            .join(DeductionHead, DeductionHead.id == Deduction.deduction_head_id)
        )

    @staticmethod
    def _row(deduction: Deduction, employee_code: str, employee_name: str, head_name: str) -> Dict[str, Any]:
        row = deduction.to_dict()
        row.update(
            employee_code=employee_code,
            employee_name=employee_name,
            deduction_head_name=head_name,
        )
        return row

    async def list(
        self,
        employee_id: Optional[uuid.UUID] = None,
        deduction_head_id: Optional[uuid.UUID] = None,
        month: Optional[str] = None,
        year: Optional[str] = None,
        status: Optional[str] = None,
    ) -> ApiResponse:
        query = self._listing_query()
        if employee_id:
            query = query.where(Deduction.employee_id == employee_id)
        if deduction_head_id:
            query = query.where(Deduction.deduction_head_id == deduction_head_id)
        if month:
            query = query.where(Deduction.month == month.zfill(2))
        if year:
            query = query.where(Deduction.year == year)
        if status:
            query = query.where(Deduction.status == status)

        result = await self.db.execute(query.order_by(Deduction.created_at.desc()))
        return ApiResponse.ok([self._row(*r) for r in result.all()])

    async def get(self, id: uuid.UUID) -> ApiResponse:
        result = await self.db.execute(self._listing_query().where(Deduction.id == id))
        found = result.first()
        if found is None:
            return ApiResponse.fail("Deduction not found")
        return ApiResponse.ok(self._row(*found))

    async def create(self, request: DeductionCreateRequest, ctx: Optional[AuditContext] = None) -> ApiResponse:
        """Create or reconcile one deduction per line item for the requested month."""
        ctx = ctx or AuditContext()
        payload = request.model_dump()
        period = f"{request.year}-{request.month}"

        employee_ids = {item.employee_id for item in request.deductions}
        result = await self.db.execute(select(Employee.id).where(Employee.id.in_(employee_ids)))
        missing = employee_ids - set(result.scalars().all())
        if missing:
            return ApiResponse.fail(
                f"Employees not found: {', '.join(sorted(str(m) for m in missing))}"
            )

        head_ids = {item.deduction_head_id for item in request.deductions}
        result = await self.db.execute(
            select(DeductionHead.id).where(
                DeductionHead.id.in_(head_ids),
                DeductionHead.status == STATUS_ACTIVE,
            )
        )
        if head_ids - set(result.scalars().all()):
            return ApiResponse.fail("One or more deduction heads not found or inactive")

        saved: List[Deduction] = []
        merged_old: List[Dict[str, Any]] = []
        try:
            for item in request.deductions:
                existing = (await self.db.execute(
                    select(Deduction).where(
                        Deduction.employee_id == item.employee_id,
                        Deduction.deduction_head_id == item.deduction_head_id,
                        Deduction.month == request.month,
                        Deduction.year == request.year,
                    )
                )).scalar_one_or_none()

                if existing is not None:
                    merged_old.append(existing.to_dict())
                    existing.amount = reconcile_amount(existing.amount, item.amount, request.adjustment_method)
                    existing.date = request.date
                    existing.is_taxable = item.is_taxable
                    existing.tax_percentage = item.tax_percentage
                    if item.notes is not None:
                        existing.notes = item.notes
                    existing.updated_by_id = ctx.user_id
                    saved.append(existing)
                else:
                    deduction = Deduction(
                        employee_id=item.employee_id,
                        deduction_head_id=item.deduction_head_id,
                        amount=item.amount,
                        month=request.month,
                        year=request.year,
                        date=request.date,
                        is_taxable=item.is_taxable,
                        tax_percentage=item.tax_percentage,
                        notes=item.notes,
                        created_by_id=ctx.user_id,
                    )
                    self.db.add(deduction)
                    saved.append(deduction)
                await self.db.flush()

            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning("Failed to create deductions for %s: %s", period, e)
            await self.audit.record(
                ActivityEvent.failure(
                    ActivityAction.CREATE, MODULE, ENTITY,
                    f"Failed to create deductions for {period}",
                    e,
                    new_values=payload,
                ),
                ctx,
            )
            return ApiResponse.fail("Failed to create deductions")

        rows = [d.to_dict() for d in saved]
        await self.audit.record(
            ActivityEvent.success(
                ActivityAction.CREATE, MODULE, ENTITY,
                f"Created {len(rows)} deduction(s) for {period}",
                old_values=merged_old or None,
                new_values=payload,
            ),
            ctx,
        )
        return ApiResponse.ok(rows, f"{len(rows)} deduction(s) saved successfully")

    async def update(self, id: uuid.UUID, payload: DeductionUpdate, ctx: Optional[AuditContext] = None) -> ApiResponse:
        return await self.crud.update(id, payload, ctx)

    async def remove(self, id: uuid.UUID, ctx: Optional[AuditContext] = None) -> ApiResponse:
        return await self.crud.remove(id, ctx)

    async def remove_bulk(self, ids: Sequence[uuid.UUID], ctx: Optional[AuditContext] = None) -> ApiResponse:
        return await self.crud.remove_bulk(ids, ctx)

"""
PayrollHub - Bonus Service

Bonus creation reconciles against the existing row for the same
(employee, bonus type, period) instead of rejecting the duplicate.
All line items of one request run in a single transaction.
"""

import logging
import uuid
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity_log import ActivityAction
from app.models.employee import Employee
from app.models.master_data import BonusCalculationType, BonusType
from app.models.payroll import Bonus
from app.schemas.common import ApiResponse
from app.schemas.payroll import BonusCreateRequest, BonusUpdate
from app.services.audit_service import ActivityEvent, ActivityLogService, AuditContext
from app.services.crud_service import AuditedCrudService
from app.services.payroll_period import parse_month_year, percentage_of, reconcile_amount

logger = logging.getLogger(__name__)

MODULE = "bonuses"
ENTITY = "Bonus"


class BonusService:
    """Service for bonus operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = ActivityLogService(db)
        self.crud = AuditedCrudService(db, Bonus, MODULE, ENTITY, "bonus", "bonuses")

    def _listing_query(self):
        return (
            select(Bonus, Employee.employee_code, Employee.employee_name, BonusType.name)
            .join(Employee, Employee.id == Bonus.employee_id)
            .join(BonusType, BonusType.id == Bonus.bonus_type_id)
        )

    @staticmethod
    def _row(bonus: Bonus, employee_code: str, employee_name: str, bonus_type_name: str) -> Dict[str, Any]:
        row = bonus.to_dict()
        row.update(
            employee_code=employee_code,
            employee_name=employee_name,
            bonus_type_name=bonus_type_name,
        )
        return row

    async def list(
        self,
        employee_id: Optional[uuid.UUID] = None,
        bonus_type_id: Optional[uuid.UUID] = None,
        bonus_month_year: Optional[str] = None,
        bonus_month: Optional[int] = None,
        bonus_year: Optional[int] = None,
        status: Optional[str] = None,
    ) -> ApiResponse:
        """Bonuses with employee and type names, newest first."""
        query = self._listing_query()
        if employee_id:
            query = query.where(Bonus.employee_id == employee_id)
        if bonus_type_id:
            query = query.where(Bonus.bonus_type_id == bonus_type_id)
        if bonus_month_year:
            query = query.where(Bonus.bonus_month_year == bonus_month_year)
        if bonus_month:
            query = query.where(Bonus.bonus_month == bonus_month)
        if bonus_year:
            query = query.where(Bonus.bonus_year == bonus_year)
        if status:
            query = query.where(Bonus.status == status)

        result = await self.db.execute(query.order_by(Bonus.created_at.desc()))
        return ApiResponse.ok([self._row(*r) for r in result.all()])

    async def search(
        self,
        employee_ids: Sequence[uuid.UUID],
        bonus_month_year: Optional[str] = None,
    ) -> ApiResponse:
        """Bonuses for the given employees grouped per employee, with totals."""
        query = self._listing_query().where(Bonus.employee_id.in_(list(employee_ids)))
        if bonus_month_year:
            query = query.where(Bonus.bonus_month_year == bonus_month_year)
        result = await self.db.execute(query.order_by(Employee.employee_code, Bonus.bonus_month_year.desc()))

        grouped: Dict[uuid.UUID, Dict[str, Any]] = {}
        for bonus, code, name, type_name in result.all():
            group = grouped.setdefault(bonus.employee_id, {
                "employee_id": bonus.employee_id,
                "employee_code": code,
                "employee_name": name,
                "total_amount": Decimal("0"),
                "bonuses": [],
            })
            group["bonuses"].append(self._row(bonus, code, name, type_name))
            group["total_amount"] += bonus.amount

        return ApiResponse.ok(list(grouped.values()))

    async def get(self, id: uuid.UUID) -> ApiResponse:
        result = await self.db.execute(self._listing_query().where(Bonus.id == id))
        found = result.first()
        if found is None:
            return ApiResponse.fail("Bonus not found")
        return ApiResponse.ok(self._row(*found))

    async def create(self, request: BonusCreateRequest, ctx: Optional[AuditContext] = None) -> ApiResponse:
        """
        Create or reconcile one bonus per line item for the requested period.

        Raises:
            InvalidPeriodException: if bonus_month_year is not YYYY-MM
        """
        ctx = ctx or AuditContext()
        year, month = parse_month_year(request.bonus_month_year)
        payload = request.model_dump()

        bonus_type = await self.db.get(BonusType, request.bonus_type_id)
        if bonus_type is None:
            return ApiResponse.fail("Bonus type not found")
        type_name = bonus_type.name
        calculation_type = bonus_type.calculation_type

        employee_ids = {item.employee_id for item in request.bonuses}
        result = await self.db.execute(
            select(Employee.id, Employee.employee_salary).where(Employee.id.in_(employee_ids))
        )
        salaries = {row.id: row.employee_salary for row in result.all()}
        missing = employee_ids - salaries.keys()
        if missing:
            return ApiResponse.fail(
                f"Employees not found: {', '.join(sorted(str(m) for m in missing))}"
            )

        period = f"{year:04d}-{month:02d}"
        saved: List[Bonus] = []
        merged_old: List[Dict[str, Any]] = []
        try:
            for item in request.bonuses:
                amount = item.amount
                if calculation_type == BonusCalculationType.PERCENTAGE.value and item.percentage:
                    amount = percentage_of(salaries[item.employee_id], item.percentage)

                existing = (await self.db.execute(
                    select(Bonus).where(
                        Bonus.employee_id == item.employee_id,
                        Bonus.bonus_type_id == request.bonus_type_id,
                        Bonus.bonus_month_year == period,
                    )
                )).scalar_one_or_none()

                if existing is not None:
                    merged_old.append(existing.to_dict())
                    existing.amount = reconcile_amount(existing.amount, amount, request.adjustment_method)
                    existing.percentage = item.percentage
                    existing.payment_method = request.payment_method
                    existing.adjustment_method = request.adjustment_method
                    existing.is_taxable = item.is_taxable
                    existing.tax_percentage = item.tax_percentage
                    if request.notes is not None:
                        existing.notes = request.notes
                    existing.updated_by_id = ctx.user_id
                    saved.append(existing)
                else:
                    bonus = Bonus(
                        employee_id=item.employee_id,
                        bonus_type_id=request.bonus_type_id,
                        amount=amount,
                        calculation_type=calculation_type,
                        percentage=item.percentage,
                        bonus_month=month,
                        bonus_year=year,
                        bonus_month_year=period,
                        payment_method=request.payment_method,
                        adjustment_method=request.adjustment_method,
                        is_taxable=item.is_taxable,
                        tax_percentage=item.tax_percentage,
                        notes=request.notes,
                        created_by_id=ctx.user_id,
                    )
                    self.db.add(bonus)
                    saved.append(bonus)
                # later items must see rows added by earlier ones
                await self.db.flush()

            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning("Failed to create bonuses for %s: %s", period, e)
            await self.audit.record(
                ActivityEvent.failure(
                    ActivityAction.CREATE, MODULE, ENTITY,
                    f"Failed to create {type_name} bonuses for {period}",
                    e,
                    new_values=payload,
                ),
                ctx,
            )
            return ApiResponse.fail("Failed to create bonuses")

        rows = [b.to_dict() for b in saved]
        await self.audit.record(
            ActivityEvent.success(
                ActivityAction.CREATE, MODULE, ENTITY,
                f"Created {len(rows)} {type_name} bonus(es) for {period}",
                old_values=merged_old or None,
                new_values=payload,
            ),
            ctx,
        )
        return ApiResponse.ok(rows, f"{len(rows)} bonus(es) saved successfully")

    async def update(self, id: uuid.UUID, payload: BonusUpdate, ctx: Optional[AuditContext] = None) -> ApiResponse:
        return await self.crud.update(id, payload, ctx)

    async def remove(self, id: uuid.UUID, ctx: Optional[AuditContext] = None) -> ApiResponse:
        return await self.crud.remove(id, ctx)

    async def remove_bulk(self, ids: Sequence[uuid.UUID], ctx: Optional[AuditContext] = None) -> ApiResponse:
        return await self.crud.remove_bulk(ids, ctx)

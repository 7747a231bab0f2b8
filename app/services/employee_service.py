"""
PayrollHub - Employee Service

Audited employee CRUD plus posting transfers. A transfer writes the history
row and moves the employee in one transaction.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity_log import ActivityAction
from app.models.employee import Employee, EmployeeTransferHistory
from app.schemas.common import ApiResponse
from app.schemas.employee import EmployeeTransferRequest
from app.services.audit_service import ActivityEvent, AuditContext
from app.services.crud_service import AuditedCrudService

logger = logging.getLogger(__name__)


class EmployeeService(AuditedCrudService):
    """Service for employee operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, model=Employee, module="employees", entity="Employee", label="employee")

    async def transfer(
        self,
        employee_id: uuid.UUID,
        request: EmployeeTransferRequest,
        ctx: Optional[AuditContext] = None,
    ) -> ApiResponse:
        """
        Record a transfer and update the employee's current posting.

        Parts of the posting not named in the request keep their value.
        """
        ctx = ctx or AuditContext()
        employee = await self.fetch(employee_id)
        if employee is None:
            return ApiResponse.fail("Employee not found")

        code = employee.employee_code
        previous = {
            "location_id": employee.location_id,
            "city_id": employee.city_id,
            "state_id": employee.state_id,
        }
        target = {
            "location_id": request.new_location_id or employee.location_id,
            "city_id": request.new_city_id or employee.city_id,
            "state_id": request.new_state_id or employee.state_id,
        }

        history = EmployeeTransferHistory(
            employee_id=employee_id,
            transfer_date=request.transfer_date,
            previous_location_id=previous["location_id"],
            previous_city_id=previous["city_id"],
            previous_state_id=previous["state_id"],
            new_location_id=target["location_id"],
            new_city_id=target["city_id"],
            new_state_id=target["state_id"],
            reason=request.reason,
            created_by_id=ctx.user_id,
        )
        self.db.add(history)
        for key, value in target.items():
            setattr(employee, key, value)
        employee.updated_by_id = ctx.user_id

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning("Failed to transfer employee %s: %s", code, e)
            await self.audit.record(
                ActivityEvent.failure(
                    ActivityAction.UPDATE, "employee-transfers", "EmployeeTransferHistory",
                    f"Failed to transfer employee {code}",
                    e,
                    entity_id=str(employee_id),
                    old_values=previous,
                    new_values=target,
                ),
                ctx,
            )
            return ApiResponse.fail("Failed to transfer employee")

        row = history.to_dict()
        await self.audit.record(
            ActivityEvent.success(
                ActivityAction.UPDATE, "employee-transfers", "EmployeeTransferHistory",
                f"Transferred employee {code}",
                entity_id=str(employee_id),
                old_values=previous,
                new_values=target,
            ),
            ctx,
        )
        return ApiResponse.ok(row, "Employee transferred successfully")

    async def list_transfers(self, employee_id: uuid.UUID) -> ApiResponse:
        """Transfer history for an employee, latest transfer first."""
        result = await self.db.execute(
            select(EmployeeTransferHistory)
            .where(EmployeeTransferHistory.employee_id == employee_id)
            .order_by(
                EmployeeTransferHistory.transfer_date.desc(),
                EmployeeTransferHistory.created_at.desc(),
            )
        )
        return ApiResponse.ok([t.to_dict() for t in result.scalars().all()])

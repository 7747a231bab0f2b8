"""
PayrollHub - Employee Models

Employee master record and the posting (transfer) history.
"""

import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import AuditMixin, BaseModel, StatusMixin


def _fk(target: str, nullable: bool = True):
    return mapped_column(
        Uuid(as_uuid=True),
        ForeignKey(target, ondelete="RESTRICT"),
        nullable=nullable,
        index=True,
    )


class Employee(BaseModel, AuditMixin, StatusMixin):
    """Employee master record."""

    __tablename__ = "employees"

    employee_code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    employee_name: Mapped[str] = mapped_column(String(255), nullable=False)
    department_id: Mapped[Optional[uuid.UUID]] = _fk("departments.id")
    designation_id: Mapped[Optional[uuid.UUID]] = _fk("designations.id")
    employee_salary: Mapped[Decimal] = mapped_column(
        Numeric(precision=18, scale=2),
        default=Decimal("0"),
        nullable=False,
        comment="Current gross monthly salary",
    )
    joining_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Current posting
    location_id: Mapped[Optional[uuid.UUID]] = _fk("locations.id")
    city_id: Mapped[Optional[uuid.UUID]] = _fk("cities.id")
    state_id: Mapped[Optional[uuid.UUID]] = _fk("states.id")

    def __repr__(self) -> str:
        return f"<Employee(code={self.employee_code}, name={self.employee_name})>"


class EmployeeTransferHistory(BaseModel):
    """One row per change of an employee's posting."""

    __tablename__ = "employee_transfer_histories"

    employee_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    transfer_date: Mapped[date] = mapped_column(Date, nullable=False)

    previous_location_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), nullable=True)
    previous_city_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), nullable=True)
    previous_state_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), nullable=True)

    new_location_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), nullable=True)
    new_city_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), nullable=True)
    new_state_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), nullable=True)

    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_by_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), nullable=True)

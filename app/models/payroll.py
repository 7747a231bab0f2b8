"""
PayrollHub - Payroll Adjustment Models

Bonuses and deductions applied to an employee for a payroll period.
Each is unique per (employee, type, period); a second submission for the
same period is merged into the existing row.
"""

import uuid
import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import (
    Boolean, Date, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint, Uuid
)
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import AuditMixin, BaseModel, StatusMixin


class PaymentMethod(str, Enum):
    WITH_SALARY = "with_salary"
    SEPARATELY = "separately"


class AdjustmentMethod(str, Enum):
    """How a repeat submission for the same period changes the stored amount."""
    DISTRIBUTED_REMAINING_MONTHS = "distributed-remaining-months"
    DEDUCT_CURRENT_MONTH = "deduct-current-month"


class Bonus(BaseModel, AuditMixin, StatusMixin):
    __tablename__ = "bonuses"
    __table_args__ = (
        UniqueConstraint(
            "employee_id", "bonus_type_id", "bonus_month_year",
            name="uq_bonuses_employee_type_period",
        ),
    )

    employee_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bonus_type_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("bonus_types.id", ondelete="RESTRICT"),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    calculation_type: Mapped[str] = mapped_column(String(20), default="Amount", nullable=False)
    percentage: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=5, scale=2), nullable=True)

    bonus_month: Mapped[int] = mapped_column(Integer, nullable=False)
    bonus_year: Mapped[int] = mapped_column(Integer, nullable=False)
    bonus_month_year: Mapped[str] = mapped_column(String(7), nullable=False, index=True)

    payment_method: Mapped[str] = mapped_column(
        String(30), default=PaymentMethod.WITH_SALARY.value, nullable=False
    )
    adjustment_method: Mapped[str] = mapped_column(
        String(40), default=AdjustmentMethod.DISTRIBUTED_REMAINING_MONTHS.value, nullable=False
    )
    is_taxable: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    tax_percentage: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=5, scale=2), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Deduction(BaseModel, AuditMixin, StatusMixin):
    __tablename__ = "deductions"
    __table_args__ = (
        UniqueConstraint(
            "employee_id", "deduction_head_id", "month", "year",
            name="uq_deductions_employee_head_period",
        ),
    )

    employee_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    deduction_head_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("deduction_heads.id", ondelete="RESTRICT"),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    month: Mapped[str] = mapped_column(String(2), nullable=False)
    year: Mapped[str] = mapped_column(String(4), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    is_taxable: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    tax_percentage: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=5, scale=2), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

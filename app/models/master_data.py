"""
PayrollHub - Master Data Models

Small reference lists used as lookup values across HR and payroll:
allowance/deduction heads, bonus types, designations, grades and the like,
plus the payroll policy tables (provident fund, EOBI, tax slabs, rebate
natures, working hours).

Most lists enforce a unique ``name`` at the database level. Institute,
Qualification and Equipment intentionally allow duplicate names.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import AuditMixin, BaseModel, StatusMixin


class BonusCalculationType(str, Enum):
    """How a bonus type derives its amount."""
    AMOUNT = "Amount"
    PERCENTAGE = "Percentage"


class RebateType(str, Enum):
    FIXED = "fixed"
    OTHER = "other"


class MasterListItem(BaseModel, AuditMixin, StatusMixin):
    """Abstract base for name-only lookup lists."""

    __abstract__ = True

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name})>"


class AllowanceHead(MasterListItem):
    __tablename__ = "allowance_heads"


class DeductionHead(MasterListItem):
    __tablename__ = "deduction_heads"


class BonusType(MasterListItem):
    __tablename__ = "bonus_types"

    calculation_type: Mapped[str] = mapped_column(
        String(20),
        default=BonusCalculationType.AMOUNT.value,
        server_default=BonusCalculationType.AMOUNT.value,
        nullable=False,
    )


class Institute(MasterListItem):
    __tablename__ = "institutes"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)


class JobType(MasterListItem):
    __tablename__ = "job_types"


class LeaveType(MasterListItem):
    __tablename__ = "leave_types"


class Qualification(MasterListItem):
    __tablename__ = "qualifications"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)


class Designation(MasterListItem):
    __tablename__ = "designations"


class MaritalStatus(MasterListItem):
    __tablename__ = "marital_statuses"


class EmployeeGrade(MasterListItem):
    __tablename__ = "employee_grades"


class Equipment(MasterListItem):
    __tablename__ = "equipments"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)


class LoanType(MasterListItem):
    __tablename__ = "loan_types"


class Department(MasterListItem):
    __tablename__ = "departments"


# =============================================================================
# PAYROLL POLICY TABLES
# =============================================================================

class SalaryBreakup(MasterListItem):
    """Named split of gross salary into components."""

    __tablename__ = "salary_breakups"

    details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class ProvidentFund(MasterListItem):
    """Provident fund contribution rate."""

    __tablename__ = "provident_funds"

    percentage: Mapped[Decimal] = mapped_column(
        Numeric(precision=5, scale=2),
        nullable=False,
        comment="Contribution as a percentage of basic salary",
    )


class EOBI(BaseModel, AuditMixin, StatusMixin):
    """Employees' Old-Age Benefits Institution contribution for a month."""

    __tablename__ = "eobis"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    year_month: Mapped[str] = mapped_column(
        String(7),
        unique=True,
        nullable=False,
        comment="Period in YYYY-MM form",
    )


class TaxSlab(MasterListItem):
    """Income tax bracket. Stored as reference data only."""

    __tablename__ = "tax_slabs"

    min_amount: Mapped[Decimal] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    max_amount: Mapped[Decimal] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(precision=5, scale=2), nullable=False)


class RebateNature(MasterListItem):
    """Tax rebate category (e.g. donations us 61, pension us 63)."""

    __tablename__ = "rebate_natures"

    type: Mapped[str] = mapped_column(
        String(20),
        default=RebateType.OTHER.value,
        server_default=RebateType.OTHER.value,
        nullable=False,
    )
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    max_investment_percentage: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=5, scale=2), nullable=True
    )
    max_investment_amount: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=18, scale=2), nullable=True
    )
    details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    under_section: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    is_age_dependent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class WorkingHoursPolicy(MasterListItem):
    """Office timings. Times are stored as HH:MM strings."""

    __tablename__ = "working_hours_policies"

    start_working_hours: Mapped[str] = mapped_column(String(5), nullable=False)
    end_working_hours: Mapped[str] = mapped_column(String(5), nullable=False)
    start_break_time: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    end_break_time: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    half_day_start_time: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    late_start_time: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    short_day_mins: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    overtime_rate: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=5, scale=2), nullable=True
    )

"""
PayrollHub - SQLAlchemy Models Package

This package contains all database models for the application.
"""

from app.models.base import BaseModel, TimestampMixin, AuditMixin, StatusMixin, STATUS_ACTIVE, STATUS_INACTIVE
from app.models.user import User
from app.models.activity_log import ActivityLog, ActivityAction, ActivityStatus
from app.models.master_data import (
    MasterListItem,
    BonusCalculationType,
    RebateType,
    AllowanceHead,
    DeductionHead,
    BonusType,
    Institute,
    JobType,
    LeaveType,
    Qualification,
    Designation,
    MaritalStatus,
    EmployeeGrade,
    Equipment,
    LoanType,
    Department,
    SalaryBreakup,
    ProvidentFund,
    EOBI,
    TaxSlab,
    RebateNature,
    WorkingHoursPolicy,
)
from app.models.geography import Country, State, City, Location
from app.models.employee import Employee, EmployeeTransferHistory
from app.models.payroll import Bonus, Deduction, PaymentMethod, AdjustmentMethod
from app.models.accounting import ChartOfAccount, AccountType

__all__ = [
    "BaseModel", "TimestampMixin", "AuditMixin", "StatusMixin",
    "STATUS_ACTIVE", "STATUS_INACTIVE",
    "User",
    "ActivityLog", "ActivityAction", "ActivityStatus",
    "MasterListItem", "BonusCalculationType", "RebateType",
    "AllowanceHead", "DeductionHead", "BonusType", "Institute", "JobType",
    "LeaveType", "Qualification", "Designation", "MaritalStatus",
    "EmployeeGrade", "Equipment", "LoanType", "Department",
    "SalaryBreakup", "ProvidentFund", "EOBI", "TaxSlab", "RebateNature",
    "WorkingHoursPolicy",
    "Country", "State", "City", "Location",
    "Employee", "EmployeeTransferHistory",
    "Bonus", "Deduction", "PaymentMethod", "AdjustmentMethod",
    "ChartOfAccount", "AccountType",
]

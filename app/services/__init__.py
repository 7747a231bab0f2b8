"""
PayrollHub - Services Package

Business logic services.
"""

from app.services.auth_service import AuthService
from app.services.audit_service import ActivityLogService, ActivityEvent, AuditContext
from app.services.crud_service import AuditedCrudService
from app.services.master_data_service import MASTER_RESOURCES, MasterResource, get_master_service
from app.services.geography_service import CityService, GeographyService
from app.services.employee_service import EmployeeService
from app.services.bonus_service import BonusService
from app.services.deduction_service import DeductionService
from app.services.chart_of_account_service import ChartOfAccountService

__all__ = [
    "AuthService",
    "ActivityLogService",
    "ActivityEvent",
    "AuditContext",
    "AuditedCrudService",
    "MASTER_RESOURCES",
    "MasterResource",
    "get_master_service",
    "CityService",
    "GeographyService",
    "EmployeeService",
    "BonusService",
    "DeductionService",
    "ChartOfAccountService",
]

"""
PayrollHub - Schemas Package

Pydantic schemas for request/response validation.
"""

from app.schemas.common import ApiResponse, BulkIdsRequest, StatusValue
from app.schemas.auth import TokenResponse, UserLoginRequest, UserResponse
from app.schemas.master_data import (
    MasterListCreate,
    MasterListUpdate,
    BonusTypeCreate,
    BonusTypeUpdate,
    SalaryBreakupCreate,
    SalaryBreakupUpdate,
    ProvidentFundCreate,
    ProvidentFundUpdate,
    EOBICreate,
    EOBIUpdate,
    TaxSlabCreate,
    TaxSlabUpdate,
    RebateNatureCreate,
    RebateNatureUpdate,
    WorkingHoursPolicyCreate,
    WorkingHoursPolicyUpdate,
)
from app.schemas.geography import (
    CityCreate,
    CityUpdate,
    CityBulkCreateRequest,
    LocationCreate,
    LocationUpdate,
)
from app.schemas.employee import EmployeeCreate, EmployeeUpdate, EmployeeTransferRequest
from app.schemas.payroll import (
    BonusItem,
    BonusCreateRequest,
    BonusUpdate,
    DeductionItem,
    DeductionCreateRequest,
    DeductionUpdate,
)
from app.schemas.accounting import ChartOfAccountCreate, ChartOfAccountUpdate, AccountSeedNode

__all__ = [
    "ApiResponse", "BulkIdsRequest", "StatusValue",
    "TokenResponse", "UserLoginRequest", "UserResponse",
    "MasterListCreate", "MasterListUpdate",
    "BonusTypeCreate", "BonusTypeUpdate",
    "SalaryBreakupCreate", "SalaryBreakupUpdate",
    "ProvidentFundCreate", "ProvidentFundUpdate",
    "EOBICreate", "EOBIUpdate",
    "TaxSlabCreate", "TaxSlabUpdate",
    "RebateNatureCreate", "RebateNatureUpdate",
    "WorkingHoursPolicyCreate", "WorkingHoursPolicyUpdate",
    "CityCreate", "CityUpdate", "CityBulkCreateRequest",
    "LocationCreate", "LocationUpdate",
    "EmployeeCreate", "EmployeeUpdate", "EmployeeTransferRequest",
    "BonusItem", "BonusCreateRequest", "BonusUpdate",
    "DeductionItem", "DeductionCreateRequest", "DeductionUpdate",
    "ChartOfAccountCreate", "ChartOfAccountUpdate", "AccountSeedNode",
]

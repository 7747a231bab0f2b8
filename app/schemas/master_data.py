"""
PayrollHub - Master Data Schemas

Pydantic schemas for lookup lists and payroll policy tables.
Create schemas carry defaults; update schemas are all-optional so that
only supplied fields are applied.
"""

from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.schemas.common import StatusValue


HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
YEAR_MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


# ===========================================
# LOOKUP LISTS
# ===========================================

def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name must not be blank")
    return v


class MasterListCreate(BaseModel):
    """Schema for creating a lookup list item."""
    name: str = Field(..., min_length=1, max_length=255)
    status: StatusValue = "active"

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _clean_name(v)


class MasterListUpdate(BaseModel):
    """Schema for updating a lookup list item."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    status: Optional[StatusValue] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _clean_name(v)


class BonusTypeCreate(MasterListCreate):
    calculation_type: Literal["Amount", "Percentage"] = "Amount"


class BonusTypeUpdate(MasterListUpdate):
    calculation_type: Optional[Literal["Amount", "Percentage"]] = None


# ===========================================
# PAYROLL POLICY TABLES
# ===========================================

class SalaryBreakupCreate(MasterListCreate):
    details: Optional[str] = None


class SalaryBreakupUpdate(MasterListUpdate):
    details: Optional[str] = None


class ProvidentFundCreate(MasterListCreate):
    percentage: Decimal = Field(..., ge=0, le=100)


class ProvidentFundUpdate(MasterListUpdate):
    percentage: Optional[Decimal] = Field(None, ge=0, le=100)


class EOBICreate(MasterListCreate):
    amount: Decimal = Field(..., ge=0)
    year_month: str = Field(..., pattern=YEAR_MONTH_PATTERN, description="Period, e.g. 2024-03")


class EOBIUpdate(MasterListUpdate):
    amount: Optional[Decimal] = Field(None, ge=0)
    year_month: Optional[str] = Field(None, pattern=YEAR_MONTH_PATTERN)


class TaxSlabCreate(MasterListCreate):
    min_amount: Decimal = Field(..., ge=0)
    max_amount: Decimal = Field(..., ge=0)
    rate: Decimal = Field(..., ge=0, le=100)

    @model_validator(mode="after")
    def check_bounds(self):
        if self.max_amount < self.min_amount:
            raise ValueError("max_amount must not be less than min_amount")
        return self


class TaxSlabUpdate(MasterListUpdate):
    min_amount: Optional[Decimal] = Field(None, ge=0)
    max_amount: Optional[Decimal] = Field(None, ge=0)
    rate: Optional[Decimal] = Field(None, ge=0, le=100)

    @model_validator(mode="after")
    def check_bounds(self):
        # one-sided changes are checked against the stored row by the service
        if self.min_amount is not None and self.max_amount is not None and self.max_amount < self.min_amount:
            raise ValueError("max_amount must not be less than min_amount")
        return self


class RebateNatureCreate(MasterListCreate):
    type: Literal["fixed", "other"] = "other"
    category: Optional[str] = Field(None, max_length=100)
    max_investment_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    max_investment_amount: Optional[Decimal] = Field(None, ge=0)
    details: Optional[str] = None
    under_section: Optional[str] = Field(None, max_length=50)
    is_age_dependent: bool = False


class RebateNatureUpdate(MasterListUpdate):
    type: Optional[Literal["fixed", "other"]] = None
    category: Optional[str] = Field(None, max_length=100)
    max_investment_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    max_investment_amount: Optional[Decimal] = Field(None, ge=0)
    details: Optional[str] = None
    under_section: Optional[str] = Field(None, max_length=50)
    is_age_dependent: Optional[bool] = None


class WorkingHoursPolicyCreate(MasterListCreate):
    start_working_hours: str = Field(..., pattern=HHMM_PATTERN)
    end_working_hours: str = Field(..., pattern=HHMM_PATTERN)
    start_break_time: Optional[str] = Field(None, pattern=HHMM_PATTERN)
    end_break_time: Optional[str] = Field(None, pattern=HHMM_PATTERN)
    half_day_start_time: Optional[str] = Field(None, pattern=HHMM_PATTERN)
    late_start_time: Optional[str] = Field(None, pattern=HHMM_PATTERN)
    short_day_mins: Optional[int] = Field(None, ge=0)
    overtime_rate: Optional[Decimal] = Field(None, ge=0)


class WorkingHoursPolicyUpdate(MasterListUpdate):
    start_working_hours: Optional[str] = Field(None, pattern=HHMM_PATTERN)
    end_working_hours: Optional[str] = Field(None, pattern=HHMM_PATTERN)
    start_break_time: Optional[str] = Field(None, pattern=HHMM_PATTERN)
    end_break_time: Optional[str] = Field(None, pattern=HHMM_PATTERN)
    half_day_start_time: Optional[str] = Field(None, pattern=HHMM_PATTERN)
    late_start_time: Optional[str] = Field(None, pattern=HHMM_PATTERN)
    short_day_mins: Optional[int] = Field(None, ge=0)
    overtime_rate: Optional[Decimal] = Field(None, ge=0)

"""
PayrollHub - Employee Schemas
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.schemas.common import StatusValue


class EmployeeCreate(BaseModel):
    """Schema for creating an employee."""
    employee_code: str = Field(..., min_length=1, max_length=50)
    employee_name: str = Field(..., min_length=1, max_length=255)
    department_id: Optional[UUID] = None
    designation_id: Optional[UUID] = None
    employee_salary: Decimal = Field(Decimal("0"), ge=0)
    joining_date: Optional[date] = None
    location_id: Optional[UUID] = None
    city_id: Optional[UUID] = None
    state_id: Optional[UUID] = None
    status: StatusValue = "active"


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee. Only supplied fields change."""
    employee_code: Optional[str] = Field(None, min_length=1, max_length=50)
    employee_name: Optional[str] = Field(None, min_length=1, max_length=255)
    department_id: Optional[UUID] = None
    designation_id: Optional[UUID] = None
    employee_salary: Optional[Decimal] = Field(None, ge=0)
    joining_date: Optional[date] = None
    location_id: Optional[UUID] = None
    city_id: Optional[UUID] = None
    state_id: Optional[UUID] = None
    status: Optional[StatusValue] = None


class EmployeeTransferRequest(BaseModel):
    """
    Move an employee to a new posting. At least one of location, city or
    state must be given; omitted parts keep their current value.
    """
    transfer_date: date
    new_location_id: Optional[UUID] = None
    new_city_id: Optional[UUID] = None
    new_state_id: Optional[UUID] = None
    reason: Optional[str] = Field(None, max_length=1000)

    @model_validator(mode="after")
    def require_destination(self):
        if not (self.new_location_id or self.new_city_id or self.new_state_id):
            raise ValueError("At least one of new_location_id, new_city_id or new_state_id is required")
        return self

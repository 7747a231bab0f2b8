"""
PayrollHub - Bonus & Deduction Schemas

A create request names the period once and carries one line item per
employee. All line items of a request are applied atomically.
"""

from datetime import date
from decimal import Decimal
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import StatusValue


PaymentMethodValue = Literal["with_salary", "separately"]
AdjustmentMethodValue = Literal["distributed-remaining-months", "deduct-current-month"]


# ===========================================
# BONUSES
# ===========================================

class BonusItem(BaseModel):
    """One employee's line in a bonus request."""
    employee_id: UUID
    amount: Decimal = Field(Decimal("0"), ge=0)
    percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    is_taxable: bool = True
    tax_percentage: Optional[Decimal] = Field(None, ge=0, le=100)


class BonusCreateRequest(BaseModel):
    """Schema for creating (or reconciling) bonuses for one period."""
    bonus_type_id: UUID
    bonus_month_year: str = Field(..., description="Payroll period, e.g. 2024-03")
    bonuses: List[BonusItem] = Field(..., min_length=1)
    payment_method: PaymentMethodValue = "with_salary"
    adjustment_method: AdjustmentMethodValue = "distributed-remaining-months"
    notes: Optional[str] = None


class BonusUpdate(BaseModel):
    """Schema for updating a single bonus. Only supplied fields change."""
    bonus_type_id: Optional[UUID] = None
    amount: Optional[Decimal] = Field(None, ge=0)
    percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    payment_method: Optional[PaymentMethodValue] = None
    adjustment_method: Optional[AdjustmentMethodValue] = None
    is_taxable: Optional[bool] = None
    tax_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    notes: Optional[str] = None
    status: Optional[StatusValue] = None


# ===========================================
# DEDUCTIONS
# ===========================================

class DeductionItem(BaseModel):
    """One employee/head line in a deduction request."""
    employee_id: UUID
    deduction_head_id: UUID
    amount: Decimal = Field(..., ge=0)
    is_taxable: bool = False
    tax_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    notes: Optional[str] = None


class DeductionCreateRequest(BaseModel):
    """Schema for creating (or reconciling) deductions for one month."""
    month: str = Field(..., description="Month, 01 to 12")
    year: str = Field(..., pattern=r"^\d{4}$")
    date: date
    deductions: List[DeductionItem] = Field(..., min_length=1)
    adjustment_method: Optional[AdjustmentMethodValue] = None

    @field_validator("month")
    @classmethod
    def normalize_month(cls, v: str) -> str:
        if not v.isdigit() or not 1 <= int(v) <= 12:
            raise ValueError("month must be between 01 and 12")
        return f"{int(v):02d}"


class DeductionUpdate(BaseModel):
    deduction_head_id: Optional[UUID] = None
    amount: Optional[Decimal] = Field(None, ge=0)
    is_taxable: Optional[bool] = None
    tax_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    notes: Optional[str] = None
    status: Optional[StatusValue] = None

"""
PayrollHub - Chart of Accounts Schemas
"""

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.accounting import AccountType


class ChartOfAccountCreate(BaseModel):
    """Schema for creating an account."""
    code: str = Field(..., min_length=1, max_length=20, description="Account code, e.g. '11110'")
    name: str = Field(..., min_length=1, max_length=255)
    type: AccountType
    is_group: bool = False
    parent_id: Optional[UUID] = None
    balance: Decimal = Decimal("0.00")
    is_active: bool = True


class ChartOfAccountUpdate(BaseModel):
    """Schema for updating an account. Only supplied fields change."""
    code: Optional[str] = Field(None, min_length=1, max_length=20)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[AccountType] = None
    is_group: Optional[bool] = None
    parent_id: Optional[UUID] = None
    balance: Optional[Decimal] = None
    is_active: Optional[bool] = None


class AccountSeedNode(BaseModel):
    """One node of the seeded chart of accounts tree."""
    code: str
    name: str
    type: AccountType
    children: List["AccountSeedNode"] = []

    @property
    def is_group(self) -> bool:
        return bool(self.children)


# For Pydantic v2 self-referencing
AccountSeedNode.model_rebuild()

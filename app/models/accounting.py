"""
PayrollHub - Chart of Accounts Model

Hierarchical chart of accounts with five root branches
(Assets, Liabilities, Equity, Income, Expenses).

Only group accounts may have children; a group with children cannot be
deleted (the self-referencing foreign key is RESTRICT).
"""

import uuid
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Numeric, String, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import AuditMixin, BaseModel


class AccountType(str, Enum):
    """Main account types."""
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class ChartOfAccount(BaseModel, AuditMixin):
    """Chart of Accounts node."""

    __tablename__ = "chart_of_accounts"

    code: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
        comment="Account code, e.g. 11110",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[AccountType] = mapped_column(
        SQLEnum(AccountType, name="account_type"),
        nullable=False,
    )
    is_group: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        comment="Group accounts only contain children and hold no postings",
    )
    parent_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("chart_of_accounts.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(precision=18, scale=2),
        default=Decimal("0.00"),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<ChartOfAccount(code={self.code}, name={self.name})>"

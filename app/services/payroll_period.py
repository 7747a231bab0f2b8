"""
PayrollHub - Payroll Period Helpers

Period parsing and the reconciliation rule applied when a bonus or deduction
is submitted again for a period that already has a row.
"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

from app.models.payroll import AdjustmentMethod
from app.utils.error_handling import InvalidPeriodException


_MONTH_YEAR = re.compile(r"^(\d{4})-(\d{2})$")
CENT = Decimal("0.01")


def parse_month_year(value: str, field: str = "bonus_month_year") -> Tuple[int, int]:
    """Split ``YYYY-MM`` into (year, month)."""
    match = _MONTH_YEAR.match(value or "")
    if not match:
        raise InvalidPeriodException(value, field)
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidPeriodException(value, field)
    return year, month


def reconcile_amount(existing: Decimal, new: Decimal, adjustment_method: Optional[str]) -> Decimal:
    """
    Amount to store when a period already has a row.

    ``deduct-current-month`` subtracts and floors at zero; every other value,
    including none, adds.
    """
    existing = Decimal(existing or 0)
    new = Decimal(new or 0)
    if adjustment_method == AdjustmentMethod.DEDUCT_CURRENT_MONTH.value:
        return max(Decimal("0"), existing - new)
    return existing + new


def percentage_of(salary: Decimal, percentage: Decimal) -> Decimal:
    """``salary * percentage / 100`` rounded to cents."""
    return (Decimal(salary) * Decimal(percentage) / Decimal(100)).quantize(CENT, rounding=ROUND_HALF_UP)

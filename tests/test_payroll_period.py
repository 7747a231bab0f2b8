"""
PayrollHub - Payroll Period Helper Tests
"""

from decimal import Decimal

import pytest

from app.services.payroll_period import parse_month_year, percentage_of, reconcile_amount
from app.utils.error_handling import InvalidPeriodException


class TestParseMonthYear:

    def test_valid_period(self):
        assert parse_month_year("2024-03") == (2024, 3)
        assert parse_month_year("1999-12") == (1999, 12)

    @pytest.mark.parametrize("value", ["2024-3", "03-2024", "2024-00", "2024-13", "", "2024/03"])
    def test_invalid_period(self, value):
        with pytest.raises(InvalidPeriodException) as exc_info:
            parse_month_year(value)
        assert exc_info.value.field == "bonus_month_year"


class TestReconcileAmount:

    def test_adds_by_default(self):
        assert reconcile_amount(Decimal("100"), Decimal("50"), None) == Decimal("150")
        assert reconcile_amount(Decimal("100"), Decimal("50"), "distributed-remaining-months") == Decimal("150")

    def test_deduct_current_month_floors_at_zero(self):
        assert reconcile_amount(Decimal("100"), Decimal("30"), "deduct-current-month") == Decimal("70")
        assert reconcile_amount(Decimal("100"), Decimal("130"), "deduct-current-month") == Decimal("0")

    def test_percentage_rounds_to_cents(self):
        assert percentage_of(Decimal("33333.33"), Decimal("10")) == Decimal("3333.33")
        assert percentage_of(Decimal("100.05"), Decimal("50")) == Decimal("50.03")

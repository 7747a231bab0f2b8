"""
PayrollHub - Routers Package

FastAPI route handlers.

Routers:
- auth: Authentication (login, current user)
- master_data: Lookup lists and payroll policies, one router per resource
- geography: Countries, provinces and cities
- employees: Employees and transfers
- bonuses: Bonuses with period reconciliation
- deductions: Deductions with period reconciliation
- chart_of_accounts: Chart of accounts
- activity_logs: Activity log browsing
"""

from app.routers import (
    activity_logs,
    auth,
    bonuses,
    chart_of_accounts,
    deductions,
    employees,
    geography,
    master_data,
)

__all__ = [
    "activity_logs",
    "auth",
    "bonuses",
    "chart_of_accounts",
    "deductions",
    "employees",
    "geography",
    "master_data",
]

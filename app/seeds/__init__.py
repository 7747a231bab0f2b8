"""
PayrollHub - Seed Routines

Reference data loaders used by ``scripts/seed.py``.
"""

from app.seeds.chart_of_accounts import CHART_OF_ACCOUNTS, seed_chart_of_accounts
from app.seeds.geography import seed_cities
from app.seeds.master_data import seed_master_data

__all__ = [
    "CHART_OF_ACCOUNTS",
    "seed_chart_of_accounts",
    "seed_cities",
    "seed_master_data",
]

"""
Seed Script: Reference Data
===========================
Populates reference data for a fresh PayrollHub database.

This script seeds:
- Chart of accounts (five-branch tree)
- Countries, provinces and cities (from the cities JSON file)
- Designations, job types, marital statuses and leave types
- The initial administrator (when ADMIN_PASSWORD is set)

Every step is idempotent and can be re-run.

Usage:
    python scripts/seed.py
    python scripts/seed.py --only coa
    python scripts/seed.py --only geo --cities-file data/city.json
"""

import argparse
import asyncio
import logging

# Add project root to path
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import async_session_maker, init_db
from app.seeds import seed_chart_of_accounts, seed_cities, seed_master_data
from app.services.auth_service import AuthService

logger = logging.getLogger("payrollhub.seed")

STEPS = ("coa", "geo", "master", "admin")


async def seed_admin(db: AsyncSession) -> None:
    """Create the administrator account if it does not exist yet."""
    if not settings.admin_password:
        logger.info("ADMIN_PASSWORD not set, skipping administrator")
        return

    auth = AuthService(db)
    if await auth.get_user_by_email(settings.admin_email):
        logger.info("Administrator %s already exists", settings.admin_email)
        return

    await auth.create_user(
        email=settings.admin_email,
        password=settings.admin_password,
        first_name=settings.admin_first_name,
        last_name=settings.admin_last_name,
    )
    logger.info("Created administrator %s", settings.admin_email)


async def main():
    parser = argparse.ArgumentParser(description="Seed PayrollHub reference data")
    parser.add_argument("--only", choices=STEPS, action="append", help="Run only this step (repeatable)")
    parser.add_argument("--cities-file", type=str, help="Override the cities JSON file")
    parser.add_argument("--create-tables", action="store_true", help="Create missing tables first")
    args = parser.parse_args()

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    steps = args.only or list(STEPS)

    if args.create_tables:
        await init_db()

    async with async_session_maker() as db:
        if "coa" in steps:
            await seed_chart_of_accounts(db)
        if "geo" in steps:
            await seed_cities(db, path=args.cities_file)
        if "master" in steps:
            await seed_master_data(db)
        if "admin" in steps:
            await seed_admin(db)

    logger.info("Seeding complete: %s", ", ".join(steps))


if __name__ == "__main__":
    asyncio.run(main())

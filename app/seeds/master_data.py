"""
PayrollHub - Master Data Seed

Default designations, job types, marital statuses and leave types.
Existing names are left alone.
"""

import logging
from typing import Dict, Iterable, Type

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.master_data import Designation, JobType, LeaveType, MasterListItem, MaritalStatus

logger = logging.getLogger(__name__)


DESIGNATIONS = [
    "Chief Executive Officer",
    "Chief Technology Officer",
    "Chief Financial Officer",
    "Chief Operating Officer",
    "Vice President",
    "Director",
    "Senior Manager",
    "Manager",
    "Assistant Manager",
    "Team Lead",
    "Senior Developer",
    "Developer",
    "Junior Developer",
    "Senior Analyst",
    "Analyst",
    "Junior Analyst",
    "Senior Engineer",
    "Engineer",
    "Junior Engineer",
    "Senior Designer",
    "Designer",
    "Junior Designer",
    "Senior Accountant",
    "Accountant",
    "Junior Accountant",
    "HR Manager",
    "HR Executive",
    "HR Assistant",
    "Sales Manager",
    "Sales Executive",
    "Sales Representative",
    "Marketing Manager",
    "Marketing Executive",
    "Marketing Coordinator",
    "Customer Service Representative",
    "Customer Support Specialist",
    "Administrative Assistant",
    "Office Administrator",
    "Receptionist",
    "Data Entry Operator",
    "Quality Assurance Engineer",
    "Quality Control Inspector",
    "Project Manager",
    "Project Coordinator",
    "Business Analyst",
    "Operations Manager",
    "Operations Executive",
    "Procurement Officer",
    "Legal Advisor",
    "Compliance Officer",
    "Security Officer",
    "Facilities Manager",
    "Maintenance Technician",
    "Driver",
    "Cleaner",
    "Intern",
    "Trainee",
]

JOB_TYPES = [
    "Full Time", "Part Time", "Contract", "Temporary",
    "Internship", "Freelance", "Consultant", "Volunteer",
]

MARITAL_STATUSES = ["Single", "Married", "Divorced", "Widowed", "Separated"]

LEAVE_TYPES = [
    "Annual Leave",
    "Sick Leave",
    "Casual Leave",
    "Emergency Leave",
    "Maternity Leave",
    "Paternity Leave",
    "Compensatory Leave",
    "Unpaid Leave",
    "Half Day Leave",
    "Short Leave",
    "Privilege Leave",
]


async def seed_names(db: AsyncSession, model: Type[MasterListItem], names: Iterable[str]) -> Dict[str, int]:
    """Find-or-create each name in a lookup list."""
    result = await db.execute(select(model.name))
    existing = set(result.scalars().all())

    created = skipped = 0
    for name in names:
        if name in existing:
            skipped += 1
            continue
        db.add(model(name=name))
        existing.add(name)
        created += 1

    await db.commit()
    logger.info("%s: %d created, %d skipped", model.__tablename__, created, skipped)
    return {"created": created, "skipped": skipped}


async def seed_master_data(db: AsyncSession) -> Dict[str, Dict[str, int]]:
    return {
        "designations": await seed_names(db, Designation, DESIGNATIONS),
        "job_types": await seed_names(db, JobType, JOB_TYPES),
        "marital_statuses": await seed_names(db, MaritalStatus, MARITAL_STATUSES),
        "leave_types": await seed_names(db, LeaveType, LEAVE_TYPES),
    }

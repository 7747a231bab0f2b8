"""
PayrollHub - Master Data Service

Registry binding each lookup resource (URL slug) to its model, schemas and
labels. Every entry is served by the same audited CRUD implementation.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Type

from pydantic import BaseModel as Schema
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import BaseModel
from app.models.geography import Location
from app.models.master_data import (
    AllowanceHead, BonusType, DeductionHead, Department, Designation, EOBI,
    EmployeeGrade, Equipment, Institute, JobType, LeaveType, LoanType,
    MaritalStatus, ProvidentFund, Qualification, RebateNature, SalaryBreakup,
    TaxSlab, WorkingHoursPolicy,
)
from app.schemas.geography import LocationCreate, LocationUpdate
from app.schemas.master_data import (
    BonusTypeCreate, BonusTypeUpdate, EOBICreate, EOBIUpdate,
    MasterListCreate, MasterListUpdate, ProvidentFundCreate, ProvidentFundUpdate,
    RebateNatureCreate, RebateNatureUpdate, SalaryBreakupCreate, SalaryBreakupUpdate,
    TaxSlabCreate, TaxSlabUpdate, WorkingHoursPolicyCreate, WorkingHoursPolicyUpdate,
)
from app.services.crud_service import AuditedCrudService
from app.utils.error_handling import ValidationException


class TaxSlabService(AuditedCrudService):
    """Tax slabs keep max_amount >= min_amount after partial updates."""

    def validate_row(self, obj: TaxSlab) -> None:
        if obj.max_amount < obj.min_amount:
            raise ValidationException(
                "max_amount must not be less than min_amount",
                field="max_amount",
                details={"min_amount": str(obj.min_amount), "max_amount": str(obj.max_amount)},
            )


@dataclass(frozen=True)
class MasterResource:
    """One lookup resource exposed under ``/api/<slug>``."""
    slug: str
    model: Type[BaseModel]
    entity: str
    label: str
    label_plural: Optional[str] = None
    create_schema: Type[Schema] = MasterListCreate
    update_schema: Type[Schema] = MasterListUpdate
    tag: str = "Master Data"
    service_class: Type[AuditedCrudService] = AuditedCrudService

    def service(self, db: AsyncSession) -> AuditedCrudService:
        return self.service_class(
            db,
            model=self.model,
            module=self.slug,
            entity=self.entity,
            label=self.label,
            label_plural=self.label_plural,
        )


MASTER_RESOURCES: List[MasterResource] = [
    MasterResource("allowance-heads", AllowanceHead, "AllowanceHead", "allowance head"),
    MasterResource("deduction-heads", DeductionHead, "DeductionHead", "deduction head"),
    MasterResource(
        "bonus-types", BonusType, "BonusType", "bonus type",
        create_schema=BonusTypeCreate, update_schema=BonusTypeUpdate,
    ),
    MasterResource("institutes", Institute, "Institute", "institute"),
    MasterResource("job-types", JobType, "JobType", "job type"),
    MasterResource("leave-types", LeaveType, "LeaveType", "leave type"),
    MasterResource("qualifications", Qualification, "Qualification", "qualification"),
    MasterResource("designations", Designation, "Designation", "designation"),
    MasterResource("marital-statuses", MaritalStatus, "MaritalStatus", "marital status", "marital statuses"),
    MasterResource("employee-grades", EmployeeGrade, "EmployeeGrade", "employee grade"),
    MasterResource("equipments", Equipment, "Equipment", "equipment", "equipment"),
    MasterResource("loan-types", LoanType, "LoanType", "loan type"),
    MasterResource("departments", Department, "Department", "department"),
    MasterResource(
        "salary-breakups", SalaryBreakup, "SalaryBreakup", "salary breakup",
        create_schema=SalaryBreakupCreate, update_schema=SalaryBreakupUpdate, tag="Payroll Policies",
    ),
    MasterResource(
        "provident-funds", ProvidentFund, "ProvidentFund", "provident fund",
        create_schema=ProvidentFundCreate, update_schema=ProvidentFundUpdate, tag="Payroll Policies",
    ),
    MasterResource(
        "eobis", EOBI, "EOBI", "EOBI record",
        create_schema=EOBICreate, update_schema=EOBIUpdate, tag="Payroll Policies",
    ),
    MasterResource(
        "tax-slabs", TaxSlab, "TaxSlab", "tax slab",
        create_schema=TaxSlabCreate, update_schema=TaxSlabUpdate, tag="Payroll Policies",
        service_class=TaxSlabService,
    ),
    MasterResource(
        "rebate-natures", RebateNature, "RebateNature", "rebate nature",
        create_schema=RebateNatureCreate, update_schema=RebateNatureUpdate, tag="Payroll Policies",
    ),
    MasterResource(
        "working-hours-policies", WorkingHoursPolicy, "WorkingHoursPolicy",
        "working hours policy", "working hours policies",
        create_schema=WorkingHoursPolicyCreate, update_schema=WorkingHoursPolicyUpdate, tag="Payroll Policies",
    ),
    MasterResource(
        "locations", Location, "Location", "location",
        create_schema=LocationCreate, update_schema=LocationUpdate, tag="Geography",
    ),
]

MASTER_RESOURCES_BY_SLUG: Dict[str, MasterResource] = {r.slug: r for r in MASTER_RESOURCES}


def get_master_service(slug: str, db: AsyncSession) -> AuditedCrudService:
    """Audited CRUD service for a registered lookup resource."""
    return MASTER_RESOURCES_BY_SLUG[slug].service(db)

"""
PayrollHub - Master Data Tests

Audited CRUD over the lookup lists, through the API and the service.
"""

from decimal import Decimal
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity_log import ActivityLog
from app.models.master_data import AllowanceHead, Department, Institute
from app.schemas.master_data import MasterListCreate, MasterListUpdate
from app.services.audit_service import AuditContext
from app.services.master_data_service import MASTER_RESOURCES_BY_SLUG, get_master_service


async def _logs(db: AsyncSession, module: str):
    result = await db.execute(
        select(ActivityLog).where(ActivityLog.module == module).order_by(ActivityLog.created_at)
    )
    return result.scalars().all()


class TestMasterDataCreate:
    """Creating lookup list items."""

    @pytest.mark.asyncio
    async def test_create_defaults_to_active(self, client: AsyncClient, auth_headers, test_user):
        response = await client.post(
            "/api/allowance-heads",
            json={"name": "House Rent"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] is True
        assert body["message"] == "Allowance head created successfully"
        assert body["data"]["name"] == "House Rent"
        assert body["data"]["status"] == "active"
        assert body["data"]["created_by_id"] == str(test_user.id)

    @pytest.mark.asyncio
    async def test_create_writes_success_audit(self, client: AsyncClient, auth_headers, db_session, test_user):
        await client.post("/api/departments", json={"name": "Finance"}, headers=auth_headers)

        logs = await _logs(db_session, "departments")
        assert len(logs) == 1
        assert logs[0].action == "create"
        assert logs[0].status == "success"
        assert logs[0].entity == "Department"
        assert logs[0].description == "Created department Finance"
        assert logs[0].user_id == test_user.id
        assert logs[0].new_values["name"] == "Finance"

    @pytest.mark.asyncio
    async def test_duplicate_name_returns_failure_and_audits(
        self, client: AsyncClient, auth_headers, db_session
    ):
        first = await client.post("/api/departments", json={"name": "Finance"}, headers=auth_headers)
        second = await client.post("/api/departments", json={"name": "Finance"}, headers=auth_headers)

        assert first.json()["status"] is True
        assert second.status_code == 201
        assert second.json()["status"] is False
        assert second.json()["message"] == "Failed to create department"

        count = await db_session.execute(select(func.count(Department.id)))
        assert count.scalar_one() == 1

        logs = await _logs(db_session, "departments")
        assert [log.status for log in logs] == ["success", "failure"]
        assert logs[1].error_message

    @pytest.mark.asyncio
    async def test_institute_names_may_repeat(self, client: AsyncClient, auth_headers, db_session):
        for _ in range(2):
            response = await client.post(
                "/api/institutes", json={"name": "University of the Punjab"}, headers=auth_headers
            )
            assert response.json()["status"] is True

        count = await db_session.execute(select(func.count(Institute.id)))
        assert count.scalar_one() == 2

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, client: AsyncClient, auth_headers):
        response = await client.post("/api/job-types", json={"name": "   "}, headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["status"] is False

    @pytest.mark.asyncio
    async def test_bonus_type_carries_calculation_type(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/bonus-types",
            json={"name": "Annual", "calculation_type": "Percentage"},
            headers=auth_headers,
        )

        assert response.json()["data"]["calculation_type"] == "Percentage"

    @pytest.mark.asyncio
    async def test_tax_slab_bounds_validated(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/tax-slabs",
            json={"name": "Slab 2", "min_amount": 600000, "max_amount": 100000, "rate": 5},
            headers=auth_headers,
        )

        assert response.status_code == 422


class TestMasterDataBulk:
    """Bulk create / update / delete."""

    @pytest.mark.asyncio
    async def test_bulk_create_skips_existing(self, client: AsyncClient, auth_headers, db_session):
        db_session.add_all([AllowanceHead(name="Medical"), AllowanceHead(name="Conveyance")])
        await db_session.commit()

        response = await client.post(
            "/api/allowance-heads/bulk",
            json={"items": [
                {"name": "Medical"},
                {"name": "Conveyance"},
                {"name": "Utilities"},
                {"name": "Fuel"},
                {"name": "Mobile"},
            ]},
            headers=auth_headers,
        )

        body = response.json()
        assert body["status"] is True
        assert body["data"] == {"count": 3, "skipped": 2}

        names = await db_session.execute(select(AllowanceHead.name))
        assert sorted(names.scalars().all()) == ["Conveyance", "Fuel", "Medical", "Mobile", "Utilities"]

        logs = await _logs(db_session, "allowance-heads")
        assert logs[-1].description == "Bulk created allowance heads (3)"

    @pytest.mark.asyncio
    async def test_bulk_update_applies_partial_changes(self, client: AsyncClient, auth_headers, db_session):
        first = Department(name="Sales")
        second = Department(name="Support")
        db_session.add_all([first, second])
        await db_session.commit()

        response = await client.put(
            "/api/departments/bulk",
            json={"items": [
                {"id": str(first.id), "status": "inactive"},
                {"id": str(second.id), "name": "Customer Support"},
            ]},
            headers=auth_headers,
        )

        body = response.json()
        assert body["status"] is True
        rows = {row["id"]: row for row in body["data"]}
        assert rows[str(first.id)]["status"] == "inactive"
        assert rows[str(first.id)]["name"] == "Sales"
        assert rows[str(second.id)]["name"] == "Customer Support"
        assert rows[str(second.id)]["status"] == "active"

    @pytest.mark.asyncio
    async def test_bulk_update_unknown_id_changes_nothing(self, client: AsyncClient, auth_headers, db_session):
        department = Department(name="Sales")
        db_session.add(department)
        await db_session.commit()

        response = await client.put(
            "/api/departments/bulk",
            json={"items": [
                {"id": str(department.id), "name": "Renamed"},
                {"id": str(uuid4()), "name": "Ghost"},
            ]},
            headers=auth_headers,
        )

        assert response.json()["status"] is False
        result = await db_session.execute(select(Department.name))
        assert result.scalars().all() == ["Sales"]

    @pytest.mark.asyncio
    async def test_bulk_delete(self, client: AsyncClient, auth_headers, db_session):
        rows = [Department(name=f"Dept {i}") for i in range(3)]
        db_session.add_all(rows)
        await db_session.commit()

        response = await client.request(
            "DELETE",
            "/api/departments/bulk",
            json={"ids": [str(rows[0].id), str(rows[1].id)]},
            headers=auth_headers,
        )

        assert response.json()["data"] == {"count": 2}
        remaining = await db_session.execute(select(Department.name))
        assert remaining.scalars().all() == ["Dept 2"]

    @pytest.mark.asyncio
    async def test_bulk_delete_nothing_found(self, client: AsyncClient, auth_headers):
        response = await client.request(
            "DELETE",
            "/api/departments/bulk",
            json={"ids": [str(uuid4())]},
            headers=auth_headers,
        )

        assert response.json() == {"status": False, "data": None, "message": "No departments found"}


class TestMasterDataReadUpdateDelete:
    """Single-item operations."""

    @pytest.mark.asyncio
    async def test_list_filters_by_status_newest_first(self, client: AsyncClient, auth_headers, db_session):
        service = get_master_service("loan-types", db_session)
        await service.create(MasterListCreate(name="Car Loan"))
        await service.create(MasterListCreate(name="House Loan"))
        await service.create(MasterListCreate(name="Old Scheme", status="inactive"))

        response = await client.get("/api/loan-types?status=active", headers=auth_headers)

        names = [row["name"] for row in response.json()["data"]]
        assert names == ["House Loan", "Car Loan"]

    @pytest.mark.asyncio
    async def test_get_missing_returns_status_false(self, client: AsyncClient, auth_headers):
        response = await client.get(f"/api/designations/{uuid4()}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["status"] is False
        assert response.json()["message"] == "Designation not found"

    @pytest.mark.asyncio
    async def test_update_records_old_and_new_values(self, db_session: AsyncSession, test_user):
        service = get_master_service("leave-types", db_session)
        created = await service.create(MasterListCreate(name="Sick"))

        result = await service.update(
            created.data["id"],
            MasterListUpdate(name="Sick Leave"),
            AuditContext(user_id=test_user.id),
        )

        assert result.status is True
        assert result.data["name"] == "Sick Leave"
        assert result.data["updated_by_id"] == test_user.id

        logs = await _logs(db_session, "leave-types")
        assert logs[-1].action == "update"
        assert logs[-1].old_values["name"] == "Sick"
        assert logs[-1].new_values == {"name": "Sick Leave"}

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, auth_headers, db_session):
        department = Department(name="Legal")
        db_session.add(department)
        await db_session.commit()

        response = await client.delete(f"/api/departments/{department.id}", headers=auth_headers)

        assert response.json()["status"] is True
        logs = await _logs(db_session, "departments")
        assert logs[-1].action == "delete"
        assert logs[-1].old_values["name"] == "Legal"

    @pytest.mark.asyncio
    async def test_every_resource_is_routed(self, client: AsyncClient, auth_headers):
        for slug in MASTER_RESOURCES_BY_SLUG:
            response = await client.get(f"/api/{slug}", headers=auth_headers)
            assert response.status_code == 200, slug
            assert response.json() == {"status": True, "data": [], "message": None}

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client: AsyncClient):
        response = await client.get("/api/departments")

        assert response.status_code == 401
        assert response.json()["status"] is False


class TestMasterDataUpdateRules:
    """Updates are held to the same rules as creates."""

    @pytest.mark.asyncio
    async def test_blank_rename_rejected(self, client: AsyncClient, auth_headers, db_session):
        department = Department(name="Finance")
        db_session.add(department)
        await db_session.commit()

        response = await client.put(
            f"/api/departments/{department.id}",
            json={"name": "   "},
            headers=auth_headers,
        )

        assert response.status_code == 422
        response = await client.get(f"/api/departments/{department.id}", headers=auth_headers)
        assert response.json()["data"]["name"] == "Finance"

    @pytest.mark.asyncio
    async def test_blank_rename_rejected_in_bulk(self, client: AsyncClient, auth_headers, db_session):
        department = Department(name="Finance")
        db_session.add(department)
        await db_session.commit()

        response = await client.put(
            "/api/departments/bulk",
            json={"items": [{"id": str(department.id), "name": ""}]},
            headers=auth_headers,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_tax_slab_partial_update_cannot_invert_bounds(self, client: AsyncClient, auth_headers):
        created = await client.post(
            "/api/tax-slabs",
            json={"name": "Slab 3", "min_amount": "100", "max_amount": "200", "rate": "5"},
            headers=auth_headers,
        )
        slab_id = created.json()["data"]["id"]

        response = await client.put(
            f"/api/tax-slabs/{slab_id}",
            json={"max_amount": "50"},
            headers=auth_headers,
        )

        assert response.status_code == 422
        body = response.json()
        assert body["status"] is False
        assert body["error"]["field"] == "max_amount"

        response = await client.get(f"/api/tax-slabs/{slab_id}", headers=auth_headers)
        assert Decimal(response.json()["data"]["max_amount"]) == Decimal("200")

    @pytest.mark.asyncio
    async def test_tax_slab_update_with_both_bounds_inverted(self, client: AsyncClient, auth_headers):
        created = await client.post(
            "/api/tax-slabs",
            json={"name": "Slab 4", "min_amount": "100", "max_amount": "200", "rate": "5"},
            headers=auth_headers,
        )

        response = await client.put(
            f"/api/tax-slabs/{created.json()['data']['id']}",
            json={"min_amount": "900", "max_amount": "800"},
            headers=auth_headers,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_returns_stored_values(self, client: AsyncClient, auth_headers):
        created = await client.post(
            "/api/tax-slabs",
            json={"name": "Slab 5", "min_amount": "100", "max_amount": "200", "rate": "5"},
            headers=auth_headers,
        )
        assert created.json()["data"]["min_amount"] == "100.00"

        response = await client.put(
            f"/api/tax-slabs/{created.json()['data']['id']}",
            json={"max_amount": "650"},
            headers=auth_headers,
        )

        data = response.json()["data"]
        assert data["max_amount"] == "650.00"
        assert data["min_amount"] == "100.00"


class TestPayrollPolicyTables:
    """Create, read and update over the policy tables and locations."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "slug,payload,changes",
        [
            ("salary-breakups", {"name": "Basic", "details": "60% of gross"}, {"details": "65% of gross"}),
            ("provident-funds", {"name": "PF Standard", "percentage": "8.33"}, {"status": "inactive"}),
            ("eobis", {"name": "EOBI 2024", "amount": "370", "year_month": "2024-03"}, {"year_month": "2024-04"}),
            (
                "tax-slabs",
                {"name": "Slab 1", "min_amount": "0", "max_amount": "600000", "rate": "0"},
                {"name": "Exempt Slab"},
            ),
            (
                "rebate-natures",
                {"name": "Zakat", "type": "fixed", "under_section": "60"},
                {"is_age_dependent": True},
            ),
            (
                "working-hours-policies",
                {"name": "Standard Shift", "start_working_hours": "09:00", "end_working_hours": "17:00"},
                {"late_start_time": "09:15"},
            ),
            ("locations", {"name": "Head Office", "address": "Blue Area"}, {"address": "F-7 Markaz"}),
        ],
    )
    async def test_create_get_update(self, client: AsyncClient, auth_headers, db_session, slug, payload, changes):
        response = await client.post(f"/api/{slug}", json=payload, headers=auth_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] is True
        assert body["data"]["name"] == payload["name"]
        assert body["data"]["status"] == "active"
        item_id = body["data"]["id"]

        response = await client.get(f"/api/{slug}/{item_id}", headers=auth_headers)
        assert response.json()["data"]["id"] == item_id

        response = await client.put(f"/api/{slug}/{item_id}", json=changes, headers=auth_headers)
        body = response.json()
        assert body["status"] is True
        for key, value in changes.items():
            assert body["data"][key] == value

        logs = await _logs(db_session, slug)
        assert sorted(log.action for log in logs) == ["create", "update"]


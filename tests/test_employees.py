"""
PayrollHub - Employee Tests
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity_log import ActivityLog
from app.models.employee import Employee, EmployeeTransferHistory
from app.models.geography import City
from app.models.master_data import Department
from app.schemas.employee import EmployeeTransferRequest
from app.seeds.geography import ensure_country, ensure_states
from app.services.audit_service import AuditContext
from app.services.employee_service import EmployeeService
from app.services.province_resolver import PUNJAB, SINDH


@pytest_asyncio.fixture
async def postings(db_session: AsyncSession):
    """Punjab and Sindh with one city each."""
    country = await ensure_country(db_session, "PK")
    states = await ensure_states(db_session, country)
    lahore = City(name="Lahore", country_id=country.id, state_id=states[PUNJAB].id)
    karachi = City(name="Karachi", country_id=country.id, state_id=states[SINDH].id)
    db_session.add_all([lahore, karachi])
    await db_session.commit()
    return {
        "punjab": states[PUNJAB].id,
        "sindh": states[SINDH].id,
        "lahore": lahore.id,
        "karachi": karachi.id,
    }


async def _reload(db: AsyncSession, employee_id) -> Employee:
    result = await db.execute(
        select(Employee).where(Employee.id == employee_id).execution_options(populate_existing=True)
    )
    return result.scalar_one()


class TestEmployeeCRUD:

    @pytest.mark.asyncio
    async def test_create_and_get(self, client: AsyncClient, auth_headers, db_session):
        department = Department(name="Accounts")
        db_session.add(department)
        await db_session.commit()

        response = await client.post(
            "/api/employees",
            json={
                "employee_code": "EMP-100",
                "employee_name": "Sana Malik",
                "department_id": str(department.id),
                "employee_salary": "65000.50",
                "joining_date": "2024-02-01",
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Employee created successfully"
        assert body["data"]["employee_salary"] == "65000.50"
        employee_id = body["data"]["id"]

        response = await client.get(f"/api/employees/{employee_id}", headers=auth_headers)
        assert response.json()["data"]["employee_name"] == "Sana Malik"

        listing = await client.get(
            "/api/employees", params={"department_id": str(department.id)}, headers=auth_headers
        )
        assert [e["employee_code"] for e in listing.json()["data"]] == ["EMP-100"]

    @pytest.mark.asyncio
    async def test_duplicate_code_fails(self, client: AsyncClient, auth_headers, test_employee):
        response = await client.post(
            "/api/employees",
            json={"employee_code": "EMP-001", "employee_name": "Someone Else"},
            headers=auth_headers,
        )

        assert response.json()["status"] is False
        assert response.json()["message"] == "Failed to create employee"

    @pytest.mark.asyncio
    async def test_negative_salary_rejected(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/employees",
            json={"employee_code": "EMP-9", "employee_name": "X", "employee_salary": -1},
            headers=auth_headers,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_salary(self, client: AsyncClient, auth_headers, db_session, test_employee):
        employee_id = test_employee.id

        response = await client.put(
            f"/api/employees/{employee_id}",
            json={"employee_salary": "55000.00"},
            headers=auth_headers,
        )

        assert response.json()["status"] is True
        employee = await _reload(db_session, employee_id)
        assert employee.employee_salary == Decimal("55000.00")
        assert employee.employee_name == "Ayesha Khan"

    @pytest.mark.asyncio
    async def test_bulk_delete(self, client: AsyncClient, auth_headers, test_employee, second_employee):
        ids = [str(test_employee.id), str(second_employee.id)]

        response = await client.request("DELETE", "/api/employees/bulk", json={"ids": ids}, headers=auth_headers)

        assert response.json()["data"] == {"count": 2}
        listing = await client.get("/api/employees", headers=auth_headers)
        assert listing.json()["data"] == []


class TestEmployeeTransfer:

    @pytest.mark.asyncio
    async def test_transfer_moves_employee_and_records_history(
        self, db_session: AsyncSession, test_employee, test_user, postings
    ):
        employee_id = test_employee.id
        test_employee.state_id = postings["punjab"]
        test_employee.city_id = postings["lahore"]
        await db_session.commit()

        result = await EmployeeService(db_session).transfer(
            employee_id,
            EmployeeTransferRequest(
                transfer_date=date(2024, 7, 1),
                new_city_id=postings["karachi"],
                new_state_id=postings["sindh"],
                reason="Regional office opening",
            ),
            AuditContext(user_id=test_user.id),
        )

        assert result.status is True
        assert result.message == "Employee transferred successfully"
        assert result.data["previous_city_id"] == postings["lahore"]
        assert result.data["new_city_id"] == postings["karachi"]

        employee = await _reload(db_session, employee_id)
        assert employee.city_id == postings["karachi"]
        assert employee.state_id == postings["sindh"]
        assert employee.location_id is None

        logs = await db_session.execute(
            select(ActivityLog).where(ActivityLog.module == "employee-transfers")
        )
        log = logs.scalar_one()
        assert log.description == "Transferred employee EMP-001"
        assert log.user_id == test_user.id

    @pytest.mark.asyncio
    async def test_omitted_parts_keep_current_posting(self, db_session: AsyncSession, test_employee, postings):
        employee_id = test_employee.id
        test_employee.state_id = postings["punjab"]
        test_employee.city_id = postings["lahore"]
        await db_session.commit()

        await EmployeeService(db_session).transfer(
            employee_id,
            EmployeeTransferRequest(transfer_date=date(2024, 7, 1), new_state_id=postings["sindh"]),
        )

        employee = await _reload(db_session, employee_id)
        assert employee.state_id == postings["sindh"]
        assert employee.city_id == postings["lahore"]

    @pytest.mark.asyncio
    async def test_failed_update_leaves_no_history(self, db_session: AsyncSession, test_employee, postings):
        employee_id = test_employee.id
        test_employee.city_id = postings["lahore"]
        await db_session.commit()

        # no such location; the employee row violates its foreign key on commit
        result = await EmployeeService(db_session).transfer(
            employee_id,
            EmployeeTransferRequest(transfer_date=date(2024, 7, 1), new_location_id=uuid4()),
        )

        assert result.status is False
        assert result.message == "Failed to transfer employee"

        employee = await _reload(db_session, employee_id)
        assert employee.location_id is None
        assert employee.city_id == postings["lahore"]
        history = await db_session.execute(select(EmployeeTransferHistory))
        assert history.scalars().all() == []

        logs = await db_session.execute(
            select(ActivityLog).where(ActivityLog.module == "employee-transfers")
        )
        assert [log.status for log in logs.scalars().all()] == ["failure"]

    @pytest.mark.asyncio
    async def test_missing_employee(self, db_session: AsyncSession, postings):
        result = await EmployeeService(db_session).transfer(
            uuid4(),
            EmployeeTransferRequest(transfer_date=date(2024, 7, 1), new_city_id=postings["karachi"]),
        )

        assert result.status is False
        assert result.message == "Employee not found"
        history = await db_session.execute(select(EmployeeTransferHistory))
        assert history.scalars().all() == []

    @pytest.mark.asyncio
    async def test_destination_required(self, client: AsyncClient, auth_headers, test_employee):
        response = await client.post(
            f"/api/employees/{test_employee.id}/transfer",
            json={"transfer_date": "2024-07-01", "reason": "nowhere"},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["status"] is False

    @pytest.mark.asyncio
    async def test_history_latest_first(self, client: AsyncClient, auth_headers, test_employee, postings):
        employee_id = str(test_employee.id)

        first = await client.post(
            f"/api/employees/{employee_id}/transfer",
            json={"transfer_date": "2024-01-10", "new_city_id": str(postings["lahore"])},
            headers=auth_headers,
        )
        assert first.status_code == 201
        await client.post(
            f"/api/employees/{employee_id}/transfer",
            json={"transfer_date": "2024-09-05", "new_city_id": str(postings["karachi"])},
            headers=auth_headers,
        )

        response = await client.get(f"/api/employees/{employee_id}/transfers", headers=auth_headers)

        history = response.json()["data"]
        assert [h["transfer_date"] for h in history] == ["2024-09-05", "2024-01-10"]
        assert history[0]["previous_city_id"] == str(postings["lahore"])

"""
PayrollHub - Activity Log Tests

Best-effort recording and the browsing endpoint.
"""

from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity_log import ActivityAction, ActivityLog
from app.models.master_data import Department
from app.schemas.master_data import MasterListCreate
from app.services.audit_service import ActivityEvent, ActivityLogService, AuditContext
from app.services.master_data_service import get_master_service


class TestActivityLogRecording:
    """ActivityLogService.record behaviour."""

    @pytest.mark.asyncio
    async def test_unknown_user_is_stored_as_null(self, db_session: AsyncSession):
        service = ActivityLogService(db_session)

        entry = await service.record(
            ActivityEvent.success(ActivityAction.CREATE, "departments", "Department", "Created department X"),
            AuditContext(user_id=uuid4(), ip_address="10.0.0.5"),
        )

        assert entry is not None
        assert entry.user_id is None
        assert entry.ip_address == "10.0.0.5"

    @pytest.mark.asyncio
    async def test_known_user_is_kept(self, db_session: AsyncSession, test_user):
        entry = await ActivityLogService(db_session).record(
            ActivityEvent.success(ActivityAction.DELETE, "departments", "Department", "Deleted department X"),
            AuditContext(user_id=test_user.id),
        )

        assert entry.user_id == test_user.id
        assert entry.status == "success"

    @pytest.mark.asyncio
    async def test_failure_event_keeps_error_message(self, db_session: AsyncSession):
        error = OperationalError("INSERT ...", {}, Exception("database is locked"))

        entry = await ActivityLogService(db_session).record(
            ActivityEvent.failure(
                ActivityAction.UPDATE, "departments", "Department", "Failed to update department", error,
            ),
        )

        assert entry.status == "failure"
        assert entry.error_message == "database is locked"

    @pytest.mark.asyncio
    async def test_audit_write_failure_does_not_undo_primary_write(
        self, db_session: AsyncSession, monkeypatch
    ):
        async def vanished_user(self, user_id):
            # user removed between the lookup and the insert: FK violation on commit
            return uuid4()

        monkeypatch.setattr(ActivityLogService, "_existing_user_id", vanished_user)

        result = await get_master_service("departments", db_session).create(
            MasterListCreate(name="Operations"),
            AuditContext(user_id=uuid4()),
        )

        assert result.status is True
        assert result.data["name"] == "Operations"

        departments = await db_session.execute(select(Department.name))
        assert departments.scalars().all() == ["Operations"]
        logs = await db_session.execute(select(ActivityLog))
        assert logs.scalars().all() == []


class TestActivityLogAPI:
    """GET /api/activity-logs"""

    @pytest.mark.asyncio
    async def test_lists_newest_first_with_user(self, client: AsyncClient, auth_headers, test_user):
        await client.post("/api/departments", json={"name": "HR"}, headers=auth_headers)
        await client.post("/api/designations", json={"name": "Clerk"}, headers=auth_headers)

        response = await client.get("/api/activity-logs", headers=auth_headers)

        body = response.json()
        assert body["status"] is True
        data = body["data"]
        assert data["total"] == 2
        assert data["page"] == 1
        assert data["total_pages"] == 1
        assert [log["module"] for log in data["logs"]] == ["designations", "departments"]
        assert data["logs"][0]["user"]["email"] == test_user.email

    @pytest.mark.asyncio
    async def test_filters_and_pagination(self, client: AsyncClient, auth_headers):
        for name in ("A", "B", "C"):
            await client.post("/api/departments", json={"name": name}, headers=auth_headers)
        await client.post("/api/departments", json={"name": "A"}, headers=auth_headers)
        await client.post("/api/job-types", json={"name": "Contract"}, headers=auth_headers)

        response = await client.get(
            "/api/activity-logs",
            params={"module": "departments", "limit": 2, "page": 2},
            headers=auth_headers,
        )
        data = response.json()["data"]
        assert data["total"] == 4
        assert data["total_pages"] == 2
        assert len(data["logs"]) == 2

        response = await client.get(
            "/api/activity-logs",
            params={"search": "Failed to create"},
            headers=auth_headers,
        )
        data = response.json()["data"]
        assert data["total"] == 1
        assert data["logs"][0]["status"] == "failure"

        response = await client.get(
            "/api/activity-logs",
            params={"action": "delete"},
            headers=auth_headers,
        )
        assert response.json()["data"]["total"] == 0

    @pytest.mark.asyncio
    async def test_inverted_date_range_rejected(self, client: AsyncClient, auth_headers):
        response = await client.get(
            "/api/activity-logs",
            params={"start_date": "2024-05-01", "end_date": "2024-04-01"},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["error"]["field"] == "start_date"

    @pytest.mark.asyncio
    async def test_invalid_action_rejected(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/activity-logs?action=archive", headers=auth_headers)

        assert response.status_code == 422

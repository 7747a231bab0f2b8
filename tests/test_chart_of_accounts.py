"""
PayrollHub - Chart of Accounts Tests

Seeding idempotency and the tree's structural rules.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.accounting import AccountType, ChartOfAccount
from app.schemas.accounting import AccountSeedNode
from app.seeds.chart_of_accounts import CHART_OF_ACCOUNTS, seed_chart_of_accounts


def _count_nodes(nodes) -> int:
    return sum(1 + _count_nodes(node.children) for node in nodes)


async def _accounts_by_code(db: AsyncSession):
    result = await db.execute(select(ChartOfAccount).execution_options(populate_existing=True))
    return {a.code: a for a in result.scalars().all()}


class TestChartOfAccountsSeed:

    @pytest.mark.asyncio
    async def test_seed_creates_full_tree(self, db_session: AsyncSession):
        summary = await seed_chart_of_accounts(db_session)

        expected = _count_nodes(CHART_OF_ACCOUNTS)
        assert summary == {"created": expected, "reparented": 0, "unchanged": 0}

        accounts = await _accounts_by_code(db_session)
        roots = sorted(a.name for a in accounts.values() if a.parent_id is None)
        assert roots == ["Assets", "Equity", "Expenses", "Income", "Liabilities"]

    @pytest.mark.asyncio
    async def test_seed_twice_is_idempotent(self, db_session: AsyncSession):
        await seed_chart_of_accounts(db_session)
        before = {code: (a.id, a.parent_id) for code, a in (await _accounts_by_code(db_session)).items()}

        summary = await seed_chart_of_accounts(db_session)

        assert summary["created"] == 0
        assert summary["reparented"] == 0
        after = {code: (a.id, a.parent_id) for code, a in (await _accounts_by_code(db_session)).items()}
        assert after == before

    @pytest.mark.asyncio
    async def test_every_parent_is_a_group(self, db_session: AsyncSession):
        await seed_chart_of_accounts(db_session)
        accounts = await _accounts_by_code(db_session)
        by_id = {a.id: a for a in accounts.values()}

        for account in accounts.values():
            if account.parent_id is not None:
                assert by_id[account.parent_id].is_group, account.code

    @pytest.mark.asyncio
    async def test_children_inherit_root_type(self, db_session: AsyncSession):
        await seed_chart_of_accounts(db_session)
        accounts = await _accounts_by_code(db_session)

        assert accounts["11110"].type == AccountType.ASSET
        assert accounts["11110"].is_group is False

    @pytest.mark.asyncio
    async def test_seed_repairs_wrong_parent(self, db_session: AsyncSession):
        tree = [
            AccountSeedNode(code="1", name="Root", type=AccountType.ASSET, children=[
                AccountSeedNode(code="1.1", name="Branch", type=AccountType.ASSET, children=[
                    AccountSeedNode(code="1.1.1", name="Leaf", type=AccountType.ASSET),
                ]),
            ]),
        ]
        await seed_chart_of_accounts(db_session, tree)

        accounts = await _accounts_by_code(db_session)
        accounts["1.1.1"].parent_id = accounts["1"].id
        await db_session.commit()

        summary = await seed_chart_of_accounts(db_session, tree)

        assert summary == {"created": 0, "reparented": 1, "unchanged": 2}
        accounts = await _accounts_by_code(db_session)
        assert accounts["1.1.1"].parent_id == accounts["1.1"].id


class TestChartOfAccountsRules:

    @pytest.mark.asyncio
    async def test_delete_with_children_rejected(self, client: AsyncClient, auth_headers, db_session):
        await seed_chart_of_accounts(db_session)
        accounts = await _accounts_by_code(db_session)
        total = len(accounts)
        assets_id = accounts["10000"].id

        response = await client.delete(f"/api/chart-of-accounts/{assets_id}", headers=auth_headers)

        assert response.status_code == 422
        body = response.json()
        assert body["status"] is False
        assert body["error"]["code"] == "CANNOT_DELETE"

        count = await db_session.execute(select(func.count(ChartOfAccount.id)))
        assert count.scalar_one() == total

    @pytest.mark.asyncio
    async def test_delete_leaf(self, client: AsyncClient, auth_headers, db_session):
        await seed_chart_of_accounts(db_session)
        leaf_id = (await _accounts_by_code(db_session))["11110"].id

        response = await client.delete(f"/api/chart-of-accounts/{leaf_id}", headers=auth_headers)

        assert response.json()["status"] is True
        assert "11110" not in await _accounts_by_code(db_session)

    @pytest.mark.asyncio
    async def test_create_under_leaf_rejected(self, client: AsyncClient, auth_headers, db_session):
        await seed_chart_of_accounts(db_session)
        leaf_id = (await _accounts_by_code(db_session))["11110"].id

        response = await client.post(
            "/api/chart-of-accounts",
            json={"code": "11111", "name": "Petty Cash - Lahore", "type": "ASSET", "parent_id": str(leaf_id)},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_PARENT_ACCOUNT"

    @pytest.mark.asyncio
    async def test_create_under_group(self, client: AsyncClient, auth_headers, db_session):
        await seed_chart_of_accounts(db_session)
        group_id = (await _accounts_by_code(db_session))["11100"].id

        response = await client.post(
            "/api/chart-of-accounts",
            json={"code": "11150", "name": "Bank - Payroll Account", "type": "ASSET", "parent_id": str(group_id)},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["data"]["parent_id"] == str(group_id)

    @pytest.mark.asyncio
    async def test_duplicate_code_conflict(self, client: AsyncClient, auth_headers, db_session):
        await seed_chart_of_accounts(db_session)

        response = await client.post(
            "/api/chart-of-accounts",
            json={"code": "10000", "name": "Assets again", "type": "ASSET", "is_group": True},
            headers=auth_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DUPLICATE_ENTRY"

    @pytest.mark.asyncio
    async def test_self_parent_rejected(self, client: AsyncClient, auth_headers, db_session):
        await seed_chart_of_accounts(db_session)
        group_id = (await _accounts_by_code(db_session))["11100"].id

        response = await client.put(
            f"/api/chart-of-accounts/{group_id}",
            json={"parent_id": str(group_id)},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_PARENT_ACCOUNT"

    @pytest.mark.asyncio
    async def test_move_under_descendant_rejected(self, client: AsyncClient, auth_headers, db_session):
        await seed_chart_of_accounts(db_session)
        accounts = await _accounts_by_code(db_session)
        current_assets_id = accounts["11000"].id
        cash_group_id = accounts["11100"].id

        response = await client.put(
            f"/api/chart-of-accounts/{current_assets_id}",
            json={"parent_id": str(cash_group_id)},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "ACCOUNT_HIERARCHY_CYCLE"

    @pytest.mark.asyncio
    async def test_group_with_children_cannot_become_leaf(self, client: AsyncClient, auth_headers, db_session):
        await seed_chart_of_accounts(db_session)
        group_id = (await _accounts_by_code(db_session))["11100"].id

        response = await client.put(
            f"/api/chart-of-accounts/{group_id}",
            json={"is_group": False},
            headers=auth_headers,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_and_tree(self, client: AsyncClient, auth_headers, db_session):
        await seed_chart_of_accounts(db_session)

        listing = await client.get("/api/chart-of-accounts", headers=auth_headers)
        codes = [a["code"] for a in listing.json()["data"]]
        assert codes == sorted(codes)

        tree = await client.get("/api/chart-of-accounts/tree", headers=auth_headers)
        roots = tree.json()["data"]
        assert [r["code"] for r in roots] == sorted(r["code"] for r in roots)
        assets = next(r for r in roots if r["code"] == "10000")
        assert "11000" in [c["code"] for c in assets["children"]]

"""
PayrollHub - Chart of Accounts Seed

Materializes the standard five-branch chart of accounts. The upsert is keyed
on account code and repairs parent links left by an earlier partial run, so
running it repeatedly leaves the tree unchanged.
"""

import logging
import uuid
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.accounting import AccountType, ChartOfAccount
from app.schemas.accounting import AccountSeedNode

logger = logging.getLogger(__name__)


def _node(code: str, name: str, *children: dict) -> dict:
    return {"code": code, "name": name, "children": list(children)}


def _typed(account_type: AccountType, node: dict) -> AccountSeedNode:
    return AccountSeedNode(
        code=node["code"],
        name=node["name"],
        type=account_type,
        children=[_typed(account_type, child) for child in node["children"]],
    )


CHART_OF_ACCOUNTS: List[AccountSeedNode] = [
    _typed(AccountType.ASSET, _node(
        "10000", "Assets",
        _node(
            "11000", "Current Assets",
            _node(
                "11100", "Cash and Cash Equivalents",
                _node("11110", "Petty Cash"),
                _node("11120", "Cash on Hand"),
                _node("11130", "Bank - Current Account"),
                _node("11140", "Bank - Savings Account"),
            ),
            _node(
                "11200", "Accounts Receivable",
                _node("11210", "Trade Debtors"),
                _node("11220", "Employee Advances"),
                _node("11230", "Prepayments"),
            ),
            _node(
                "11300", "Inventory",
                _node("11310", "Raw Materials"),
                _node("11320", "Work in Progress"),
                _node("11330", "Finished Goods"),
            ),
        ),
        _node(
            "12000", "Non-Current Assets",
            _node(
                "12100", "Property, Plant and Equipment",
                _node("12110", "Land"),
                _node("12120", "Buildings"),
                _node("12130", "Machinery"),
                _node("12140", "Vehicles"),
                _node("12150", "Computer Equipment"),
                _node("12160", "Furniture and Fixtures"),
            ),
            _node(
                "12200", "Intangible Assets",
                _node("12210", "Goodwill"),
                _node("12220", "Software Licenses"),
            ),
        ),
    )),
    _typed(AccountType.LIABILITY, _node(
        "20000", "Liabilities",
        _node(
            "21000", "Current Liabilities",
            _node(
                "21100", "Accounts Payable",
                _node("21110", "Trade Creditors"),
                _node("21120", "Accrued Expenses"),
            ),
            _node(
                "21200", "Tax Payable",
                _node("21210", "VAT/GST Payable"),
                _node("21220", "Income Tax Payable"),
                _node("21230", "Withholding Tax Payable"),
            ),
            _node(
                "21300", "Short Term Loans",
                _node("21310", "Bank Overdraft"),
            ),
        ),
        _node(
            "22000", "Non-Current Liabilities",
            _node("22100", "Long Term Bank Loans"),
        ),
    )),
    _typed(AccountType.EQUITY, _node(
        "30000", "Equity",
        _node("31000", "Share Capital"),
        _node("32000", "Retained Earnings"),
        _node("33000", "Owner's Draw"),
    )),
    _typed(AccountType.INCOME, _node(
        "40000", "Income",
        _node(
            "41000", "Operating Income",
            _node("41100", "Sales Revenue"),
            _node("41200", "Service Revenue"),
            _node("41300", "Sales Returns and Allowances"),
        ),
        _node(
            "42000", "Non-Operating Income",
            _node("42100", "Interest Income"),
            _node("42200", "Gain on Asset Disposal"),
        ),
    )),
    _typed(AccountType.EXPENSE, _node(
        "50000", "Expenses",
        _node(
            "51000", "Cost of Goods Sold",
            _node("51100", "Purchases"),
            _node("51200", "Freight In"),
        ),
        _node(
            "52000", "Operating Expenses",
            _node(
                "52100", "Payroll Expenses",
                _node("52110", "Salaries and Wages"),
                _node("52120", "Employee Benefits"),
                _node("52130", "Payroll Taxes"),
            ),
            _node(
                "52200", "Administrative Expenses",
                _node("52210", "Rent Expense"),
                _node("52220", "Utilities Expense"),
                _node("52230", "Telephone and Internet"),
                _node("52240", "Office Supplies"),
                _node("52250", "Repairs and Maintenance"),
            ),
            _node(
                "52300", "Marketing and Selling Expenses",
                _node("52310", "Advertising"),
                _node("52320", "Travel and Entertainment"),
            ),
            _node(
                "52400", "Financial Expenses",
                _node("52410", "Bank Charges"),
                _node("52420", "Interest Expense"),
            ),
            _node(
                "52500", "Depreciation and Amortization",
                _node("52510", "Depreciation Expense"),
                _node("52520", "Amortization Expense"),
            ),
        ),
    )),
]


async def _upsert(
    db: AsyncSession,
    node: AccountSeedNode,
    parent_id: Optional[uuid.UUID],
    summary: Dict[str, int],
) -> None:
    result = await db.execute(select(ChartOfAccount).where(ChartOfAccount.code == node.code))
    account = result.scalar_one_or_none()

    if account is None:
        account = ChartOfAccount(
            code=node.code,
            name=node.name,
            type=node.type,
            is_group=node.is_group,
            parent_id=parent_id,
            is_active=True,
        )
        db.add(account)
        await db.flush()
        summary["created"] += 1
    elif account.parent_id != parent_id:
        logger.info("Re-parenting account %s", node.code)
        account.parent_id = parent_id
        await db.flush()
        summary["reparented"] += 1
    else:
        summary["unchanged"] += 1

    for child in node.children:
        await _upsert(db, child, account.id, summary)


async def seed_chart_of_accounts(
    db: AsyncSession,
    nodes: Optional[List[AccountSeedNode]] = None,
) -> Dict[str, int]:
    """
    Depth-first upsert of the chart of accounts, committed once at the end.

    Returns:
        Counts of created, re-parented and unchanged accounts
    """
    summary = {"created": 0, "reparented": 0, "unchanged": 0}
    for root in nodes if nodes is not None else CHART_OF_ACCOUNTS:
        await _upsert(db, root, None, summary)
    await db.commit()

    logger.info(
        "Chart of accounts: %d created, %d re-parented, %d unchanged",
        summary["created"], summary["reparented"], summary["unchanged"],
    )
    return summary

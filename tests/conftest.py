"""
PayrollHub - Test Configuration

Pytest fixtures and configuration. Every test runs against a fresh
in-memory SQLite database.
"""

import os

# Settings are read at import time; point them at SQLite before the app loads
os.environ.setdefault("DATABASE_URL_ASYNC", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

from datetime import date
from decimal import Decimal
from typing import AsyncGenerator, Dict
from uuid import uuid4

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.database import Base, get_async_session
from app.models.employee import Employee
from app.models.master_data import BonusType, DeductionHead
from app.models.user import User
from app.utils.security import create_access_token, get_password_hash
from main import app


TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_PASSWORD = "TestPassword123!"


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a private in-memory database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        # DROP TABLE on SQLite deletes rows first; the account tree restricts that
        await conn.exec_driver_sql("PRAGMA foreign_keys=OFF")
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database session override."""

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ===========================================
# DATA FIXTURES
# ===========================================

@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create an active back-office user."""
    user = User(
        id=uuid4(),
        email="testuser@example.com",
        hashed_password=get_password_hash(TEST_PASSWORD),
        first_name="Test",
        last_name="User",
        is_active=True,
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> Dict[str, str]:
    """Bearer token header for the test user."""
    token = create_access_token({"sub": str(test_user.id), "email": test_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def test_employee(db_session: AsyncSession) -> Employee:
    employee = Employee(
        employee_code="EMP-001",
        employee_name="Ayesha Khan",
        employee_salary=Decimal("50000.00"),
        joining_date=date(2023, 1, 15),
    )
    db_session.add(employee)
    await db_session.commit()
    return employee


@pytest_asyncio.fixture
async def second_employee(db_session: AsyncSession) -> Employee:
    employee = Employee(
        employee_code="EMP-002",
        employee_name="Bilal Ahmed",
        employee_salary=Decimal("80000.00"),
    )
    db_session.add(employee)
    await db_session.commit()
    return employee


@pytest_asyncio.fixture
async def amount_bonus_type(db_session: AsyncSession) -> BonusType:
    bonus_type = BonusType(name="Performance Bonus", calculation_type="Amount")
    db_session.add(bonus_type)
    await db_session.commit()
    return bonus_type


@pytest_asyncio.fixture
async def percentage_bonus_type(db_session: AsyncSession) -> BonusType:
    bonus_type = BonusType(name="Eid Bonus", calculation_type="Percentage")
    db_session.add(bonus_type)
    await db_session.commit()
    return bonus_type


@pytest_asyncio.fixture
async def deduction_head(db_session: AsyncSession) -> DeductionHead:
    head = DeductionHead(name="Loan Recovery")
    db_session.add(head)
    await db_session.commit()
    return head

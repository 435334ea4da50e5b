"""Service test fixtures — async DB, seeded employees, engine, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session factory
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency; the unique constraints the
      engine relies on are enforced by SQLite too
    - Employees seeded through a factory fixture: tests choose unit and count
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient
from uuid import uuid4

from works_council.config import Settings
from works_council.db.base import Base
from works_council.infrastructure.database import get_db, DatabaseSessionManager
from works_council.models.employee import Employee
from works_council.services.membership_engine import build_engine
import works_council.infrastructure.database as db_module
from works_council.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def unit_id():
    return uuid4()


@pytest.fixture
def make_employees(test_db):
    """Insert employees for a unit; returns them in creation order."""
    async def _make(unit, count: int, prefix: str = "E") -> list[Employee]:
        employees = [
            Employee(
                technical_business_unit_id=unit,
                first_name=f"{prefix}{i + 1}",
                last_name="Tester",
                email=f"{prefix.lower()}{i + 1}.{uuid4().hex[:8]}@example.com",
            )
            for i in range(count)
        ]
        test_db.add_all(employees)
        await test_db.commit()
        return employees
    return _make


@pytest.fixture
def settings():
    return Settings(database_url="sqlite+aiosqlite:///:memory:")


@pytest.fixture
def membership_engine(test_db, settings):
    return build_engine(test_db, settings)


@pytest.fixture
def fakes():
    """In-memory stores sharing one call log; employees added via fakes.hire()."""
    from types import SimpleNamespace

    from tests.services.fake_stores import (
        FakeCouncilRepository, FakeEmployee, FakeEmployeeLookup,
        FakeMembershipRepository,
    )
    from works_council.services.membership_context import MembershipStores

    calls: list[str] = []
    employees = FakeEmployeeLookup([], calls)
    stores = MembershipStores(
        employees=employees,
        councils=FakeCouncilRepository(calls),
        memberships=FakeMembershipRepository(calls),
    )

    def hire(unit, count: int = 1) -> list[FakeEmployee]:
        hired = [
            FakeEmployee(technical_business_unit_id=unit, first_name=f"F{i + 1}")
            for i in range(count)
        ]
        employees.employees.update({e.id: e for e in hired})
        return hired

    return SimpleNamespace(stores=stores, calls=calls, hire=hire)

"""Service test fixtures — async DB, fake reference API, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db and get_reference_data dependencies overridden per test
    - db_manager patched so readiness probes see the test engine
    - Reference API served by httpx.MockTransport; every request recorded

Design Decisions:
    - SQLite in-memory: fast, no external dependency, enforces the unique constraint
    - Fake upstream at the transport layer: exercises ReferenceApiClient end to end
"""

from datetime import datetime, timezone

import httpx
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from phonebook.db.base import Base
from phonebook.infrastructure.database import get_db, DatabaseSessionManager
from phonebook.infrastructure.reference_cache import TTLReferenceCache
from phonebook.infrastructure.reference_client import ReferenceApiClient
from phonebook.models.phonebook_item import PhonebookItem
from phonebook.services.reference_data import (
    ReferenceDataService, get_reference_data,
)
import phonebook.infrastructure.database as db_module
from phonebook.main import app

COUNTRIES = {"US": "United States", "GB": "United Kingdom", "DE": "Germany"}
TIMEZONES = {
    "America/New_York": "America/New_York",
    "Europe/London": "Europe/London",
    "Europe/Berlin": "Europe/Berlin",
}


class FakeUpstream:
    """Configurable reference API: path -> (status_code, json body)."""

    def __init__(self):
        self.responses = {
            "/countries": (200, {"status": "success", "result": dict(COUNTRIES)}),
            "/timezones": (200, {"status": "success", "result": dict(TIMEZONES)}),
        }
        self.calls: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request.url.path)
        status_code, body = self.responses.get(request.url.path, (404, {}))
        return httpx.Response(status_code, json=body)

    def count(self, path: str) -> int:
        return self.calls.count(path)


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
def upstream():
    return FakeUpstream()


@pytest.fixture
async def reference_data(upstream):
    source = ReferenceApiClient(
        "http://reference.test", transport=httpx.MockTransport(upstream.handler),
    )
    yield ReferenceDataService(source, TTLReferenceCache())
    await source.aclose()


@pytest.fixture
async def client(test_engine, test_session_factory, reference_data):
    """FastAPI test client with DB and reference data overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_reference_data] = lambda: reference_data

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
def make_item(test_db):
    """Insert an entry directly into the test DB; returns the refreshed row."""
    counter = {"n": 0}

    async def _make(**overrides) -> PhonebookItem:
        counter["n"] += 1
        data = {
            "first_name": "John",
            "last_name": "Doe",
            "phone_number": f"+1 555 {counter['n']:04d}",
            "country_code": "US",
            "timezone_name": "America/New_York",
            "inserted_on": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        data.update(overrides)
        item = PhonebookItem(**data)
        test_db.add(item)
        await test_db.commit()
        await test_db.refresh(item)
        return item

    return _make


@pytest.fixture
def valid_payload():
    """Build a create body that passes every rule; keyword overrides applied."""
    def _payload(**overrides) -> dict:
        payload = {
            "first_name": "Jane",
            "last_name": "Roe",
            "phone_number": "+1 (555) 123-4567",
            "country_code": "US",
            "timezone_name": "America/New_York",
        }
        payload.update(overrides)
        return payload

    return _payload

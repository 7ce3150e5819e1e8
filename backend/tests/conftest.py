"""Shared test configuration and fixtures.

Uses a transactional rollback strategy per test for full isolation:
- Each test gets a fresh SQLite database (aiosqlite) under ``tmp_path``.
- The session is wrapped in a transaction that rolls back after the test.
- The clock is pinned to ``FIXED_NOW`` so date buckets are deterministic.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine

import rentdar.models  # noqa: F401  (register tables)
from rentdar.database import Base, engine_options, get_db
from rentdar.main import app
from rentdar.services.clock import FixedClock, get_clock

# Wednesday 6 March 2024, mid-morning UTC
FIXED_NOW = datetime(2024, 3, 6, 10, 30, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Per-test: database engine and transactional session
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create an engine on a throwaway SQLite file with all tables."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'rentdar_test.db'}"
    engine = create_async_engine(url, **engine_options(url))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back."""
    async with test_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(FIXED_NOW, timezone.utc)


@pytest_asyncio.fixture
async def client(db_session: AsyncSession, fixed_clock: FixedClock) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the test DB session and clock."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: fixed_clock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: property helpers
# ---------------------------------------------------------------------------


async def _create_property(client: AsyncClient, name: str) -> dict:
    response = await client.post(
        "/api/v1/properties",
        json={
            "name": name,
            "location": "Lisbon",
            "description": "A test property for automated tests.",
        },
    )
    assert response.status_code == 201, f"Failed to create test property: {response.text}"
    return response.json()


@pytest_asyncio.fixture
async def test_property(client: AsyncClient) -> dict:
    """Create and return a test property via the API."""
    return await _create_property(client, "Harbour Loft")


@pytest_asyncio.fixture
async def other_property(client: AsyncClient) -> dict:
    """A second property, for cross-property isolation checks."""
    return await _create_property(client, "Pine Cabin")


@pytest_asyncio.fixture
async def create_booking(client: AsyncClient):
    """Factory that books a stay via the API and returns the response."""

    async def _create(property_id: str, check_in: str, check_out: str, **extra) -> dict:
        payload = {
            "property_id": property_id,
            "guest_name": extra.pop("guest_name", "Test Guest"),
            "check_in": check_in,
            "check_out": check_out,
            **extra,
        }
        response = await client.post("/api/v1/bookings", json=payload)
        assert response.status_code == 201, f"Failed to create booking: {response.text}"
        return response.json()

    return _create

"""
conftest.py — shared fixtures for all tests.

Strategy:
- The app runs against a throw-away SQLite file (aiosqlite); tables are
  created before and dropped after every test.
- "Now" comes from a FixedClock injected through FastAPI dependency
  overrides, so check-in times and month boundaries are deterministic.
  Naive datetimes handed to the clock are server-local wall-clock time.
- Users are registered through the public API (tests/helpers.py) and carry
  their bearer token.
"""

from __future__ import annotations

import os
import tempfile
import uuid
from datetime import datetime
from pathlib import Path

_DB_PATH = Path(tempfile.gettempdir()) / f"attendly_test_{uuid.uuid4().hex[:8]}.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["RUN_MIGRATIONS_ON_STARTUP"] = "false"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from attendly.core.clock import FixedClock, get_clock  # noqa: E402
from attendly.db.models import Base  # noqa: E402
from attendly.db.session import AsyncSessionLocal, engine  # noqa: E402
from attendly.main import app  # noqa: E402
from tests.helpers import register  # noqa: E402

# Monday, before the 09:30 cutoff
DEFAULT_NOW = datetime(2024, 6, 3, 9, 0, 0)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture(autouse=True)
async def _schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


def pytest_sessionfinish(session, exitstatus):
    _DB_PATH.unlink(missing_ok=True)


@pytest_asyncio.fixture
async def db() -> AsyncSession:
    """Raw DB session for direct queries in tests."""
    async with AsyncSessionLocal() as session:
        yield session


# ---------------------------------------------------------------------------
# Clock + HTTP client
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> FixedClock:
    fixed = FixedClock(DEFAULT_NOW)
    app.dependency_overrides[get_clock] = lambda: fixed
    yield fixed
    app.dependency_overrides.pop(get_clock, None)


@pytest_asyncio.fixture
async def client(clock: FixedClock) -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def manager(client: AsyncClient) -> dict:
    return await register(client, "Maya Manager", role="manager", department="Management")


@pytest_asyncio.fixture
async def employee(client: AsyncClient) -> dict:
    return await register(client, "Arjun Reddy", department="Engineering")


@pytest_asyncio.fixture
async def other_employee(client: AsyncClient) -> dict:
    return await register(client, "Priya Sharma", department="Design")

"""
PrayerSpot Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── database: in-memory SQLite store with every table created
    ├── test_client: HTTPX AsyncClient over an app wired to `database`
    ├── sample_prayer_timings: complete six-slot schedule
    └── sample_service_payload: valid /api/addservice body
"""

import os

# Settings are read at import time, so the environment must be set first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ["DB_CONNECT_ATTEMPTS"] = "1"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from prayerspot.database import Database
from prayerspot.main import create_app


def make_sqlite_database() -> Database:
    """In-memory SQLite shared by every session of one test (StaticPool)."""
    return Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_lookup(mock_db_session):
            mock_db_session.execute.return_value.scalars.return_value.all.return_value = []
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database():
    db = make_sqlite_database()
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def empty_database():
    """A store with no tables: every query fails inside the driver."""
    db = make_sqlite_database()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP client talking to a fresh app over ASGI.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/servicedetails")
            assert response.status_code == 200
    """
    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_prayer_timings():
    return {
        "fajar": {"azan": "05:10", "iqamah": "05:30"},
        "zuhar": {"azan": "13:00", "iqamah": "13:30"},
        "asar": {"azan": "16:45", "iqamah": "17:00"},
        "magrib": {"azan": "18:32", "iqamah": "18:37"},
        "isha": {"azan": "20:00", "iqamah": "20:15"},
        "jumuah": {"azan": "13:15", "iqamah": "13:45"},
        "ishraq": "06:45",
        "eid": "08:00",
    }


@pytest.fixture
def sample_service_payload(sample_prayer_timings):
    return {
        "name": "Masjid-e-Noor",
        "address": "12 Station Road",
        "pincode": "560001",
        "gmapLink": "https://maps.google.com/?q=masjid-e-noor",
        "prayerTimings": sample_prayer_timings,
    }

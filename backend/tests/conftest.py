"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database (aiosqlite) with
foreign keys enforced, and a session factory bound to it.
"""

from datetime import datetime, timedelta

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.models import Base, register_models
from app.features.users.models import User
from app.features.drops.models import Drop

register_models()

# Fixed clock: mid-month so both current and previous month windows are non-empty
NOW = datetime(2026, 3, 15, 12, 0, 0)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_user(db):
    """Factory: create and commit a user."""
    counter = {"n": 0}

    async def _make_user(connected: bool = True, **kwargs) -> User:
        counter["n"] += 1
        n = counter["n"]
        values = {
            "id": f"user-{n}",
            "email": f"runner{n}@example.com",
        }
        if connected:
            values.update(
                strava_athlete_id=1000 + n,
                strava_access_token=f"access-{n}",
                strava_refresh_token=f"refresh-{n}",
                token_expires_at=NOW + timedelta(hours=6),
                connected_at=NOW - timedelta(days=1),
            )
        values.update(kwargs)
        user = User(**values)
        db.add(user)
        await db.commit()
        return user

    return _make_user


@pytest.fixture
def make_drop(db):
    """Factory: create and commit a drop."""

    async def _make_drop(slug: str = "spring-collection", **kwargs) -> Drop:
        values = {
            "name": slug.replace("-", " ").title(),
            "slug": slug,
            "release_date": NOW,
            "is_published": True,
        }
        values.update(kwargs)
        drop = Drop(**values)
        db.add(drop)
        await db.commit()
        return drop

    return _make_drop


def strava_activity(
    activity_id: int,
    distance: float = 10000.0,
    start_date: str = "2026-03-10T12:00:00Z",
    latlng=(38.9, -77.03),
    activity_type: str = "Run",
    sport_type: str | None = None,
    **extra
) -> dict:
    """A list-activities payload item as Strava returns it."""
    data = {
        "id": activity_id,
        "name": f"Run {activity_id}",
        "type": activity_type,
        "sport_type": sport_type or activity_type,
        "start_date": start_date,
        "distance": distance,
        "moving_time": 3000,
        "elapsed_time": 3100,
        "total_elevation_gain": 40.0,
        "average_speed": 3.3,
        "max_speed": 4.8,
        "start_latlng": list(latlng) if latlng else [],
        "location_city": "Washington",
        "location_state": "District of Columbia",
        "location_country": "United States",
        "manual": False,
    }
    data.update(extra)
    return data


@pytest.fixture
def activity_payload():
    return strava_activity


# =============================================================================
# API
# =============================================================================

ADMIN_KEY = "test-admin-key"


@pytest.fixture
def configured(monkeypatch):
    """Strava and admin credentials set on the live settings object."""
    from app.config import settings

    monkeypatch.setattr(settings, "strava_client_id", "12345")
    monkeypatch.setattr(settings, "strava_client_secret", "s3cret")
    monkeypatch.setattr(settings, "admin_api_key", ADMIN_KEY)
    monkeypatch.setattr(settings, "app_url", "https://www.districtrun.co")


@pytest_asyncio.fixture
async def client(session_factory, configured):
    """
    httpx client bound to the app through ASGITransport.

    The lifespan is not run, so no background sync starts.
    """
    from app.db.session import get_async_db
    from app.main import app

    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = _get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"X-API-Key": ADMIN_KEY}

"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL.  The ``trips`` table has no PostgreSQL-specific
columns, so the production models are created as-is.
"""

from datetime import datetime
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from wasel.domain.entities import (
    CandidateTrip,
    GeoPoint,
    MatchQuery,
    RidePreferences,
    Route,
)
from wasel.infrastructure.database import Base

# ── Reference points ──────────────────────────────────────────────────

DUBAI = GeoPoint(25.2048, 55.2708, "Dubai")
ABU_DHABI = GeoPoint(24.4539, 54.3773, "Abu Dhabi")
CAIRO = GeoPoint(30.0444, 31.2357, "Cairo")
ALEXANDRIA = GeoPoint(31.2001, 29.9187, "Alexandria")

DEPARTURE = datetime(2026, 10, 20, 7, 0)


# ── Domain factories ──────────────────────────────────────────────────


@pytest.fixture
def make_trip():
    """Build a ``CandidateTrip`` on the Dubai -> Abu Dhabi route."""

    def _make(trip_id: str = "t1", **overrides) -> CandidateTrip:
        fields = dict(
            trip_id=trip_id,
            driver_id=f"driver-{trip_id}",
            driver_name="Omar Haddad",
            driver_rating=4.8,
            driver_preferences=RidePreferences(),
            origin=DUBAI,
            destination=ABU_DHABI,
            price_per_seat=45.0,
            departure_time=DEPARTURE,
            available_seats=3,
            vehicle_type="Sedan",
            is_verified=True,
        )
        fields.update(overrides)
        return CandidateTrip(**fields)

    return _make


@pytest.fixture
def dubai_query() -> MatchQuery:
    return MatchQuery(
        desired_route=Route(DUBAI, ABU_DHABI),
        rider_preferences=RidePreferences(),
        max_price_per_seat=50.0,
        min_driver_rating=4.0,
    )


# ── Test DB (SQLite in-memory) ────────────────────────────────────────

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh in-memory database per test; tables created up front."""
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient backed by SQLite."""

    async def _test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    from wasel.api.app import create_app
    from wasel.api.dependencies import get_db
    from wasel.api.middleware import limiter

    limiter.reset()
    app = create_app()
    app.dependency_overrides[get_db] = _test_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

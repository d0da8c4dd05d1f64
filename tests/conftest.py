"""Shared pytest fixtures for all test suites."""

import os
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from dataclasses import dataclass
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from backend.app.db.activities import insert_activity
from backend.app.db.context import RequestContext
from backend.app.db.engine import get_session
from backend.app.db.models import Base, User
from backend.app.db.records import ActivityRecord
from backend.app.db.seed_dev import DEV_USER_ID, seed_dev_user
from backend.app.db.travels import insert_itinerary, insert_travel
from backend.app.main import app
from backend.app.ordering.bucket import bucket_for
from backend.app.ordering.engine import append_index

OTHER_USER_ID = uuid.UUID("00000000-0000-0000-0000-0000000000aa")


@dataclass(frozen=True)
class TripIds:
    """Ids of the seeded travel: two days plus a second travel of the same owner."""

    travel_id: uuid.UUID
    day_one_id: uuid.UUID
    day_two_id: uuid.UUID
    other_travel_id: uuid.UUID
    other_day_id: uuid.UUID


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Async engine on a throwaway SQLite file."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'trips.db'}",
        poolclass=NullPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session(sqlite_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session configured like the app's get_session dependency."""
    async with AsyncSession(sqlite_engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture
async def trip(session: AsyncSession) -> TripIds:
    """Seed the dev user with two travels; the first has two days."""
    await seed_dev_user(session)
    ctx = RequestContext(user_id=DEV_USER_ID)

    travel = await insert_travel(session, ctx, title="Paris")
    day_one = await insert_itinerary(session, travel.travel_id, title="Day 1")
    day_two = await insert_itinerary(session, travel.travel_id, title="Day 2")
    other = await insert_travel(session, ctx, title="Rome")
    other_day = await insert_itinerary(session, other.travel_id, title="Day 1")
    await session.commit()

    return TripIds(
        travel_id=travel.travel_id,
        day_one_id=day_one.itinerary_id,
        day_two_id=day_two.itinerary_id,
        other_travel_id=other.travel_id,
        other_day_id=other_day.itinerary_id,
    )


MakeActivity = Callable[..., Awaitable[ActivityRecord]]


@pytest.fixture
def make_activity(session: AsyncSession) -> MakeActivity:
    """Factory inserting an activity, appended unless order_index is given."""

    async def _make(
        travel_id: uuid.UUID,
        itinerary_id: uuid.UUID | None = None,
        *,
        title: str = "Activity",
        order_index: float | None = None,
    ) -> ActivityRecord:
        if order_index is None:
            order_index = await append_index(session, bucket_for(travel_id, itinerary_id))
        activity = await insert_activity(
            session,
            travel_id=travel_id,
            itinerary_id=itinerary_id,
            title=title,
            latitude=48.8584,
            longitude=2.2945,
            order_index=order_index,
            created_by_id=DEV_USER_ID,
        )
        await session.commit()
        return activity

    return _make


@pytest.fixture
def client(tmp_path: Path) -> Generator[TestClient, None, None]:
    """Test client backed by a fresh SQLite file.

    Tables and users are created synchronously; requests run on the
    client's own event loop through an overridden get_session.
    """
    db_path = tmp_path / "api.db"

    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    with Session(sync_engine) as sync_session:
        sync_session.add(User(user_id=DEV_USER_ID, email="dev@example.com", name="Dev User"))
        sync_session.add(User(user_id=OTHER_USER_ID, email="other@example.com", name="Other"))
        sync_session.commit()
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with AsyncSession(engine, expire_on_commit=False) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def postgres_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create async engine for PostgreSQL integration tests.

    Requires DATABASE_URL to be set to a real PostgreSQL connection string.
    Tests using this fixture should be marked with @pytest.mark.postgres.
    """
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set - skipping postgres test")

    if not database_url.startswith(("postgresql://", "postgresql+asyncpg://")):
        pytest.skip(f"DATABASE_URL is not PostgreSQL: {database_url}")

    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    engine = create_async_engine(database_url, poolclass=NullPool, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def postgres_session(postgres_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create async session for PostgreSQL integration tests."""
    async with AsyncSession(postgres_engine, expire_on_commit=False) as session:
        yield session
        await session.rollback()

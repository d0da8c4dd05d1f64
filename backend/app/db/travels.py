"""Data-access functions for travels and itineraries."""

import uuid
from datetime import date
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.context import RequestContext
from backend.app.db.models import Activity as ActivityDB
from backend.app.db.models import Itinerary as ItineraryDB
from backend.app.db.models import Travel as TravelDB
from backend.app.db.records import ItineraryRecord, TravelRecord


def _travel_record(row: TravelDB) -> TravelRecord:
    return TravelRecord(
        travel_id=row.travel_id,
        owner_id=row.owner_id,
        title=row.title,
        description=row.description,
        start_date=row.start_date,
        end_date=row.end_date,
        created_at=row.created_at,
    )


def _itinerary_record(row: ItineraryDB) -> ItineraryRecord:
    return ItineraryRecord(
        itinerary_id=row.itinerary_id,
        travel_id=row.travel_id,
        title=row.title,
        day=row.day,
        created_at=row.created_at,
    )


async def insert_travel(
    session: AsyncSession,
    ctx: RequestContext,
    *,
    title: str,
    description: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> TravelRecord:
    """Insert a travel owned by the requesting user."""
    row = TravelDB(
        travel_id=uuid.uuid4(),
        owner_id=ctx.user_id,
        title=title,
        description=description,
        start_date=start_date,
        end_date=end_date,
    )
    session.add(row)
    await session.flush()
    return _travel_record(row)


async def get_travel(session: AsyncSession, travel_id: uuid.UUID) -> TravelRecord | None:
    """Get travel by ID (no ownership filter)."""
    result = await session.execute(select(TravelDB).where(TravelDB.travel_id == travel_id))
    row = result.scalar_one_or_none()
    return _travel_record(row) if row is not None else None


async def list_travels(session: AsyncSession, ctx: RequestContext) -> list[TravelRecord]:
    """List travels owned by the requesting user, newest first."""
    result = await session.execute(
        select(TravelDB)
        .where(TravelDB.owner_id == ctx.user_id)
        .order_by(TravelDB.created_at.desc())
    )
    return [_travel_record(row) for row in result.scalars().all()]


async def insert_itinerary(
    session: AsyncSession,
    travel_id: uuid.UUID,
    *,
    title: str,
    day: date | None = None,
) -> ItineraryRecord:
    """Insert an itinerary (day) into a travel."""
    row = ItineraryDB(
        itinerary_id=uuid.uuid4(),
        travel_id=travel_id,
        title=title,
        day=day,
    )
    session.add(row)
    await session.flush()
    return _itinerary_record(row)


async def get_itinerary(
    session: AsyncSession, itinerary_id: uuid.UUID
) -> ItineraryRecord | None:
    """Get itinerary by ID."""
    result = await session.execute(
        select(ItineraryDB).where(ItineraryDB.itinerary_id == itinerary_id)
    )
    row = result.scalar_one_or_none()
    return _itinerary_record(row) if row is not None else None


async def list_itineraries(
    session: AsyncSession, travel_id: uuid.UUID
) -> list[ItineraryRecord]:
    """List itineraries of a travel by day (undated last), then creation time."""
    result = await session.execute(
        select(ItineraryDB)
        .where(ItineraryDB.travel_id == travel_id)
        .order_by(
            ItineraryDB.day.is_(None),
            ItineraryDB.day,
            ItineraryDB.created_at,
        )
    )
    return [_itinerary_record(row) for row in result.scalars().all()]


# Columns a client may change through PATCH /travels/{id} and /itineraries/{id}
TRAVEL_EDITABLE_FIELDS = frozenset({"title", "description", "start_date", "end_date"})
ITINERARY_EDITABLE_FIELDS = frozenset({"title", "day"})


async def update_travel(
    session: AsyncSession, travel_id: uuid.UUID, changes: dict[str, Any]
) -> TravelRecord | None:
    """Apply field changes to a travel.

    Raises:
        ValueError: If changes name a field outside TRAVEL_EDITABLE_FIELDS
    """
    unknown = set(changes) - TRAVEL_EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields not editable: {sorted(unknown)}")

    result = await session.execute(select(TravelDB).where(TravelDB.travel_id == travel_id))
    row = result.scalar_one_or_none()
    if row is None:
        return None

    for field_name, value in changes.items():
        setattr(row, field_name, value)
    await session.flush()
    return _travel_record(row)


async def delete_travel(session: AsyncSession, travel_id: uuid.UUID) -> bool:
    """Delete a travel with its itineraries and activities.

    Children are removed explicitly so the result does not depend on the
    store enforcing ON DELETE CASCADE (SQLite does not by default).

    Returns:
        False if the travel did not exist
    """
    await session.execute(delete(ActivityDB).where(ActivityDB.travel_id == travel_id))
    await session.execute(delete(ItineraryDB).where(ItineraryDB.travel_id == travel_id))
    result = await session.execute(delete(TravelDB).where(TravelDB.travel_id == travel_id))
    return bool(result.rowcount)


async def update_itinerary(
    session: AsyncSession, itinerary_id: uuid.UUID, changes: dict[str, Any]
) -> ItineraryRecord | None:
    """Apply field changes to an itinerary.

    Raises:
        ValueError: If changes name a field outside ITINERARY_EDITABLE_FIELDS
    """
    unknown = set(changes) - ITINERARY_EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields not editable: {sorted(unknown)}")

    result = await session.execute(
        select(ItineraryDB).where(ItineraryDB.itinerary_id == itinerary_id)
    )
    row = result.scalar_one_or_none()
    if row is None:
        return None

    for field_name, value in changes.items():
        setattr(row, field_name, value)
    await session.flush()
    return _itinerary_record(row)


async def delete_itinerary(session: AsyncSession, itinerary_id: uuid.UUID) -> int | None:
    """Delete an itinerary together with every activity of its bucket.

    The travel's wishlist and other days keep their activities and indexes.

    Returns:
        Number of activities removed with the day, or None if the
        itinerary did not exist
    """
    removed = await session.execute(
        delete(ActivityDB).where(ActivityDB.itinerary_id == itinerary_id)
    )
    result = await session.execute(
        delete(ItineraryDB).where(ItineraryDB.itinerary_id == itinerary_id)
    )
    if not result.rowcount:
        return None
    return removed.rowcount

"""Data-access functions for activities and their bucket ordering."""

import uuid
from typing import Any

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.models import Activity as ActivityDB
from backend.app.db.records import ActivityRecord
from backend.app.ordering.bucket import Bucket, Day, Wishlist

# Columns a client may change through PATCH /activities/{id}
EDITABLE_FIELDS = frozenset(
    {"title", "description", "latitude", "longitude", "address", "start_time", "place_id"}
)


def _to_record(row: ActivityDB) -> ActivityRecord:
    return ActivityRecord(
        activity_id=row.activity_id,
        travel_id=row.travel_id,
        itinerary_id=row.itinerary_id,
        place_id=row.place_id,
        title=row.title,
        description=row.description,
        latitude=row.latitude,
        longitude=row.longitude,
        address=row.address,
        start_time=row.start_time,
        order_index=row.order_index,
        created_by_id=row.created_by_id,
        created_at=row.created_at,
    )


def bucket_filter(bucket: Bucket) -> list[ColumnElement[bool]]:
    """WHERE clauses selecting every activity of a bucket."""
    if isinstance(bucket, Wishlist):
        return [ActivityDB.travel_id == bucket.travel_id, ActivityDB.itinerary_id.is_(None)]
    if isinstance(bucket, Day):
        return [ActivityDB.itinerary_id == bucket.itinerary_id]
    raise TypeError(f"Unknown bucket: {bucket!r}")


async def _get_row(session: AsyncSession, activity_id: uuid.UUID) -> ActivityDB | None:
    result = await session.execute(
        select(ActivityDB).where(ActivityDB.activity_id == activity_id)
    )
    return result.scalar_one_or_none()


async def get_activity(session: AsyncSession, activity_id: uuid.UUID) -> ActivityRecord | None:
    """Get activity by ID.

    Args:
        session: Database session
        activity_id: Activity ID

    Returns:
        Activity record or None if not found
    """
    row = await _get_row(session, activity_id)
    return _to_record(row) if row is not None else None


async def list_bucket(session: AsyncSession, bucket: Bucket) -> list[ActivityRecord]:
    """List activities of a bucket in display order.

    Ties on order_index fall back to creation time, then id, so the
    listing is deterministic even while two siblings share an index.
    """
    result = await session.execute(
        select(ActivityDB)
        .where(*bucket_filter(bucket))
        .order_by(ActivityDB.order_index, ActivityDB.created_at, ActivityDB.activity_id)
    )
    return [_to_record(row) for row in result.scalars().all()]


async def max_order_index(session: AsyncSession, bucket: Bucket) -> float | None:
    """Highest order_index in a bucket, or None when the bucket is empty."""
    result = await session.execute(
        select(func.max(ActivityDB.order_index)).where(*bucket_filter(bucket))
    )
    return result.scalar_one_or_none()


async def insert_activity(
    session: AsyncSession,
    *,
    travel_id: uuid.UUID,
    itinerary_id: uuid.UUID | None,
    title: str,
    latitude: float,
    longitude: float,
    order_index: float,
    description: str | None = None,
    address: str | None = None,
    start_time: str | None = None,
    place_id: uuid.UUID | None = None,
    created_by_id: uuid.UUID | None = None,
) -> ActivityRecord:
    """Insert a new activity row and flush it."""
    row = ActivityDB(
        activity_id=uuid.uuid4(),
        travel_id=travel_id,
        itinerary_id=itinerary_id,
        place_id=place_id,
        title=title,
        description=description,
        latitude=latitude,
        longitude=longitude,
        address=address,
        start_time=start_time,
        order_index=order_index,
        created_by_id=created_by_id,
    )
    session.add(row)
    await session.flush()
    return _to_record(row)


async def place_activity(
    session: AsyncSession,
    activity_id: uuid.UUID,
    bucket: Bucket,
    order_index: float,
) -> ActivityRecord | None:
    """Move an activity into a bucket at the given order_index.

    Only itinerary_id and order_index change; travel_id is never touched.
    """
    row = await _get_row(session, activity_id)
    if row is None:
        return None

    row.itinerary_id = bucket.itinerary_id if isinstance(bucket, Day) else None
    row.order_index = order_index
    await session.flush()
    return _to_record(row)


async def renumber_bucket(
    session: AsyncSession, bucket: Bucket, step: float
) -> dict[uuid.UUID, float]:
    """Reassign every activity of a bucket to consecutive multiples of step.

    Current display order is kept. Rows are only flushed here; the caller's
    transaction decides when the new indexes become visible.

    Returns:
        Mapping of activity_id to its new order_index
    """
    result = await session.execute(
        select(ActivityDB)
        .where(*bucket_filter(bucket))
        .order_by(ActivityDB.order_index, ActivityDB.created_at, ActivityDB.activity_id)
    )
    rows = list(result.scalars().all())

    new_indexes: dict[uuid.UUID, float] = {}
    for position, row in enumerate(rows, start=1):
        row.order_index = position * step
        new_indexes[row.activity_id] = row.order_index

    await session.flush()
    return new_indexes


async def update_activity_fields(
    session: AsyncSession, activity_id: uuid.UUID, changes: dict[str, Any]
) -> ActivityRecord | None:
    """Apply descriptive field changes to an activity.

    Raises:
        ValueError: If changes name a field outside EDITABLE_FIELDS
    """
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields not editable: {sorted(unknown)}")

    row = await _get_row(session, activity_id)
    if row is None:
        return None

    for field_name, value in changes.items():
        setattr(row, field_name, value)
    await session.flush()
    return _to_record(row)


async def delete_activity(session: AsyncSession, activity_id: uuid.UUID) -> bool:
    """Delete an activity. Returns False if it did not exist."""
    result = await session.execute(
        delete(ActivityDB).where(ActivityDB.activity_id == activity_id)
    )
    return bool(result.rowcount)

"""Data-access functions for places."""

import uuid
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.models import Place as PlaceDB
from backend.app.db.records import PlaceRecord

# Matches the numeric(10, 7) column scale
_COORD_QUANTUM = Decimal("0.0000001")


def to_coordinate(value: float) -> Decimal:
    """Convert a float coordinate to the stored decimal precision."""
    return Decimal(str(value)).quantize(_COORD_QUANTUM)


def _to_record(row: PlaceDB) -> PlaceRecord:
    return PlaceRecord(
        place_id=row.place_id,
        name=row.name,
        latitude=float(row.latitude),
        longitude=float(row.longitude),
        address=row.address,
        external_id=row.external_id,
        provider=row.provider,
        created_at=row.created_at,
    )


async def get_place(session: AsyncSession, place_id: uuid.UUID) -> PlaceRecord | None:
    """Get place by ID."""
    result = await session.execute(select(PlaceDB).where(PlaceDB.place_id == place_id))
    row = result.scalar_one_or_none()
    return _to_record(row) if row is not None else None


async def find_by_external_ref(
    session: AsyncSession, external_id: str, provider: str
) -> PlaceRecord | None:
    """Find the place registered under a provider's external id.

    The (external_id, provider) pair is unique, so at most one row matches.
    """
    result = await session.execute(
        select(PlaceDB).where(
            PlaceDB.external_id == external_id,
            PlaceDB.provider == provider,
        )
    )
    row = result.scalar_one_or_none()
    return _to_record(row) if row is not None else None


async def find_near(
    session: AsyncSession,
    *,
    name: str,
    latitude: float,
    longitude: float,
    epsilon: float,
) -> list[PlaceRecord]:
    """Find places with exactly this name within epsilon degrees on both axes.

    Results are ordered oldest first, then by place_id.

    Args:
        session: Database session
        name: Place name (case-sensitive exact match)
        latitude: Candidate latitude
        longitude: Candidate longitude
        epsilon: Half-width of the window in degrees (exclusive)

    Returns:
        Matching places, possibly empty
    """
    window = to_coordinate(epsilon)
    result = await session.execute(
        select(PlaceDB)
        .where(
            PlaceDB.name == name,
            func.abs(PlaceDB.latitude - to_coordinate(latitude)) < window,
            func.abs(PlaceDB.longitude - to_coordinate(longitude)) < window,
        )
        .order_by(PlaceDB.created_at, PlaceDB.place_id)
    )
    return [_to_record(row) for row in result.scalars().all()]


async def insert_place(
    session: AsyncSession,
    *,
    name: str,
    latitude: float,
    longitude: float,
    address: str | None = None,
    external_id: str | None = None,
    provider: str | None = None,
) -> PlaceRecord:
    """Insert a new place row and flush it."""
    row = PlaceDB(
        place_id=uuid.uuid4(),
        name=name,
        latitude=to_coordinate(latitude),
        longitude=to_coordinate(longitude),
        address=address,
        external_id=external_id,
        provider=provider,
    )
    session.add(row)
    await session.flush()
    return _to_record(row)

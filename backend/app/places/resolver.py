"""Place resolver - map a place description to one canonical Place row.

Strategy (first match wins):
1. Exact (external_id, provider) match, when both are supplied
2. Same name (case-sensitive) within the proximity window on both axes;
   with several candidates the oldest place wins
3. Insert a new place

Concurrent resolves of a brand-new place can both miss and both insert.
Only the (external_id, provider) pair is unique in the schema; the
proximity rule has no database backing.
"""

import math
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.config import get_settings
from backend.app.db.places import find_by_external_ref, find_near, insert_place
from backend.app.db.records import PlaceRecord
from backend.app.errors import InvalidArgumentError


class PlaceMatch(str, Enum):
    """How a place was resolved."""

    external = "external"
    proximity = "proximity"
    created = "created"


@dataclass(frozen=True)
class PlaceResolution:
    """Resolved place and the rule that produced it."""

    place: PlaceRecord
    match: PlaceMatch


def _check_coordinate(label: str, value: float | None, limit: float) -> float:
    if value is None:
        raise InvalidArgumentError(f"{label} is required")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(f"{label} must be a number")
    if not math.isfinite(value):
        raise InvalidArgumentError(f"{label} must be finite")
    if abs(value) > limit:
        raise InvalidArgumentError(f"{label} must be between -{limit:g} and {limit:g}")
    return float(value)


async def resolve_place(
    session: AsyncSession,
    *,
    name: str | None,
    latitude: float | None,
    longitude: float | None,
    address: str | None = None,
    external_id: str | None = None,
    provider: str | None = None,
) -> PlaceResolution:
    """Find or create the canonical place for a description.

    An existing place is returned unchanged; supplied address or external
    ids are never merged into it.

    Args:
        session: Database session (the caller commits)
        name: Place name
        latitude: Latitude in degrees
        longitude: Longitude in degrees
        address: Optional street address
        external_id: Optional id in the provider's namespace
        provider: Optional search provider name

    Returns:
        PlaceResolution with the place and how it was matched

    Raises:
        InvalidArgumentError: If name or a coordinate is missing or invalid
    """
    if not name or not name.strip():
        raise InvalidArgumentError("name is required")
    lat = _check_coordinate("latitude", latitude, 90.0)
    lng = _check_coordinate("longitude", longitude, 180.0)

    if external_id and provider:
        existing = await find_by_external_ref(session, external_id, provider)
        if existing is not None:
            return PlaceResolution(place=existing, match=PlaceMatch.external)

    nearby = await find_near(
        session,
        name=name,
        latitude=lat,
        longitude=lng,
        epsilon=get_settings().place_proximity_deg,
    )
    if nearby:
        return PlaceResolution(place=nearby[0], match=PlaceMatch.proximity)

    place = await insert_place(
        session,
        name=name,
        latitude=lat,
        longitude=lng,
        address=address,
        external_id=external_id or None,
        provider=provider or None,
    )
    return PlaceResolution(place=place, match=PlaceMatch.created)

"""Plain value types returned by the data-access functions."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class TravelRecord:
    """Travel data record."""

    travel_id: UUID
    owner_id: UUID
    title: str
    description: str | None
    start_date: date | None
    end_date: date | None
    created_at: datetime


@dataclass(frozen=True)
class ItineraryRecord:
    """Itinerary (day) data record."""

    itinerary_id: UUID
    travel_id: UUID
    title: str
    day: date | None
    created_at: datetime


@dataclass(frozen=True)
class ActivityRecord:
    """Activity data record."""

    activity_id: UUID
    travel_id: UUID
    itinerary_id: UUID | None
    place_id: UUID | None
    title: str
    description: str | None
    latitude: float
    longitude: float
    address: str | None
    start_time: str | None
    order_index: float
    created_by_id: UUID | None
    created_at: datetime


@dataclass(frozen=True)
class PlaceRecord:
    """Place data record."""

    place_id: UUID
    name: str
    latitude: float
    longitude: float
    address: str | None
    external_id: str | None
    provider: str | None
    created_at: datetime

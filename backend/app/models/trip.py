"""Trip domain models returned by the API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Travel(BaseModel):
    """Travel metadata."""

    model_config = ConfigDict(from_attributes=True)

    travel_id: UUID
    owner_id: UUID
    title: str
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    created_at: datetime


class Itinerary(BaseModel):
    """One day of a travel."""

    model_config = ConfigDict(from_attributes=True)

    itinerary_id: UUID
    travel_id: UUID
    title: str
    day: date | None = None
    created_at: datetime


class Activity(BaseModel):
    """Activity in an itinerary, or in the wishlist when itinerary_id is None."""

    model_config = ConfigDict(from_attributes=True)

    activity_id: UUID
    travel_id: UUID
    itinerary_id: UUID | None = None
    place_id: UUID | None = None
    title: str
    description: str | None = None
    latitude: float
    longitude: float
    address: str | None = None
    start_time: str | None = None
    order_index: float
    created_by_id: UUID | None = None
    created_at: datetime


class Place(BaseModel):
    """Canonical place."""

    model_config = ConfigDict(from_attributes=True)

    place_id: UUID
    name: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    address: str | None = None
    external_id: str | None = None
    provider: str | None = None
    created_at: datetime


class ItineraryWithActivities(Itinerary):
    """Itinerary with its activities in display order."""

    activities: list[Activity] = Field(default_factory=list)


class TravelDetail(Travel):
    """Travel with its days and wishlist, each in display order."""

    itineraries: list[ItineraryWithActivities] = Field(default_factory=list)
    wishlist: list[Activity] = Field(default_factory=list)

"""Bucket - the sibling group an activity is ordered within."""

from dataclasses import dataclass
from uuid import UUID

from backend.app.db.records import ActivityRecord


@dataclass(frozen=True)
class Wishlist:
    """Unscheduled activities of a travel (no itinerary)."""

    travel_id: UUID


@dataclass(frozen=True)
class Day:
    """Activities assigned to one itinerary."""

    itinerary_id: UUID


Bucket = Wishlist | Day


def bucket_of(activity: ActivityRecord) -> Bucket:
    """Return the bucket a stored activity currently belongs to."""
    if activity.itinerary_id is None:
        return Wishlist(travel_id=activity.travel_id)
    return Day(itinerary_id=activity.itinerary_id)


def bucket_for(travel_id: UUID, itinerary_id: UUID | None) -> Bucket:
    """Build a bucket from the nullable itinerary id used on the wire."""
    if itinerary_id is None:
        return Wishlist(travel_id=travel_id)
    return Day(itinerary_id=itinerary_id)

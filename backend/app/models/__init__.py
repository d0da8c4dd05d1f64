"""Models package - re-exports for convenience."""

from backend.app.models.trip import (
    Activity,
    Itinerary,
    ItineraryWithActivities,
    Place,
    Travel,
    TravelDetail,
)

__all__ = [
    "Travel",
    "TravelDetail",
    "Itinerary",
    "ItineraryWithActivities",
    "Activity",
    "Place",
]

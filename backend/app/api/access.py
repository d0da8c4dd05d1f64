"""Travel access checks shared by the trip routes."""

import uuid

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.activities import get_activity
from backend.app.db.context import RequestContext
from backend.app.db.records import ActivityRecord, ItineraryRecord, TravelRecord
from backend.app.db.travels import get_itinerary, get_travel


def _check_owner(travel: TravelRecord, ctx: RequestContext) -> None:
    if travel.owner_id != ctx.user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")


async def require_travel(
    session: AsyncSession, travel_id: uuid.UUID, ctx: RequestContext
) -> TravelRecord:
    """Load a travel the caller may edit.

    Raises:
        HTTPException: 404 if the travel does not exist, 403 if it belongs
            to someone else
    """
    travel = await get_travel(session, travel_id)
    if travel is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Travel not found")
    _check_owner(travel, ctx)
    return travel


async def require_itinerary(
    session: AsyncSession, itinerary_id: uuid.UUID, ctx: RequestContext
) -> ItineraryRecord:
    """Load an itinerary whose travel the caller may edit."""
    itinerary = await get_itinerary(session, itinerary_id)
    if itinerary is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Itinerary not found")
    await require_travel(session, itinerary.travel_id, ctx)
    return itinerary


async def require_activity(
    session: AsyncSession, activity_id: uuid.UUID, ctx: RequestContext
) -> ActivityRecord:
    """Load an activity whose travel the caller may edit."""
    activity = await get_activity(session, activity_id)
    if activity is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activity not found")
    await require_travel(session, activity.travel_id, ctx)
    return activity

"""Travel and itinerary endpoints."""

import logging
import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, model_validator
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.access import require_itinerary, require_travel
from backend.app.api.auth import get_current_context
from backend.app.db.activities import list_bucket
from backend.app.db.context import RequestContext
from backend.app.db.engine import get_session
from backend.app.db.travels import (
    delete_itinerary,
    delete_travel,
    insert_itinerary,
    insert_travel,
    list_itineraries,
    list_travels,
    update_itinerary,
    update_travel,
)
from backend.app.models.trip import (
    Activity,
    Itinerary,
    ItineraryWithActivities,
    Travel,
    TravelDetail,
)
from backend.app.ordering.bucket import Day, Wishlist

router = APIRouter(tags=["travels"])
logger = logging.getLogger(__name__)


class CreateTravelRequest(BaseModel):
    """Request body for POST /travels."""

    title: str = Field(..., min_length=1, max_length=200, description="Travel title")
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "CreateTravelRequest":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class CreateItineraryRequest(BaseModel):
    """Request body for POST /travels/{travel_id}/itineraries."""

    title: str = Field(..., min_length=1, max_length=200, description="Day title")
    day: date | None = None


class UpdateTravelRequest(BaseModel):
    """Request body for PATCH /travels/{travel_id}; omitted fields are kept."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None


class UpdateItineraryRequest(BaseModel):
    """Request body for PATCH /itineraries/{itinerary_id}."""

    title: str | None = Field(None, min_length=1, max_length=200)
    day: date | None = None


class DeleteResponse(BaseModel):
    """Response for DELETE /travels/{id} and /itineraries/{id}."""

    success: bool
    activities_removed: int | None = None


class TravelListResponse(BaseModel):
    """Response for GET /travels."""

    travels: list[Travel]


@router.post("/travels", response_model=Travel, status_code=status.HTTP_201_CREATED)
async def create_travel(
    request: CreateTravelRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Travel:
    """Create a travel owned by the caller."""
    travel = await insert_travel(
        session,
        ctx,
        title=request.title,
        description=request.description,
        start_date=request.start_date,
        end_date=request.end_date,
    )
    await session.commit()

    logger.info(f"[POST /travels] travel_id={travel.travel_id} user_id={ctx.user_id}")
    return Travel.model_validate(travel)


@router.get("/travels", response_model=TravelListResponse)
async def get_travels(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> TravelListResponse:
    """List the caller's travels, newest first."""
    travels = await list_travels(session, ctx)
    return TravelListResponse(travels=[Travel.model_validate(t) for t in travels])


@router.get("/travels/{travel_id}", response_model=TravelDetail)
async def get_travel_detail(
    travel_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> TravelDetail:
    """Get a travel with its days and wishlist, activities in display order."""
    travel = await require_travel(session, travel_id, ctx)

    days: list[ItineraryWithActivities] = []
    for itinerary in await list_itineraries(session, travel_id):
        activities = await list_bucket(session, Day(itinerary_id=itinerary.itinerary_id))
        days.append(
            ItineraryWithActivities(
                **Itinerary.model_validate(itinerary).model_dump(),
                activities=[Activity.model_validate(a) for a in activities],
            )
        )

    wishlist = await list_bucket(session, Wishlist(travel_id=travel_id))

    return TravelDetail(
        **Travel.model_validate(travel).model_dump(),
        itineraries=days,
        wishlist=[Activity.model_validate(a) for a in wishlist],
    )


@router.get("/travels/{travel_id}/wishlist", response_model=list[Activity])
async def get_wishlist(
    travel_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[Activity]:
    """List wishlist activities of a travel in display order."""
    await require_travel(session, travel_id, ctx)
    wishlist = await list_bucket(session, Wishlist(travel_id=travel_id))
    return [Activity.model_validate(a) for a in wishlist]


@router.post(
    "/travels/{travel_id}/itineraries",
    response_model=Itinerary,
    status_code=status.HTTP_201_CREATED,
)
async def create_itinerary(
    travel_id: uuid.UUID,
    request: CreateItineraryRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Itinerary:
    """Add a day to a travel."""
    await require_travel(session, travel_id, ctx)
    itinerary = await insert_itinerary(session, travel_id, title=request.title, day=request.day)
    await session.commit()

    logger.info(
        f"[POST /travels/{travel_id}/itineraries] itinerary_id={itinerary.itinerary_id}"
    )
    return Itinerary.model_validate(itinerary)


@router.get("/itineraries/{itinerary_id}/activities", response_model=list[Activity])
async def get_itinerary_activities(
    itinerary_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[Activity]:
    """List activities of one day in display order."""
    await require_itinerary(session, itinerary_id, ctx)
    activities = await list_bucket(session, Day(itinerary_id=itinerary_id))
    return [Activity.model_validate(a) for a in activities]


@router.patch("/travels/{travel_id}", response_model=Travel)
async def patch_travel(
    travel_id: uuid.UUID,
    request: UpdateTravelRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Travel:
    """Update travel metadata; the date range is checked after merging."""
    travel = await require_travel(session, travel_id, ctx)

    changes = request.model_dump(exclude_unset=True)
    if "title" in changes and changes["title"] is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="title cannot be null")

    start_date = changes.get("start_date", travel.start_date)
    end_date = changes.get("end_date", travel.end_date)
    if start_date and end_date and end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must not be before start_date",
        )

    updated = await update_travel(session, travel_id, changes)
    await session.commit()

    logger.info(f"[PATCH /travels/{travel_id}] fields={sorted(changes)}")
    return Travel.model_validate(updated)


@router.delete("/travels/{travel_id}", response_model=DeleteResponse)
async def remove_travel(
    travel_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """Delete a travel with its days, wishlist and activities."""
    await require_travel(session, travel_id, ctx)
    deleted = await delete_travel(session, travel_id)
    await session.commit()

    logger.info(f"[DELETE /travels/{travel_id}] deleted={deleted} user_id={ctx.user_id}")
    return DeleteResponse(success=deleted)


@router.patch("/itineraries/{itinerary_id}", response_model=Itinerary)
async def patch_itinerary(
    itinerary_id: uuid.UUID,
    request: UpdateItineraryRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Itinerary:
    """Rename a day or change its date."""
    await require_itinerary(session, itinerary_id, ctx)

    changes = request.model_dump(exclude_unset=True)
    if "title" in changes and changes["title"] is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="title cannot be null")

    updated = await update_itinerary(session, itinerary_id, changes)
    await session.commit()

    logger.info(f"[PATCH /itineraries/{itinerary_id}] fields={sorted(changes)}")
    return Itinerary.model_validate(updated)


@router.delete("/itineraries/{itinerary_id}", response_model=DeleteResponse)
async def remove_itinerary(
    itinerary_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """Delete a day and every activity scheduled on it."""
    await require_itinerary(session, itinerary_id, ctx)
    removed = await delete_itinerary(session, itinerary_id)
    await session.commit()

    logger.info(f"[DELETE /itineraries/{itinerary_id}] activities_removed={removed}")
    return DeleteResponse(success=removed is not None, activities_removed=removed)

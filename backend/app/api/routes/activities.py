"""Activity endpoints - CRUD, reorder within a bucket, assign to a bucket."""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.access import require_activity, require_travel
from backend.app.api.auth import get_current_context
from backend.app.db.activities import (
    delete_activity,
    get_activity,
    insert_activity,
    update_activity_fields,
)
from backend.app.db.context import RequestContext
from backend.app.db.engine import get_session
from backend.app.db.travels import get_itinerary
from backend.app.models.trip import Activity
from backend.app.ordering.bucket import bucket_for
from backend.app.ordering.engine import Position, append_index, reassign_bucket, reorder
from backend.app.places.resolver import resolve_place
from backend.app.utils.logging import ordering_logger
from backend.app.utils.metrics import metrics

router = APIRouter(prefix="/activities", tags=["activities"])
logger = logging.getLogger(__name__)


class CreateActivityRequest(BaseModel):
    """Request body for POST /activities."""

    travel_id: uuid.UUID
    itinerary_id: uuid.UUID | None = Field(None, description="None puts it in the wishlist")
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    address: str | None = None
    start_time: str | None = None
    google_place_id: str | None = None
    external_place_id: str | None = None
    place_provider: str | None = None


class UpdateActivityRequest(BaseModel):
    """Request body for PATCH /activities/{activity_id}."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    address: str | None = None
    start_time: str | None = None
    google_place_id: str | None = Field(None, description="None unlinks the place")


class ReorderActivityRequest(BaseModel):
    """Request body for PATCH /activities/reorder."""

    activity_id: uuid.UUID
    after_activity_id: uuid.UUID | None = None
    before_activity_id: uuid.UUID | None = None


class AssignActivityRequest(BaseModel):
    """Request body for PATCH /activities/{activity_id}/assign."""

    itinerary_id: uuid.UUID | None = Field(None, description="None moves it to the wishlist")
    after_activity_id: uuid.UUID | None = None
    before_activity_id: uuid.UUID | None = None


class DeleteActivityResponse(BaseModel):
    """Response for DELETE /activities/{activity_id}."""

    success: bool


async def _load(session: AsyncSession, activity_id: uuid.UUID) -> Activity:
    activity = await get_activity(session, activity_id)
    if activity is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activity not found")
    return Activity.model_validate(activity)


@router.post("", response_model=Activity, status_code=status.HTTP_201_CREATED)
async def create_activity(
    request: CreateActivityRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Activity:
    """Create an activity at the end of its bucket and link its place.

    The place is resolved from the external id when one is given
    (google_place_id implies provider "google"), otherwise by name and
    coordinates.
    """
    await require_travel(session, request.travel_id, ctx)

    if request.itinerary_id is not None:
        itinerary = await get_itinerary(session, request.itinerary_id)
        if itinerary is None or itinerary.travel_id != request.travel_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Itinerary not found or does not belong to this travel",
            )

    resolution = await resolve_place(
        session,
        name=request.title,
        latitude=request.latitude,
        longitude=request.longitude,
        address=request.address,
        external_id=request.external_place_id or request.google_place_id,
        provider=request.place_provider or ("google" if request.google_place_id else None),
    )

    bucket = bucket_for(request.travel_id, request.itinerary_id)
    order_index = await append_index(session, bucket)

    activity = await insert_activity(
        session,
        travel_id=request.travel_id,
        itinerary_id=request.itinerary_id,
        title=request.title,
        description=request.description,
        latitude=request.latitude,
        longitude=request.longitude,
        address=request.address,
        start_time=request.start_time,
        place_id=resolution.place.place_id,
        order_index=order_index,
        created_by_id=ctx.user_id,
    )
    await session.commit()

    metrics.record_resolution(resolution.match.value)
    metrics.record_placement("append", renumbered=False)
    ordering_logger.log_resolution(ctx, resolution)
    logger.info(
        f"[POST /activities] activity_id={activity.activity_id} "
        f"order_index={activity.order_index} place_match={resolution.match.value}"
    )
    return Activity.model_validate(activity)


@router.patch("/reorder", response_model=Activity)
async def reorder_activity(
    request: ReorderActivityRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Activity:
    """Move an activity between two neighbors of its current bucket."""
    await require_activity(session, request.activity_id, ctx)

    placement = await reorder(
        session,
        request.activity_id,
        Position(after_id=request.after_activity_id, before_id=request.before_activity_id),
    )
    await session.commit()

    metrics.record_placement("reorder", placement.renumbered)
    ordering_logger.log_placement(ctx, "reorder", placement)
    return await _load(session, request.activity_id)


@router.get("/{activity_id}", response_model=Activity)
async def get_activity_detail(
    activity_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Activity:
    """Get one activity."""
    activity = await require_activity(session, activity_id, ctx)
    return Activity.model_validate(activity)


@router.patch("/{activity_id}/assign", response_model=Activity)
async def assign_activity(
    activity_id: uuid.UUID,
    request: AssignActivityRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Activity:
    """Assign an activity to a day, or back to the wishlist.

    Without neighbors the activity lands at the end of the destination.
    """
    activity = await require_activity(session, activity_id, ctx)

    placement = await reassign_bucket(
        session,
        activity_id,
        bucket_for(activity.travel_id, request.itinerary_id),
        Position(after_id=request.after_activity_id, before_id=request.before_activity_id),
    )
    await session.commit()

    metrics.record_placement("assign", placement.renumbered)
    ordering_logger.log_placement(ctx, "assign", placement)
    return await _load(session, activity_id)


@router.patch("/{activity_id}", response_model=Activity)
async def update_activity(
    activity_id: uuid.UUID,
    request: UpdateActivityRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Activity:
    """Update descriptive fields; ordering fields are not editable here.

    A google_place_id re-links the activity to the place resolved from it
    (with the updated title and coordinates); null unlinks the place.
    """
    current = await require_activity(session, activity_id, ctx)

    changes = request.model_dump(exclude_unset=True)
    for required in ("title", "latitude", "longitude"):
        if required in changes and changes[required] is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{required} cannot be null",
            )

    resolution = None
    if "google_place_id" in changes:
        google_place_id = changes.pop("google_place_id")
        if google_place_id is None:
            changes["place_id"] = None
        else:
            resolution = await resolve_place(
                session,
                name=changes.get("title", current.title),
                latitude=changes.get("latitude", current.latitude),
                longitude=changes.get("longitude", current.longitude),
                address=changes.get("address", current.address),
                external_id=google_place_id,
                provider="google",
            )
            changes["place_id"] = resolution.place.place_id

    updated = await update_activity_fields(session, activity_id, changes)
    await session.commit()

    if resolution is not None:
        metrics.record_resolution(resolution.match.value)
        ordering_logger.log_resolution(ctx, resolution)
    logger.info(f"[PATCH /activities/{activity_id}] fields={sorted(changes)}")
    return Activity.model_validate(updated)


@router.delete("/{activity_id}", response_model=DeleteActivityResponse)
async def remove_activity(
    activity_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteActivityResponse:
    """Delete an activity. Siblings keep their indexes."""
    await require_activity(session, activity_id, ctx)
    deleted = await delete_activity(session, activity_id)
    await session.commit()

    logger.info(f"[DELETE /activities/{activity_id}] deleted={deleted}")
    return DeleteActivityResponse(success=deleted)

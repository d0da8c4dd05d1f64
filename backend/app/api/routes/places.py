"""Place endpoints - POST /places/resolve, GET /places/{place_id}."""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.auth import get_current_context
from backend.app.db.context import RequestContext
from backend.app.db.engine import get_session
from backend.app.db.places import get_place
from backend.app.models.trip import Place
from backend.app.places.resolver import PlaceMatch, resolve_place
from backend.app.utils.logging import ordering_logger
from backend.app.utils.metrics import metrics

router = APIRouter(prefix="/places", tags=["places"])
logger = logging.getLogger(__name__)


class ResolvePlaceRequest(BaseModel):
    """Request body for POST /places/resolve.

    Coordinate range and finiteness are checked by the resolver so that
    they surface as 400, like every other resolver error.
    """

    name: str = Field(..., max_length=300)
    latitude: float
    longitude: float
    address: str | None = None
    external_id: str | None = None
    provider: str | None = None


class ResolvePlaceResponse(BaseModel):
    """Response for POST /places/resolve."""

    place: Place
    match: PlaceMatch


@router.post("/resolve", response_model=ResolvePlaceResponse)
async def resolve(
    request: ResolvePlaceRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ResolvePlaceResponse:
    """Find or create the canonical place for a search result."""
    resolution = await resolve_place(
        session,
        name=request.name,
        latitude=request.latitude,
        longitude=request.longitude,
        address=request.address,
        external_id=request.external_id,
        provider=request.provider,
    )
    await session.commit()

    metrics.record_resolution(resolution.match.value)
    ordering_logger.log_resolution(ctx, resolution)
    return ResolvePlaceResponse(
        place=Place.model_validate(resolution.place), match=resolution.match
    )


@router.get("/{place_id}", response_model=Place)
async def get_place_detail(
    place_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Place:
    """Get one place."""
    place = await get_place(session, place_id)
    if place is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Place not found")

    logger.info(f"[GET /places/{place_id}] user_id={ctx.user_id}")
    return Place.model_validate(place)

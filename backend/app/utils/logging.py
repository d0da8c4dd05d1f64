"""Structured logging for ordering and place resolution."""

import logging
from typing import Any

from backend.app.db.context import RequestContext
from backend.app.ordering.bucket import Day, Wishlist
from backend.app.ordering.engine import Placement
from backend.app.places.resolver import PlaceResolution

logger = logging.getLogger(__name__)


def _bucket_fields(placement: Placement) -> dict[str, Any]:
    bucket = placement.bucket
    if isinstance(bucket, Wishlist):
        return {"bucket": "wishlist", "travel_id": str(bucket.travel_id)}
    if isinstance(bucket, Day):
        return {"bucket": "day", "itinerary_id": str(bucket.itinerary_id)}
    return {"bucket": repr(bucket)}


class StructuredOrderingLogger:
    """Structured logger for activity placements and place resolutions."""

    def log_placement(self, ctx: RequestContext, operation: str, placement: Placement) -> None:
        """Log an ordering operation with structured data."""
        log_data: dict[str, Any] = {
            "user_id": str(ctx.user_id),
            "activity_id": str(placement.activity_id),
            "operation": operation,
            "order_index": placement.order_index,
            "renumbered": placement.renumbered,
            **_bucket_fields(placement),
        }

        log_msg = f"Activity placement: {operation} -> {placement.order_index}"

        if placement.renumbered:
            logger.warning(f"{log_msg} (bucket renumbered)", extra={"structured": log_data})
        else:
            logger.info(log_msg, extra={"structured": log_data})

    def log_resolution(self, ctx: RequestContext, resolution: PlaceResolution) -> None:
        """Log a place resolution with structured data."""
        log_data: dict[str, Any] = {
            "user_id": str(ctx.user_id),
            "place_id": str(resolution.place.place_id),
            "match": resolution.match.value,
            "provider": resolution.place.provider,
        }
        logger.info(
            f"Place resolution: {resolution.match.value} -> {resolution.place.place_id}",
            extra={"structured": log_data},
        )


ordering_logger = StructuredOrderingLogger()

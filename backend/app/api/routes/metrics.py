"""Prometheus scrape endpoint for ordering and place-resolution counters."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Serve the default registry in Prometheus text format.

    Counters defined in backend.app.utils.metrics:
    - activity_placements_total{operation}
    - activity_bucket_renumbers_total
    - place_resolutions_total{match}
    """
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)

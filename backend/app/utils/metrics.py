"""Prometheus metrics for activity ordering and place resolution."""

from prometheus_client import Counter

activity_placements_total = Counter(
    "activity_placements_total",
    "Activity order_index assignments",
    ["operation"],
)

activity_bucket_renumbers_total = Counter(
    "activity_bucket_renumbers_total",
    "Full bucket renumberings after an exhausted midpoint",
)

place_resolutions_total = Counter(
    "place_resolutions_total",
    "Place resolutions by matching rule",
    ["match"],
)


class PrometheusOrderingMetrics:
    """Prometheus-based ordering metrics implementation."""

    def record_placement(self, operation: str, renumbered: bool) -> None:
        """Count a placement and, if it happened, the renumbering."""
        activity_placements_total.labels(operation=operation).inc()
        if renumbered:
            activity_bucket_renumbers_total.inc()

    def record_resolution(self, match: str) -> None:
        """Count a place resolution."""
        place_resolutions_total.labels(match=match).inc()


metrics = PrometheusOrderingMetrics()

"""Prometheus metrics definitions and helpers.

Provides HTTP and entity store metrics for the music catalog API.
"""

from typing import Callable

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    generate_latest,
    CollectorRegistry,
)


class HttpMetrics:
    """HTTP request and entity store metrics."""

    def __init__(self, registry: CollectorRegistry) -> None:
        """Initialize HTTP metrics.

        Args:
            registry: Prometheus registry to use
        """
        self.registry = registry

        # Requests handled
        self.requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status"],
            registry=registry,
        )

        # Request duration
        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
            registry=registry,
        )

        # Requests in flight
        self.requests_in_progress = Gauge(
            "http_requests_in_progress",
            "HTTP requests currently in progress",
            ["method"],
            registry=registry,
        )

        # Store failures surfaced to the API layer
        self.store_errors = Counter(
            "catalog_store_errors_total",
            "Entity store failures that reached the API layer",
            ["endpoint"],
            registry=registry,
        )


def get_metrics_handler(registry: CollectorRegistry) -> Callable[[], bytes]:
    """Get metrics handler for HTTP endpoint.

    Args:
        registry: Registry to render

    Returns:
        Function that generates Prometheus metrics output
    """

    def metrics_handler() -> bytes:
        return generate_latest(registry)

    return metrics_handler

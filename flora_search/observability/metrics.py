"""Prometheus metrics for the flower search service.

Provides metrics instrumentation for:
- HTTP request latency and counts
- Flower searches (outcome, latency, result counts)
- Search hits dropped during normalization
- Flower writes
- Vector store operation latency
"""

import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

# HTTP Request Metrics
HTTP_REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint", "status_code"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

HTTP_REQUEST_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

# Search Metrics
FLOWER_SEARCH_DURATION = Histogram(
    "flower_search_duration_seconds",
    "Flower search duration in seconds",
    ["status"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0],
)

FLOWER_SEARCH_TOTAL = Counter(
    "flower_searches_total",
    "Total flower searches",
    ["status"],  # "status" label values: success, empty, error
)

FLOWER_SEARCH_RESULTS = Histogram(
    "flower_search_results",
    "Number of flowers returned per search",
    buckets=[0, 1, 2, 3, 5, 10, 20, 50, 100],
)

FLOWER_HITS_DROPPED = Counter(
    "flower_hits_dropped_total",
    "Search hits dropped because they did not normalize",
    ["reason"],
)

# Write Metrics
FLOWER_UPSERT_TOTAL = Counter(
    "flower_upserts_total",
    "Total flower writes",
    ["status"],
)

# Vector Store Metrics
VECTORSTORE_OPERATION_DURATION = Histogram(
    "vectorstore_operation_duration_seconds",
    "Vector store operation duration",
    ["operation", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect HTTP request metrics."""

    def __init__(self, app: ASGIApp) -> None:
        """Initialize the middleware."""
        super().__init__(app)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Process request and collect metrics."""
        # Skip metrics endpoint to avoid recursion
        if request.url.path == "/metrics":
            return await call_next(request)

        start_time = time.perf_counter()

        response = await call_next(request)

        duration = time.perf_counter() - start_time
        endpoint = self._normalize_endpoint(request.url.path)

        HTTP_REQUEST_DURATION.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).observe(duration)

        HTTP_REQUEST_TOTAL.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()

        return response

    def _normalize_endpoint(self, path: str) -> str:
        """Normalize endpoint path to reduce cardinality."""
        if path.startswith("/health"):
            return "/health"
        if path.startswith("/api/"):
            parts = path.split("/")
            return f"/api/{parts[2]}" if len(parts) > 2 else path
        if path == "/":
            return path
        return "other"


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST


def track_search_request(
    duration: float,
    results: int,
    success: bool = True,
) -> None:
    """Track a flower search.

    Args:
        duration: Time spent in the vector store and normalizer, in seconds.
        results: Number of flowers returned.
        success: Whether the search call succeeded.
    """
    if not success:
        status = "error"
    elif results == 0:
        status = "empty"
    else:
        status = "success"

    FLOWER_SEARCH_DURATION.labels(status=status).observe(duration)
    FLOWER_SEARCH_TOTAL.labels(status=status).inc()
    if success:
        FLOWER_SEARCH_RESULTS.observe(results)


def track_dropped_hit(reason: str) -> None:
    """Count a search hit dropped by the normalizer."""
    FLOWER_HITS_DROPPED.labels(reason=reason).inc()


def track_upsert(success: bool = True) -> None:
    """Count a flower write."""
    FLOWER_UPSERT_TOTAL.labels(status="success" if success else "error").inc()


def track_vectorstore_operation(
    operation: str,
    duration: float,
    success: bool = True,
) -> None:
    """Track a vector store call.

    Args:
        operation: Operation name (upsert, search, ...).
        duration: Call duration in seconds.
        success: Whether the call succeeded.
    """
    status = "success" if success else "error"
    VECTORSTORE_OPERATION_DURATION.labels(operation=operation, status=status).observe(duration)

"""Observability module for metrics and monitoring."""

from flora_search.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    track_dropped_hit,
    track_search_request,
    track_upsert,
    track_vectorstore_operation,
)

__all__ = [
    "MetricsMiddleware",
    "get_metrics",
    "track_dropped_hit",
    "track_search_request",
    "track_upsert",
    "track_vectorstore_operation",
]

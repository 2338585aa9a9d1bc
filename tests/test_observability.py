"""Tests for observability module."""

import pytest
from httpx import AsyncClient
from prometheus_client import REGISTRY

from flora_search.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    track_dropped_hit,
    track_search_request,
    track_upsert,
    track_vectorstore_operation,
)


def _sample(name: str, labels: dict[str, str] | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestMetricsEndpoint:
    """Tests for /metrics endpoint."""

    async def test_metrics_endpoint_returns_prometheus_format(self, client: AsyncClient) -> None:
        """Metrics endpoint returns Prometheus format."""
        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert b"# HELP" in response.content


class TestMetricsFunctions:
    """Tests for metrics tracking functions."""

    def test_get_metrics_returns_bytes(self) -> None:
        """get_metrics returns bytes."""
        assert isinstance(get_metrics(), bytes)

    @pytest.mark.parametrize(
        ("results", "success", "status"),
        [(3, True, "success"), (0, True, "empty"), (0, False, "error")],
    )
    def test_track_search_request(self, results: int, success: bool, status: str) -> None:
        """Searches are counted by outcome."""
        before = _sample("flower_searches_total", {"status": status})

        track_search_request(duration=0.2, results=results, success=success)

        assert _sample("flower_searches_total", {"status": status}) == before + 1

    def test_track_search_results_histogram(self) -> None:
        """Successful searches record their result counts."""
        before = _sample("flower_search_results_count")

        track_search_request(duration=0.1, results=4)

        assert _sample("flower_search_results_count") == before + 1

    def test_track_dropped_hit(self) -> None:
        """Dropped hits are counted by reason."""
        before = _sample("flower_hits_dropped_total", {"reason": "invalid_record"})

        track_dropped_hit("invalid_record")

        assert _sample("flower_hits_dropped_total", {"reason": "invalid_record"}) == before + 1

    def test_track_upsert(self) -> None:
        """Writes are counted by outcome."""
        before = _sample("flower_upserts_total", {"status": "error"})

        track_upsert(success=False)

        assert _sample("flower_upserts_total", {"status": "error"}) == before + 1

    def test_track_vectorstore_operation(self) -> None:
        """Vector store calls are timed by operation."""
        labels = {"operation": "search", "status": "success"}
        before = _sample("vectorstore_operation_duration_seconds_count", labels)

        track_vectorstore_operation("search", 0.05)

        assert _sample("vectorstore_operation_duration_seconds_count", labels) == before + 1


class TestMetricsMiddleware:
    """Tests for MetricsMiddleware."""

    async def test_middleware_records_request_metrics(self, client: AsyncClient) -> None:
        """Middleware records HTTP request metrics."""
        labels = {"method": "GET", "endpoint": "/health", "status_code": "200"}
        before = _sample("http_requests_total", labels)

        await client.get("/health")
        await client.get("/health/live")

        assert _sample("http_requests_total", labels) == before + 2

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/health", "/health"),
            ("/health/ready", "/health"),
            ("/api/recommendations", "/api/recommendations"),
            ("/api/flowers", "/api/flowers"),
            ("/", "/"),
            ("/favicon.ico", "other"),
        ],
    )
    def test_normalize_endpoint(self, path: str, expected: str) -> None:
        """Paths are grouped to keep label cardinality low."""
        middleware = MetricsMiddleware.__new__(MetricsMiddleware)
        assert middleware._normalize_endpoint(path) == expected

"""FastAPI application entry point.

Configures the application with logging, exception handling, metrics and
health checks.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from flora_search import __version__
from flora_search.api import routes, ui
from flora_search.api.dependencies import VectorStoreDep, close_vector_store
from flora_search.config import get_settings
from flora_search.exceptions import ErrorCode, FloraSearchError
from flora_search.logging_config import get_logger, setup_logging
from flora_search.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    get_metrics_content_type,
)

logger = get_logger(__name__)

STATUS_CODES = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.NO_MATCHES_FOUND: 404,
    ErrorCode.COLLECTION_NOT_FOUND: 404,
    ErrorCode.COLLECTION_EXISTS: 409,
}


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    settings = get_settings()
    setup_logging(level=settings.log_level)
    logger.info(
        "Starting Flora Search",
        extra={
            "version": __version__,
            "environment": settings.environment.value,
            "collection": settings.qdrant.collection_name,
        },
    )

    yield

    # Shutdown
    await close_vector_store()
    logger.info("Shutting down Flora Search")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.

    Raises:
        ConfigurationError: If required settings are missing.
    """
    settings = get_settings()

    app = FastAPI(
        title="Flora Search",
        description="Filter and semantically search a catalog of flowers",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(MetricsMiddleware)
    app.add_exception_handler(FloraSearchError, flora_exception_handler)

    app.include_router(routes.router)
    app.include_router(ui.router)
    app.add_api_route("/health", health_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/ready", readiness_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/live", liveness_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/metrics", metrics, methods=["GET"], include_in_schema=False)

    return app


async def flora_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle FloraSearchError exceptions.

    Logs the structured error and returns only its message to the caller.
    """
    if not isinstance(exc, FloraSearchError):
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    status_code = get_status_code(exc.code)
    log = logger.error if status_code >= 500 else logger.info
    log(
        f"Request failed: {exc.message}",
        extra={
            "error_code": exc.code.value,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    return JSONResponse(
        status_code=status_code,
        content=exc.to_response(),
    )


def get_status_code(code: ErrorCode) -> int:
    """Map error code to HTTP status code. Unlisted codes are server errors."""
    return STATUS_CODES.get(code, 500)


async def health_check() -> dict[str, Any]:
    """Basic health check endpoint.

    Returns:
        Health status with version and timestamp.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def readiness_check(vector_store: VectorStoreDep) -> JSONResponse:
    """Readiness probe.

    Ready once the configured collection is reachable.
    """
    checks: dict[str, str] = {"config": "ok"}

    collection = get_settings().qdrant.collection_name
    try:
        exists = await vector_store.collection_exists(collection)
        checks["vector_store"] = "ok" if exists else "collection_missing"
    except FloraSearchError as e:
        logger.warning(f"Readiness check failed: {e.message}")
        checks["vector_store"] = "unavailable"

    all_ok = all(v == "ok" for v in checks.values())

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "checks": checks,
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )


async def liveness_check() -> dict[str, str]:
    """Liveness probe.

    Returns:
        Liveness status.
    """
    return {"status": "alive"}


async def metrics() -> Response:
    """Prometheus scrape endpoint."""
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


# Create the application instance
app = create_app()

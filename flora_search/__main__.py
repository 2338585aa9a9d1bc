"""Run the API server: ``python -m flora_search``."""

import uvicorn

from flora_search.config import get_settings


def main() -> None:
    """Start uvicorn with the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "flora_search.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()

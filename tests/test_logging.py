"""Tests for logging configuration."""

import json
import logging
import sys
from unittest.mock import patch

from flora_search.config import Environment, Settings
from flora_search.logging_config import (
    DevFormatter,
    JSONFormatter,
    get_logger,
    setup_logging,
)


def _record(msg: str = "Searching flowers", **kwargs: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="flora_search.flowers.service",
        level=logging.INFO,
        pathname="/app/flora_search/flowers/service.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=kwargs.pop("exc_info", None),  # type: ignore[arg-type]
    )
    for key, value in kwargs.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSON log formatter."""

    def test_format_basic_message(self) -> None:
        """Basic log message is formatted as JSON."""
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "flora_search.flowers.service"
        assert data["message"] == "Searching flowers"
        assert data["file"] == "/app/flora_search/flowers/service.py:42"
        assert "timestamp" in data

    def test_extra_fields_are_collected(self) -> None:
        """Fields passed through extra= land in the extra object."""
        record = _record(filters={"climate": "Desert"}, limit=10)

        data = json.loads(JSONFormatter().format(record))

        assert data["extra"] == {"filters": {"climate": "Desert"}, "limit": 10}

    def test_no_extra_key_without_extras(self) -> None:
        """Standard record attributes are not reported as extras."""
        data = json.loads(JSONFormatter().format(_record()))
        assert "extra" not in data

    def test_format_with_exception(self) -> None:
        """Exception info is included in output."""
        try:
            raise ValueError("upstream down")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(_record("Error", exc_info=exc_info)))

        assert "ValueError" in data["exception"]


class TestDevFormatter:
    """Tests for development formatter."""

    def test_format_includes_level(self) -> None:
        """Development format includes level, logger and message."""
        output = DevFormatter().format(_record("Stored flower f1"))

        assert "INFO" in output
        assert "flora_search.flowers.service" in output
        assert "Stored flower f1" in output


class TestSetupLogging:
    """Tests for logging setup."""

    def test_returns_root_logger(self) -> None:
        """setup_logging returns root logger."""
        logger = setup_logging(level="INFO", json_output=False)
        assert logger is logging.getLogger()

    def test_uses_json_in_production(self) -> None:
        """JSON output is used in production environment."""
        mock_settings = Settings(environment=Environment.PRODUCTION)

        with patch("flora_search.logging_config.get_settings", return_value=mock_settings):
            setup_logging()

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_uses_dev_formatter_in_development(self) -> None:
        """Dev formatter is used in development environment."""
        mock_settings = Settings(environment=Environment.DEVELOPMENT)

        with patch("flora_search.logging_config.get_settings", return_value=mock_settings):
            setup_logging()

        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, DevFormatter)

    def test_explicit_arguments_skip_settings(self) -> None:
        """Level and format given explicitly do not read settings."""
        with patch("flora_search.logging_config.get_settings") as mock_get:
            setup_logging(level="DEBUG", json_output=True)

        mock_get.assert_not_called()
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_noisy_loggers_quieted(self) -> None:
        """HTTP client loggers are raised to WARNING."""
        setup_logging(level="DEBUG", json_output=False)
        assert logging.getLogger("httpx").level == logging.WARNING


class TestGetLogger:
    """Tests for named logger retrieval."""

    def test_returns_named_logger(self) -> None:
        """get_logger returns a logger with the given name."""
        assert get_logger("flora_search.api").name == "flora_search.api"

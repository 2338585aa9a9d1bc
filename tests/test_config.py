"""Tests for application configuration."""

import os
import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from flora_search.config import (
    Environment,
    QdrantSettings,
    Settings,
    get_settings,
)
from flora_search.exceptions import ConfigurationError


class TestQdrantSettings:
    """Tests for Qdrant configuration."""

    def test_default_values(self) -> None:
        """Optional values have sensible defaults."""
        settings = QdrantSettings(api_key="key", collection_name="flowers-idx")
        assert settings.url == "http://localhost:6333"
        assert settings.namespace == "flowers"
        assert settings.embedding_model == "sentence-transformers/all-minilm-l6-v2"
        assert settings.cloud_inference is True
        assert settings.max_retries == 5

    def test_api_key_is_secret(self) -> None:
        """API key should be masked when printed."""
        settings = QdrantSettings(api_key="secret-key", collection_name="idx")
        assert "secret-key" not in str(settings.api_key)
        assert settings.api_key.get_secret_value() == "secret-key"

    def test_env_override(self) -> None:
        """Environment variables override defaults."""
        with patch.dict(
            os.environ,
            {"QDRANT_NAMESPACE": "garden", "QDRANT_MAX_RETRIES": "2"},
        ):
            settings = QdrantSettings()
            assert settings.namespace == "garden"
            assert settings.max_retries == 2

    def test_api_key_required(self) -> None:
        """Missing API key is rejected."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError):
                QdrantSettings(_env_file=None, collection_name="idx")

    def test_collection_name_required(self) -> None:
        """Missing collection name is rejected."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError):
                QdrantSettings(_env_file=None, api_key="key")


    def test_local_inference_extra_declared(self) -> None:
        """Local embedding has an installable extra that brings fastembed."""
        pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
        extras = tomllib.loads(pyproject.read_text())["project"]["optional-dependencies"]

        assert any("fastembed" in req for req in extras["local-inference"])


class TestSettings:
    """Tests for main application settings."""

    def test_default_environment(self) -> None:
        """Default environment is development."""
        settings = Settings(_env_file=None)
        assert settings.environment == Environment.DEVELOPMENT

    def test_default_api_settings(self) -> None:
        """Default API host and port."""
        settings = Settings(_env_file=None)
        assert settings.api_host == "0.0.0.0"
        assert settings.api_port == 8000

    def test_nested_settings_loaded(self) -> None:
        """Nested settings are initialized from the environment."""
        settings = Settings(_env_file=None)
        assert isinstance(settings.qdrant, QdrantSettings)
        assert settings.qdrant.collection_name == os.environ["QDRANT_COLLECTION_NAME"]

    def test_environment_enum(self) -> None:
        """Environment can be set via string."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            settings = Settings(_env_file=None)
            assert settings.environment == Environment.PRODUCTION


class TestGetSettings:
    """Tests for settings singleton."""

    def test_returns_settings_instance(self) -> None:
        """get_settings returns a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_caching(self) -> None:
        """Settings are cached."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2

    def test_missing_required_settings(self) -> None:
        """Missing service credentials are a configuration error."""
        get_settings.cache_clear()
        try:
            with patch.dict(os.environ, {}, clear=True):
                with pytest.raises(ConfigurationError) as exc_info:
                    get_settings()
            assert "api_key" in str(exc_info.value.details["fields"])
        finally:
            get_settings.cache_clear()

"""Application configuration using Pydantic Settings.

All configuration is loaded from environment variables (or a local .env file).
The vector service API key and collection name have no defaults: a process
without them refuses to start.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from flora_search.exceptions import ConfigurationError


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class QdrantSettings(BaseSettings):
    """Hosted Qdrant configuration.

    The collection plays the role of the search index; records are partitioned
    inside it by a tenant payload key (the namespace).
    """

    model_config = SettingsConfigDict(
        env_prefix="QDRANT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(
        default="http://localhost:6333",
        description="Qdrant server URL",
    )
    api_key: SecretStr = Field(description="Qdrant API key")
    collection_name: str = Field(
        min_length=1,
        description="Collection holding the flower records",
    )
    namespace: str = Field(
        default="flowers",
        min_length=1,
        description="Tenant partition inside the collection",
    )
    embedding_model: str = Field(
        default="sentence-transformers/all-minilm-l6-v2",
        description="Server-side embedding model",
    )
    cloud_inference: bool = Field(
        default=True,
        description=(
            "Compute embeddings on the Qdrant side; false embeds locally and "
            "needs the local-inference extra (fastembed)"
        ),
    )
    max_retries: int = Field(
        default=5,
        ge=0,
        description="Connection retries for transient failures",
    )
    timeout: int = Field(
        default=30,
        gt=0,
        description="Request timeout in seconds",
    )


class Settings(BaseSettings):
    """Main application settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # API settings
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host",
    )
    api_port: int = Field(
        default=8000,
        description="API server port",
    )

    # Nested settings
    qdrant: QdrantSettings = Field(default_factory=QdrantSettings)  # type: ignore[arg-type]


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment.

    Raises:
        ConfigurationError: If a required setting is missing or invalid.
    """
    try:
        return Settings()
    except PydanticValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            "Invalid or missing configuration",
            details={"fields": missing},
        ) from e

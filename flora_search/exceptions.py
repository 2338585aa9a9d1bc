"""Application exception hierarchy.

All custom exceptions inherit from FloraSearchError.
Each exception has an error code for structured error handling; the code and
details go to the logs, only the message reaches API callers.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "FLR-1000"
    CONFIGURATION_ERROR = "FLR-1001"
    VALIDATION_ERROR = "FLR-1002"

    # Lookup errors (2xxx)
    NO_MATCHES_FOUND = "FLR-2000"

    # Upstream service errors (3xxx)
    UPSTREAM_SERVICE_ERROR = "FLR-3000"

    # Vector store errors (4xxx)
    VECTOR_STORE_ERROR = "FLR-4000"
    COLLECTION_NOT_FOUND = "FLR-4001"
    COLLECTION_EXISTS = "FLR-4002"

    # Record normalization errors (5xxx)
    NORMALIZATION_ERROR = "FLR-5000"


class FloraSearchError(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message.
        code: Structured error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logs."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }

    def to_response(self) -> dict[str, str]:
        """Public response body. Never includes internal details."""
        return {"error": self.message}


class ConfigurationError(FloraSearchError):
    """Configuration or environment error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ClientInputError(FloraSearchError):
    """Request is missing something the caller must supply."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)


class NotFoundError(FloraSearchError):
    """Operation succeeded but matched nothing."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.NO_MATCHES_FOUND, details)


class UpstreamServiceError(FloraSearchError):
    """A call to the external search service failed."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UPSTREAM_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class VectorStoreError(UpstreamServiceError):
    """Vector store operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VECTOR_STORE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class NormalizationError(FloraSearchError):
    """A single search hit could not be turned into a flower record."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.NORMALIZATION_ERROR, details)

"""Vector store data models."""

from typing import Any

from pydantic import BaseModel, Field


class StoredRecord(BaseModel):
    """A record to write to the vector service.

    The service computes the vector itself from ``text``.

    Attributes:
        id: Caller-assigned record identifier.
        text: Embedding input.
        payload: Scalar fields stored alongside the vector.
    """

    id: str = Field(min_length=1, description="Record identifier")
    text: str = Field(description="Embedding input text")
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Stored scalar fields",
    )


class SearchHit(BaseModel):
    """One ranked result from a search.

    Attributes:
        id: Record identifier.
        score: Similarity score (higher is more similar).
        fields: Projected payload, or None when the service returned none.
    """

    id: str = Field(description="Record identifier")
    score: float = Field(default=0.0, description="Similarity score")
    fields: dict[str, Any] | None = Field(
        default=None,
        description="Projected payload fields",
    )

"""Search query construction.

Turns sparse user criteria into the request sent to the vector service:
exact-match filters AND-combined, plus the text the service embeds.
"""

from pydantic import BaseModel, Field

from flora_search.flowers.models import SearchRequest

FALLBACK_QUERY_TEXT = "flowers and plants"

# Payload fields returned with every hit. Internal keys are never projected.
RETURN_FIELDS: tuple[str, ...] = (
    "name",
    "scientificName",
    "climate",
    "sunExposure",
    "wateringNeeds",
    "soilType",
    "bloomingSeason",
    "hardiness",
    "description",
    "imageUrl",
)


class SearchQuery(BaseModel):
    """Structured request for the vector service.

    Attributes:
        text: Text the service embeds for similarity ranking.
        filters: Equality predicates (field -> value), all of which must hold.
            None means an unfiltered semantic search.
        limit: Number of top hits to return.
        fields: Payload fields to project onto each hit.
    """

    text: str = Field(min_length=1, description="Semantic query text")
    filters: dict[str, str] | None = Field(
        default=None,
        description="AND-combined equality predicates",
    )
    limit: int = Field(ge=1, description="Top-K hits")
    fields: list[str] = Field(
        default_factory=lambda: list(RETURN_FIELDS),
        description="Projected payload fields",
    )


def has_search_criteria(request: SearchRequest) -> bool:
    """Whether the request carries at least one filter or a search query."""
    return bool(request.active_filters()) or request.search_query is not None


def build_search_query(request: SearchRequest) -> SearchQuery:
    """Build the vector service query for a search request.

    Unknown filter values are passed through untouched; if they match nothing
    the search simply returns no hits.

    Args:
        request: User search criteria.

    Returns:
        SearchQuery ready for the vector store.
    """
    filters = request.active_filters()
    return SearchQuery(
        text=request.search_query or FALLBACK_QUERY_TEXT,
        filters=filters or None,
        limit=request.limit,
    )

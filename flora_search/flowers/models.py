"""Flower catalog data models.

JSON and storage use camelCase field names (``scientificName``,
``sunExposure``, ...); Python code uses the snake_case attributes.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 100

# Categorical attributes a search may filter on, in the order predicates are built.
FILTER_FIELDS: tuple[str, ...] = (
    "climate",
    "sun_exposure",
    "watering_needs",
    "soil_type",
    "blooming_season",
    "hardiness",
)

# Choices offered by the search form. The model itself accepts any string.
FILTER_OPTIONS: dict[str, list[tuple[str, str]]] = {
    "climate": [
        ("Mediterranean", "Mediterranean"),
        ("Tropical", "Tropical"),
        ("Desert", "Desert"),
        ("Continental", "Continental"),
        ("Temperate", "Temperate"),
    ],
    "sun_exposure": [
        ("Full Sun", "Full Sun"),
        ("Partial Sun", "Partial Sun"),
        ("Shade", "Shade"),
    ],
    "watering_needs": [
        ("High", "High - Regular watering"),
        ("Moderate", "Moderate - Weekly watering"),
        ("Low", "Low - Drought tolerant"),
    ],
    "soil_type": [
        ("Well-draining", "Well-draining"),
        ("Clay", "Clay"),
        ("Sandy", "Sandy"),
        ("Loamy", "Loamy"),
    ],
    "blooming_season": [
        ("Spring", "Spring"),
        ("Summer", "Summer"),
        ("Fall", "Fall"),
        ("Winter", "Winter"),
    ],
    "hardiness": [
        ("1-4", "Very Cold (Zones 1-4)"),
        ("5-7", "Cold (Zones 5-7)"),
        ("8-10", "Warm (Zones 8-10)"),
        ("11-13", "Hot (Zones 11-13)"),
    ],
}


def storage_key(attribute: str) -> str:
    """Name of the stored payload field for a model attribute."""
    return to_camel(attribute)


class FlowerRecord(BaseModel):
    """A flower in the catalog.

    Attributes:
        id: Caller-assigned unique identifier.
        name: Common name.
        scientific_name: Botanical name.
        climate: Climate categories, in display order.
        sun_exposure: Sun exposure category.
        watering_needs: Watering category.
        soil_type: Soil category.
        blooming_season: Seasons in bloom, in display order.
        hardiness: Hardiness zone range (e.g. ``"5-7"``).
        description: Free-text description.
        image_url: Optional picture URL; never validated on write.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(min_length=1, description="Unique record identifier")
    name: str = Field(min_length=1, description="Common name")
    scientific_name: str = Field(min_length=1, description="Botanical name")
    climate: list[str] = Field(min_length=1, description="Climate categories")
    sun_exposure: str = Field(description="Sun exposure category")
    watering_needs: str = Field(description="Watering category")
    soil_type: str = Field(description="Soil category")
    blooming_season: list[str] = Field(min_length=1, description="Blooming seasons")
    hardiness: str = Field(description="Hardiness zone range")
    description: str = Field(description="Free-text description")
    image_url: str | None = Field(default=None, description="Optional image URL")


class SearchRequest(BaseModel):
    """Sparse search criteria.

    Every filter is optional; blank strings count as absent.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    climate: str | None = Field(default=None, description="Climate category")
    sun_exposure: str | None = Field(default=None, description="Sun exposure category")
    watering_needs: str | None = Field(default=None, description="Watering category")
    soil_type: str | None = Field(default=None, description="Soil category")
    blooming_season: str | None = Field(default=None, description="Blooming season")
    hardiness: str | None = Field(default=None, description="Hardiness zone range")
    search_query: str | None = Field(default=None, description="Free-text query")
    limit: int = Field(
        default=DEFAULT_SEARCH_LIMIT,
        ge=1,
        le=MAX_SEARCH_LIMIT,
        description="Maximum results to return",
    )

    @field_validator(*FILTER_FIELDS, "search_query", mode="before")
    @classmethod
    def _blank_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("limit", mode="before")
    @classmethod
    def _default_limit(cls, value: Any) -> Any:
        return DEFAULT_SEARCH_LIMIT if value is None else value

    def active_filters(self) -> dict[str, str]:
        """Present filters keyed by stored field name, in FILTER_FIELDS order."""
        filters: dict[str, str] = {}
        for attribute in FILTER_FIELDS:
            value = getattr(self, attribute)
            if value is not None:
                filters[storage_key(attribute)] = value
        return filters

"""Storage formatting for flower records.

The vector service only stores scalar payload fields and embeds a single text
per record. That text is the only signal semantic search ranks on, so its
wording and field order must stay stable across writes.
"""

from flora_search.flowers.models import FlowerRecord
from flora_search.flowers.normalizer import LIST_SEPARATOR
from flora_search.vectorstore.models import StoredRecord

DISPLAY_SEPARATOR = ", "


def build_embedding_text(flower: FlowerRecord) -> str:
    """Natural-language summary of a flower, used as the embedding input."""
    climates = DISPLAY_SEPARATOR.join(flower.climate)
    seasons = DISPLAY_SEPARATOR.join(flower.blooming_season)
    return (
        f"{flower.name} ({flower.scientific_name}) is a {flower.description}. "
        f"It grows best in {climates} climates with {flower.sun_exposure} sun exposure. "
        f"It needs {flower.watering_needs} watering and {flower.soil_type} soil. "
        f"It blooms in {seasons} and is hardy to {flower.hardiness}."
    )


def format_for_upsert(flower: FlowerRecord) -> StoredRecord:
    """Build the vector service write payload for a flower.

    Args:
        flower: Record to store.

    Returns:
        StoredRecord keyed by the flower id.
    """
    return StoredRecord(
        id=flower.id,
        text=build_embedding_text(flower),
        payload={
            "name": flower.name,
            "scientificName": flower.scientific_name,
            "climate": LIST_SEPARATOR.join(flower.climate),
            "sunExposure": flower.sun_exposure,
            "wateringNeeds": flower.watering_needs,
            "soilType": flower.soil_type,
            "bloomingSeason": LIST_SEPARATOR.join(flower.blooming_season),
            "hardiness": flower.hardiness,
            "description": flower.description,
            "imageUrl": flower.image_url or "",
        },
    )

"""Search hit normalization.

Stored records keep multi-valued attributes as comma-joined strings and may
predate the current schema. Each hit is converted on its own: a hit that
cannot become a valid FlowerRecord is dropped, logged and counted, and the
rest of the response goes through unchanged and in the service's order.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from flora_search.exceptions import NormalizationError
from flora_search.flowers.models import FlowerRecord
from flora_search.logging_config import get_logger
from flora_search.observability.metrics import track_dropped_hit
from flora_search.vectorstore.models import SearchHit

logger = get_logger(__name__)

LIST_SEPARATOR = ","

_SCALAR_FIELDS = (
    "name",
    "scientificName",
    "sunExposure",
    "wateringNeeds",
    "soilType",
    "hardiness",
    "description",
)


def split_multi_value(value: Any) -> list[str] | None:
    """Turn a stored multi-value field back into a list.

    Comma-joined strings are split in order; lists pass through; any other
    scalar becomes a one-element list. Missing values stay None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return [part for part in value.split(LIST_SEPARATOR) if part]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def normalize_hit(hit: SearchHit) -> FlowerRecord:
    """Convert one search hit into a flower record.

    Args:
        hit: Raw hit from the vector store.

    Returns:
        Validated FlowerRecord.

    Raises:
        NormalizationError: If the hit has no fields or a required field is
            missing or malformed.
    """
    if hit.fields is None:
        raise NormalizationError(
            "Hit has no fields",
            details={"id": hit.id, "reason": "missing_fields"},
        )

    fields = hit.fields
    data: dict[str, Any] = {key: fields.get(key) for key in _SCALAR_FIELDS}
    data["id"] = hit.id
    data["climate"] = split_multi_value(fields.get("climate"))
    data["bloomingSeason"] = split_multi_value(fields.get("bloomingSeason"))
    data["imageUrl"] = fields.get("imageUrl") or None

    try:
        return FlowerRecord.model_validate(data)
    except PydanticValidationError as e:
        raise NormalizationError(
            "Hit does not form a valid flower record",
            details={
                "id": hit.id,
                "reason": "invalid_record",
                "fields": [".".join(str(p) for p in err["loc"]) for err in e.errors()],
            },
        ) from e


def normalize_hits(hits: Iterable[SearchHit]) -> list[FlowerRecord]:
    """Normalize hits, keeping order and dropping the ones that fail.

    Args:
        hits: Hits ordered best match first.

    Returns:
        Records for the hits that normalized, in the same order.
    """
    flowers: list[FlowerRecord] = []
    for hit in hits:
        try:
            flowers.append(normalize_hit(hit))
        except NormalizationError as e:
            reason = e.details.get("reason", "invalid_record")
            track_dropped_hit(reason)
            logger.warning(
                f"Dropped search hit {hit.id}: {e.message}",
                extra={"error_code": e.code.value, "details": e.details},
            )
    return flowers

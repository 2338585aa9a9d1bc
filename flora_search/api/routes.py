"""API routes for adding and searching flowers."""

from uuid import uuid4

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from flora_search.api.dependencies import CatalogDep
from flora_search.exceptions import ClientInputError, NotFoundError, UpstreamServiceError
from flora_search.flowers.models import FlowerRecord, SearchRequest
from flora_search.logging_config import get_logger

logger = get_logger(__name__)

MISSING_FLOWER_DATA_MESSAGE = "Missing required flower data"
ADD_FAILED_MESSAGE = "Failed to add flower"
NO_MATCHES_MESSAGE = "No matching flowers found"
SEARCH_FAILED_MESSAGE = "Failed to get recommendations"

REQUIRED_FLOWER_FIELDS = ("name", "scientific_name", "climate", "hardiness")


router = APIRouter(prefix="/api", tags=["Flowers"])


class NewFlowerRequest(BaseModel):
    """Request body for adding a flower.

    Every field is optional at parse time so that missing data is reported as
    a client error rather than a schema error.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None = Field(default=None, description="Identifier; generated when absent")
    name: str | None = None
    scientific_name: str | None = None
    climate: list[str] | None = None
    sun_exposure: str | None = None
    watering_needs: str | None = None
    soil_type: str | None = None
    blooming_season: list[str] | None = None
    hardiness: str | None = None
    description: str | None = None
    image_url: str | None = None


class CreateFlowerResponse(BaseModel):
    """Response from adding a flower."""

    success: bool = Field(description="Whether the flower was stored")


def new_flower_request_to_record(request: NewFlowerRequest) -> FlowerRecord:
    """Convert an API NewFlowerRequest to a FlowerRecord.

    Raises:
        ClientInputError: If required data is missing or invalid.
    """
    missing = [field for field in REQUIRED_FLOWER_FIELDS if not getattr(request, field)]
    if missing:
        raise ClientInputError(MISSING_FLOWER_DATA_MESSAGE, details={"missing": missing})

    data = request.model_dump(exclude_none=True)
    if not data.get("id"):
        data["id"] = uuid4().hex

    try:
        return FlowerRecord.model_validate(data)
    except PydanticValidationError as e:
        raise ClientInputError(
            MISSING_FLOWER_DATA_MESSAGE,
            details={"invalid": [".".join(str(p) for p in err["loc"]) for err in e.errors()]},
        ) from e


@router.post("/flowers", response_model=CreateFlowerResponse)
async def create_flower(
    request: NewFlowerRequest,
    catalog: CatalogDep,
) -> CreateFlowerResponse:
    """Add a flower to the catalog, replacing any flower with the same id."""
    flower = new_flower_request_to_record(request)

    try:
        await catalog.add_flower(flower)
    except Exception as e:
        logger.exception(f"Error adding flower {flower.id}")
        raise UpstreamServiceError(
            ADD_FAILED_MESSAGE,
            details={"id": flower.id, "error": str(e)},
        ) from e

    return CreateFlowerResponse(success=True)


@router.post(
    "/recommendations",
    response_model=list[FlowerRecord],
    response_model_exclude_none=True,
)
async def recommend_flowers(
    request: SearchRequest,
    catalog: CatalogDep,
) -> list[FlowerRecord]:
    """Search flowers by filters and free text."""
    try:
        flowers = await catalog.search_flowers(request)
    except ClientInputError:
        raise
    except Exception as e:
        logger.exception("Error getting recommendations")
        raise UpstreamServiceError(
            SEARCH_FAILED_MESSAGE,
            details={"error": str(e)},
        ) from e

    if not flowers:
        raise NotFoundError(
            NO_MATCHES_MESSAGE,
            details={"filters": request.active_filters()},
        )

    return flowers

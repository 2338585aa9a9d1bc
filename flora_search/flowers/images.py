"""Advisory image URL checks.

Image URLs are optional and never validated when a flower is written. These
helpers back the offline verification script only.
"""

import httpx
from pydantic import BaseModel, Field

from flora_search.flowers.models import FlowerRecord
from flora_search.logging_config import get_logger

logger = get_logger(__name__)

MISSING_URL = "Missing URL"


class ImageProblem(BaseModel):
    """A flower whose picture is missing or unreachable."""

    id: str = Field(description="Flower identifier")
    name: str = Field(description="Flower name")
    url: str = Field(description="Offending URL, or a marker when absent")


async def check_image_url(client: httpx.AsyncClient, url: str) -> bool:
    """Whether ``url`` answers a HEAD request with 200 and an image type."""
    try:
        response = await client.head(url, follow_redirects=True)
    except httpx.HTTPError as e:
        logger.debug(f"Image check failed for {url}: {e}")
        return False

    content_type = response.headers.get("content-type", "")
    return response.status_code == 200 and content_type.startswith("image/")


async def find_image_problems(
    client: httpx.AsyncClient,
    flowers: list[FlowerRecord],
) -> list[ImageProblem]:
    """Check every flower's image URL, one at a time.

    Args:
        client: HTTP client used for the HEAD requests.
        flowers: Flowers to check.

    Returns:
        Problems in the order the flowers were given.
    """
    problems: list[ImageProblem] = []
    for flower in flowers:
        if not flower.image_url:
            problems.append(ImageProblem(id=flower.id, name=flower.name, url=MISSING_URL))
            continue

        if await check_image_url(client, flower.image_url):
            logger.info(f"Valid image for {flower.name}")
        else:
            logger.warning(f"Invalid image for {flower.name}", extra={"url": flower.image_url})
            problems.append(ImageProblem(id=flower.id, name=flower.name, url=flower.image_url))
    return problems

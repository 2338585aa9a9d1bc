#!/usr/bin/env python
"""Check that every stored flower has a reachable image.

Usage:
    python -m scripts.verify_images

Advisory only: problems are reported, nothing is changed. Exits 1 when any
image is missing or invalid.
"""

import argparse
import asyncio
import sys

import httpx

from flora_search.config import get_settings
from flora_search.exceptions import FloraSearchError
from flora_search.flowers.images import find_image_problems
from flora_search.flowers.service import FlowerCatalog
from flora_search.logging_config import get_logger, setup_logging
from flora_search.vectorstore.service import QdrantVectorStore

logger = get_logger(__name__)


async def verify_images(limit: int, timeout: float) -> bool:
    """Check image URLs of up to ``limit`` flowers.

    Returns:
        True if every image is valid.
    """
    settings = get_settings().qdrant
    store = QdrantVectorStore(settings=settings)
    catalog = FlowerCatalog(store, settings.collection_name, settings.namespace)

    try:
        flowers = await catalog.list_flowers(limit=limit)
    except FloraSearchError as e:
        logger.error(f"Error fetching flowers: {e.message}", extra={"details": e.details})
        return False
    finally:
        await store.close()

    if not flowers:
        print("No records found")
        return True

    async with httpx.AsyncClient(timeout=timeout) as client:
        problems = await find_image_problems(client, flowers)

    if not problems:
        print("\nAll images are valid!")
        return True

    print("\nProblematic images found:")
    for problem in problems:
        print(f"\n{problem.name} ({problem.id}):")
        print(f"Current URL: {problem.url}")
    return False


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Verify stored flower image URLs",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=100,
        help="Maximum number of flowers to check",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="Per-request timeout in seconds",
    )
    args = parser.parse_args()

    setup_logging(level="INFO", json_output=False)
    ok = asyncio.run(verify_images(limit=args.limit, timeout=args.timeout))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()

#!/usr/bin/env python
"""Print the flowers stored in the catalog.

Usage:
    python -m scripts.list_flowers --limit 100
"""

import argparse
import asyncio
import json
import sys

from flora_search.config import get_settings
from flora_search.exceptions import FloraSearchError
from flora_search.flowers.service import FlowerCatalog
from flora_search.logging_config import get_logger, setup_logging
from flora_search.vectorstore.service import QdrantVectorStore

logger = get_logger(__name__)


async def list_flowers(limit: int) -> bool:
    """Fetch and print up to ``limit`` flowers.

    Returns:
        True on success.
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

    print(f"Found {len(flowers)} flowers:")
    for position, flower in enumerate(flowers, start=1):
        print(f"\n{position}. ID: {flower.id}")
        fields = flower.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)
        print(f"Fields: {json.dumps(fields, indent=2, ensure_ascii=False)}")
    return True


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="List stored flowers",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=100,
        help="Maximum number of flowers to list",
    )
    args = parser.parse_args()

    setup_logging(level="INFO", json_output=False)
    ok = asyncio.run(list_flowers(limit=args.limit))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()

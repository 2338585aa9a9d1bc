#!/usr/bin/env python
"""Create the flower collection in Qdrant.

Usage:
    python -m scripts.create_collection

Creates the configured collection sized for the configured embedding model,
with a tenant index on the namespace and keyword indexes on every filter
field. Does nothing when the collection already exists.
"""

import argparse
import asyncio
import sys

from flora_search.config import get_settings
from flora_search.exceptions import FloraSearchError
from flora_search.flowers.models import FILTER_FIELDS, storage_key
from flora_search.logging_config import get_logger, setup_logging
from flora_search.vectorstore.service import MODEL_DIMENSIONS, QdrantVectorStore

logger = get_logger(__name__)


async def create_collection(dimensions: int | None = None) -> bool:
    """Create the collection unless it exists.

    Args:
        dimensions: Vector size override (default from the embedding model).

    Returns:
        True if the collection exists afterwards.
    """
    settings = get_settings().qdrant
    name = settings.collection_name
    store = QdrantVectorStore(settings=settings)

    try:
        if await store.collection_exists(name):
            logger.info(f'Collection "{name}" already exists.')
            return True

        size = dimensions or MODEL_DIMENSIONS.get(settings.embedding_model)
        if size is None:
            logger.error(
                f"Unknown vector size for model {settings.embedding_model}; pass --dimensions"
            )
            return False

        await store.create_collection(
            name,
            dimensions=size,
            indexed_fields=[storage_key(field) for field in FILTER_FIELDS],
        )
        logger.info(f'Created collection "{name}" for model {settings.embedding_model}')
        return True

    except FloraSearchError as e:
        logger.error(f"Error creating collection: {e.message}", extra={"details": e.details})
        return False
    finally:
        await store.close()


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Create the flower collection",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--dimensions",
        type=int,
        default=None,
        help="Vector size (defaults to the embedding model's size)",
    )
    args = parser.parse_args()

    setup_logging(level="INFO", json_output=False)
    ok = asyncio.run(create_collection(dimensions=args.dimensions))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()

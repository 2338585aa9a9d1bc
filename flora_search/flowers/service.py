"""Flower catalog service.

Connects the query builder, the vector store and the normalizer.
"""

import time

from flora_search.exceptions import ClientInputError
from flora_search.flowers.formatter import format_for_upsert
from flora_search.flowers.models import FlowerRecord, SearchRequest
from flora_search.flowers.normalizer import normalize_hits
from flora_search.flowers.query import RETURN_FIELDS, build_search_query, has_search_criteria
from flora_search.logging_config import get_logger
from flora_search.observability.metrics import track_search_request, track_upsert
from flora_search.vectorstore.service import VectorStore

logger = get_logger(__name__)

MISSING_CRITERIA_MESSAGE = "Please provide at least one search criteria"
LIST_QUERY_TEXT = "all flowers"


class FlowerCatalog:
    """Stores and searches flower records in one namespace of a collection."""

    def __init__(
        self,
        vector_store: VectorStore,
        collection: str,
        namespace: str = "flowers",
    ) -> None:
        """Initialize the catalog.

        Args:
            vector_store: Store backed by the hosted search service.
            collection: Collection holding the records.
            namespace: Partition the catalog reads and writes.
        """
        self._vector_store = vector_store
        self._collection = collection
        self._namespace = namespace

    async def add_flower(self, flower: FlowerRecord) -> None:
        """Create or replace a flower, keyed by its id.

        Raises:
            VectorStoreError: If the service rejects the write.
        """
        record = format_for_upsert(flower)
        try:
            await self._vector_store.upsert(
                collection=self._collection,
                records=[record],
                namespace=self._namespace,
            )
        except Exception:
            track_upsert(success=False)
            raise
        track_upsert()
        logger.info(f"Stored flower {flower.id}", extra={"flower_name": flower.name})

    async def search_flowers(self, request: SearchRequest) -> list[FlowerRecord]:
        """Semantic search narrowed by the request's filters.

        Args:
            request: Search criteria. At least one filter or a query is required.

        Returns:
            Matching flowers, best match first. Empty if nothing matched.

        Raises:
            ClientInputError: If the request has no criteria at all.
            VectorStoreError: If the search call fails.
        """
        if not has_search_criteria(request):
            raise ClientInputError(MISSING_CRITERIA_MESSAGE)

        query = build_search_query(request)
        logger.debug(
            "Searching flowers",
            extra={"query_text": query.text, "filters": query.filters, "limit": query.limit},
        )

        start = time.perf_counter()
        try:
            hits = await self._vector_store.search(
                collection=self._collection,
                text=query.text,
                namespace=self._namespace,
                limit=query.limit,
                filters=query.filters,
                fields=query.fields,
            )
        except Exception:
            track_search_request(time.perf_counter() - start, results=0, success=False)
            raise

        flowers = normalize_hits(hits)
        track_search_request(time.perf_counter() - start, results=len(flowers))
        logger.debug(
            f"Search returned {len(flowers)} of {len(hits)} hits",
            extra={"hits": len(hits), "results": len(flowers)},
        )
        return flowers

    async def list_flowers(self, limit: int = 100) -> list[FlowerRecord]:
        """Return up to ``limit`` stored flowers, unfiltered."""
        hits = await self._vector_store.search(
            collection=self._collection,
            text=LIST_QUERY_TEXT,
            namespace=self._namespace,
            limit=limit,
            fields=list(RETURN_FIELDS),
        )
        return normalize_hits(hits)

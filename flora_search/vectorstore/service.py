"""Vector store interface and Qdrant implementation.

Embeddings are computed by the service: records and queries are sent as
``Document`` objects naming the configured model. Records of one namespace
share a tenant payload key inside a single collection.
"""

import time
from abc import ABC, abstractmethod
from typing import Any
from uuid import NAMESPACE_URL, uuid5

import httpx
from qdrant_client import AsyncQdrantClient
from qdrant_client.models import (
    Distance,
    Document,
    FieldCondition,
    Filter,
    KeywordIndexParams,
    KeywordIndexType,
    MatchValue,
    PayloadSchemaType,
    PointStruct,
    VectorParams,
)

from flora_search.config import QdrantSettings, get_settings
from flora_search.exceptions import ErrorCode, VectorStoreError
from flora_search.logging_config import get_logger
from flora_search.observability.metrics import track_vectorstore_operation
from flora_search.vectorstore.models import SearchHit, StoredRecord

logger = get_logger(__name__)

NAMESPACE_KEY = "namespace"
RECORD_ID_KEY = "record_id"
_INTERNAL_KEYS = frozenset({NAMESPACE_KEY, RECORD_ID_KEY})

# Output sizes of the models Qdrant Cloud can run server-side.
MODEL_DIMENSIONS = {
    "sentence-transformers/all-minilm-l6-v2": 384,
    "BAAI/bge-small-en-v1.5": 384,
    "BAAI/bge-base-en-v1.5": 768,
    "intfloat/multilingual-e5-large": 1024,
    "mixedbread-ai/mxbai-embed-large-v1": 1024,
}


def point_id(namespace: str, record_id: str) -> str:
    """Deterministic Qdrant point id for a caller-assigned record id."""
    return str(uuid5(NAMESPACE_URL, f"{namespace}/{record_id}"))


class VectorStore(ABC):
    """Abstract base class for vector stores.

    Defines the interface for storing text records and searching them.
    """

    @abstractmethod
    async def create_collection(
        self,
        name: str,
        dimensions: int,
        indexed_fields: list[str] | None = None,
    ) -> None:
        """Create a new collection.

        Args:
            name: Collection name.
            dimensions: Vector dimensions.
            indexed_fields: Payload fields to index for exact-match filtering.

        Raises:
            VectorStoreError: If creation fails.
        """
        ...

    @abstractmethod
    async def collection_exists(self, name: str) -> bool:
        """Check if a collection exists.

        Args:
            name: Collection name.

        Returns:
            True if collection exists.
        """
        ...

    @abstractmethod
    async def upsert(
        self,
        collection: str,
        records: list[StoredRecord],
        namespace: str,
    ) -> int:
        """Create or replace records, keyed by record id.

        Args:
            collection: Collection name.
            records: Records to upsert.
            namespace: Partition the records belong to.

        Returns:
            Number of records upserted.

        Raises:
            VectorStoreError: If upsert fails.
        """
        ...

    @abstractmethod
    async def search(
        self,
        collection: str,
        text: str,
        namespace: str,
        limit: int = 10,
        filters: dict[str, Any] | None = None,
        fields: list[str] | None = None,
    ) -> list[SearchHit]:
        """Semantic search with optional exact-match filters.

        Args:
            collection: Collection name.
            text: Query text to embed.
            namespace: Partition to search.
            limit: Maximum results to return.
            filters: Equality predicates, all of which must hold.
            fields: Payload fields to return (all when None).

        Returns:
            Hits ordered best match first.

        Raises:
            VectorStoreError: If search fails.
        """
        ...

    async def close(self) -> None:
        """Release client resources."""
        return None


class QdrantVectorStore(VectorStore):
    """Qdrant vector store with server-side inference."""

    def __init__(
        self,
        settings: QdrantSettings | None = None,
        client: AsyncQdrantClient | None = None,
    ) -> None:
        """Initialize Qdrant vector store.

        Args:
            settings: Qdrant configuration.
            client: Existing client (for testing).
        """
        self._settings = settings or get_settings().qdrant
        self._client = client
        self._owns_client = client is None

    @property
    def embedding_model(self) -> str:
        """Model the service uses to embed records and queries."""
        return self._settings.embedding_model

    async def _get_client(self) -> AsyncQdrantClient:
        """Get or create Qdrant client."""
        if self._client is None:
            self._client = AsyncQdrantClient(
                url=self._settings.url,
                api_key=self._settings.api_key.get_secret_value(),
                timeout=self._settings.timeout,
                cloud_inference=self._settings.cloud_inference,
                # Retries connection failures; forwarded to the REST client.
                transport=httpx.AsyncHTTPTransport(retries=self._settings.max_retries),
            )
        return self._client

    async def close(self) -> None:
        """Close the Qdrant client."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None

    async def create_collection(
        self,
        name: str,
        dimensions: int,
        indexed_fields: list[str] | None = None,
    ) -> None:
        """Create a new Qdrant collection with filter indexes."""
        client = await self._get_client()

        try:
            exists = await client.collection_exists(name)
            if exists:
                raise VectorStoreError(
                    f"Collection already exists: {name}",
                    code=ErrorCode.COLLECTION_EXISTS,
                    details={"collection": name},
                )

            await client.create_collection(
                collection_name=name,
                vectors_config=VectorParams(
                    size=dimensions,
                    distance=Distance.COSINE,
                ),
            )
            await client.create_payload_index(
                collection_name=name,
                field_name=NAMESPACE_KEY,
                field_schema=KeywordIndexParams(
                    type=KeywordIndexType.KEYWORD,
                    is_tenant=True,
                ),
            )
            for field in indexed_fields or []:
                await client.create_payload_index(
                    collection_name=name,
                    field_name=field,
                    field_schema=PayloadSchemaType.KEYWORD,
                )
            logger.info(f"Created collection: {name}", extra={"dimensions": dimensions})

        except VectorStoreError:
            raise
        except Exception as e:
            raise VectorStoreError(
                f"Failed to create collection: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": name, "error": str(e)},
            ) from e

    async def collection_exists(self, name: str) -> bool:
        """Check if collection exists."""
        client = await self._get_client()
        try:
            return await client.collection_exists(name)
        except Exception as e:
            raise VectorStoreError(
                f"Failed to check collection: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": name, "error": str(e)},
            ) from e

    async def upsert(
        self,
        collection: str,
        records: list[StoredRecord],
        namespace: str,
    ) -> int:
        """Upsert records into collection."""
        if not records:
            return 0

        client = await self._get_client()
        start = time.perf_counter()

        try:
            points = [
                PointStruct(
                    id=point_id(namespace, record.id),
                    vector=Document(text=record.text, model=self.embedding_model),
                    payload={
                        **record.payload,
                        RECORD_ID_KEY: record.id,
                        NAMESPACE_KEY: namespace,
                    },
                )
                for record in records
            ]

            await client.upsert(
                collection_name=collection,
                points=points,
            )

        except Exception as e:
            track_vectorstore_operation("upsert", time.perf_counter() - start, success=False)
            raise VectorStoreError(
                f"Failed to upsert records: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": collection, "error": str(e)},
            ) from e

        track_vectorstore_operation("upsert", time.perf_counter() - start)
        logger.debug(
            f"Upserted {len(points)} records",
            extra={"collection": collection, "namespace": namespace},
        )
        return len(points)

    async def search(
        self,
        collection: str,
        text: str,
        namespace: str,
        limit: int = 10,
        filters: dict[str, Any] | None = None,
        fields: list[str] | None = None,
    ) -> list[SearchHit]:
        """Search by text similarity inside one namespace."""
        client = await self._get_client()
        start = time.perf_counter()

        try:
            conditions = [
                FieldCondition(key=NAMESPACE_KEY, match=MatchValue(value=namespace)),
            ]
            conditions.extend(
                FieldCondition(key=k, match=MatchValue(value=v))
                for k, v in (filters or {}).items()
            )

            with_payload: bool | list[str] = True
            if fields is not None:
                with_payload = [*fields, RECORD_ID_KEY]

            results = await client.query_points(
                collection_name=collection,
                query=Document(text=text, model=self.embedding_model),
                query_filter=Filter(must=conditions),  # type: ignore[arg-type]
                limit=limit,
                with_payload=with_payload,
            )

            hits = [self._to_hit(point) for point in results.points]

        except Exception as e:
            track_vectorstore_operation("search", time.perf_counter() - start, success=False)
            raise VectorStoreError(
                f"Failed to search: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": collection, "error": str(e)},
            ) from e

        track_vectorstore_operation("search", time.perf_counter() - start)
        return hits

    @staticmethod
    def _to_hit(point: Any) -> SearchHit:
        payload = point.payload
        fields = None
        record_id = str(point.id)
        if payload:
            record_id = str(payload.get(RECORD_ID_KEY) or record_id)
            fields = {k: v for k, v in payload.items() if k not in _INTERNAL_KEYS}
        return SearchHit(
            id=record_id,
            score=point.score if point.score is not None else 0.0,
            fields=fields,
        )

"""Pytest configuration and shared fixtures."""

import os
from collections.abc import AsyncGenerator
from typing import Any

# Required settings must exist before the app module is imported.
os.environ.setdefault("QDRANT_API_KEY", "test-api-key")
os.environ.setdefault("QDRANT_COLLECTION_NAME", "flowers-test")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from flora_search.api.app import app  # noqa: E402
from flora_search.api.dependencies import get_vector_store  # noqa: E402
from flora_search.config import get_settings  # noqa: E402
from flora_search.flowers.models import FlowerRecord  # noqa: E402
from flora_search.vectorstore.models import SearchHit, StoredRecord  # noqa: E402
from flora_search.vectorstore.service import VectorStore  # noqa: E402


class InMemoryVectorStore(VectorStore):
    """Vector store double with exact-match filtering.

    Ranks by insertion order; the text query is recorded but not used.
    """

    def __init__(self, collections: set[str] | None = None) -> None:
        self.collections = set(collections or ())
        self.records: dict[tuple[str, str, str], StoredRecord] = {}
        self.searches: list[dict[str, Any]] = []
        self.fail_with: Exception | None = None

    async def create_collection(
        self,
        name: str,
        dimensions: int,
        indexed_fields: list[str] | None = None,
    ) -> None:
        self.collections.add(name)

    async def collection_exists(self, name: str) -> bool:
        return name in self.collections

    async def upsert(
        self,
        collection: str,
        records: list[StoredRecord],
        namespace: str,
    ) -> int:
        if self.fail_with is not None:
            raise self.fail_with
        for record in records:
            self.records[(collection, namespace, record.id)] = record
        return len(records)

    async def search(
        self,
        collection: str,
        text: str,
        namespace: str,
        limit: int = 10,
        filters: dict[str, Any] | None = None,
        fields: list[str] | None = None,
    ) -> list[SearchHit]:
        if self.fail_with is not None:
            raise self.fail_with
        self.searches.append({"text": text, "filters": filters, "limit": limit})

        hits: list[SearchHit] = []
        for (coll, ns, record_id), record in self.records.items():
            if coll != collection or ns != namespace:
                continue
            if any(record.payload.get(k) != v for k, v in (filters or {}).items()):
                continue
            payload = record.payload
            if fields is not None:
                payload = {k: v for k, v in payload.items() if k in fields}
            hits.append(SearchHit(id=record_id, score=1.0, fields=payload))
        return hits[:limit]


@pytest.fixture
def vector_store() -> InMemoryVectorStore:
    """Empty in-memory store that knows the configured collection."""
    return InMemoryVectorStore(collections={get_settings().qdrant.collection_name})


@pytest.fixture
async def client(vector_store: InMemoryVectorStore) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for FastAPI app.

    Yields:
        AsyncClient backed by the in-memory vector store.
    """
    app.dependency_overrides[get_vector_store] = lambda: vector_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def rose() -> FlowerRecord:
    """A complete flower record."""
    return FlowerRecord(
        id="f1",
        name="Rose",
        scientific_name="Rosa",
        climate=["Temperate"],
        sun_exposure="Full Sun",
        watering_needs="Moderate",
        soil_type="Loamy",
        blooming_season=["Summer"],
        hardiness="5-7",
        description="a fragrant red flower",
    )

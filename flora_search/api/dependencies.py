"""Request dependencies.

One vector store (and so one service client) per process, created on first
use and closed at shutdown. Tests swap it through ``app.dependency_overrides``.
"""

import threading
from typing import Annotated

from fastapi import Depends

from flora_search.config import get_settings
from flora_search.flowers.service import FlowerCatalog
from flora_search.vectorstore.service import QdrantVectorStore, VectorStore

_vector_store: VectorStore | None = None
# Sync dependencies run in the threadpool; creation must happen once.
_vector_store_lock = threading.Lock()


def get_vector_store() -> VectorStore:
    """Get the process-wide vector store, creating it on first use."""
    global _vector_store
    if _vector_store is None:
        with _vector_store_lock:
            if _vector_store is None:
                _vector_store = QdrantVectorStore(settings=get_settings().qdrant)
    return _vector_store


async def close_vector_store() -> None:
    """Close the process-wide vector store if it was ever created."""
    global _vector_store
    with _vector_store_lock:
        store, _vector_store = _vector_store, None
    if store is not None:
        await store.close()


def get_catalog(
    vector_store: Annotated[VectorStore, Depends(get_vector_store)],
) -> FlowerCatalog:
    """Catalog bound to the configured collection and namespace."""
    qdrant = get_settings().qdrant
    return FlowerCatalog(
        vector_store=vector_store,
        collection=qdrant.collection_name,
        namespace=qdrant.namespace,
    )


VectorStoreDep = Annotated[VectorStore, Depends(get_vector_store)]
CatalogDep = Annotated[FlowerCatalog, Depends(get_catalog)]

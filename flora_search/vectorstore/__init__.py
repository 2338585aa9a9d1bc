"""Vector store module."""

from flora_search.vectorstore.models import SearchHit, StoredRecord
from flora_search.vectorstore.service import QdrantVectorStore, VectorStore

__all__ = [
    "QdrantVectorStore",
    "SearchHit",
    "StoredRecord",
    "VectorStore",
]

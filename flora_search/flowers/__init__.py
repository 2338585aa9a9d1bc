"""Flower catalog domain: records, query building, and storage formatting."""

from flora_search.flowers.formatter import build_embedding_text, format_for_upsert
from flora_search.flowers.models import FlowerRecord, SearchRequest
from flora_search.flowers.normalizer import normalize_hit, normalize_hits
from flora_search.flowers.query import SearchQuery, build_search_query, has_search_criteria
from flora_search.flowers.service import FlowerCatalog

__all__ = [
    "FlowerCatalog",
    "FlowerRecord",
    "SearchQuery",
    "SearchRequest",
    "build_embedding_text",
    "build_search_query",
    "format_for_upsert",
    "has_search_criteria",
    "normalize_hit",
    "normalize_hits",
]

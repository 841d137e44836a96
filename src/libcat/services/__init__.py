"""Catalog services: partitions, keyword index, and ranked search."""

from .catalog import Catalog, IndexedCatalog
from .index import IndexView, InvertedIndex
from .invariants import (
    InvariantError,
    InvariantViolation,
    assert_consistent,
    first_violation,
    verify_catalog,
)
from .keywords import DEFAULT_STOP_WORDS, QueryToken, split_words, title_keywords, tokenize_query
from .query import QueryEngine, SearchHit
from .reference import LinearCatalog
from .store import CatalogError, CatalogMisuseError, CatalogStore, MutationOutcome

__all__ = [
    "Catalog",
    "IndexedCatalog",
    "LinearCatalog",
    "CatalogStore",
    "CatalogError",
    "CatalogMisuseError",
    "MutationOutcome",
    "InvertedIndex",
    "IndexView",
    "QueryEngine",
    "QueryToken",
    "SearchHit",
    "DEFAULT_STOP_WORDS",
    "split_words",
    "title_keywords",
    "tokenize_query",
    "InvariantError",
    "InvariantViolation",
    "assert_consistent",
    "first_violation",
    "verify_catalog",
]

"""Unindexed catalog that answers every request by scanning its copies.

Only useful for small collections and as an oracle for ``IndexedCatalog``.
"""

from __future__ import annotations

from typing import AbstractSet

import structlog

from libcat.models import Copy, Title

from .catalog import Catalog
from .index import InvertedIndex
from .keywords import DEFAULT_STOP_WORDS
from .query import QueryEngine
from .store import MutationOutcome

logger = structlog.get_logger(__name__)


class LinearCatalog(Catalog):
    def __init__(self, *, stop_words: AbstractSet[str] = DEFAULT_STOP_WORDS) -> None:
        self._stop_words = frozenset(stop_words)
        self._available: set[Copy] = set()
        self._checked_out: set[Copy] = set()
        self._lost: set[Copy] = set()

    def purchase(self, title: Title) -> Copy:
        if title is None:
            raise TypeError("title is required")
        copy = Copy(title)
        self._available.add(copy)
        return copy

    def checkout(self, copy: Copy) -> MutationOutcome:
        if copy is None:
            raise TypeError("copy is required")
        if copy not in self._available:
            return MutationOutcome(operation="checkout", copy=copy, applied=False, reason="copy is not available")
        self._available.remove(copy)
        self._checked_out.add(copy)
        return MutationOutcome(operation="checkout", copy=copy, applied=True)

    def checkin(self, copy: Copy) -> MutationOutcome:
        if copy is None:
            raise TypeError("copy is required")
        if copy not in self._checked_out:
            return MutationOutcome(operation="checkin", copy=copy, applied=False, reason="copy is not checked out")
        self._checked_out.remove(copy)
        self._available.add(copy)
        return MutationOutcome(operation="checkin", copy=copy, applied=True)

    def lose(self, copy: Copy) -> MutationOutcome:
        if copy is None:
            raise TypeError("copy is required")
        applied = copy in self._available or copy in self._checked_out
        self._available.discard(copy)
        self._checked_out.discard(copy)
        self._lost.add(copy)
        reason = None if applied else "copy is not active"
        return MutationOutcome(operation="lose", copy=copy, applied=applied, reason=reason)

    def all_copies(self, title: Title) -> set[Copy]:
        if title is None:
            raise TypeError("title is required")
        return {copy for copy in self._available | self._checked_out if copy.title == title}

    def available_copies(self, title: Title) -> set[Copy]:
        if title is None:
            raise TypeError("title is required")
        return {copy for copy in self._available if copy.title == title}

    def is_available(self, copy: Copy) -> bool:
        if copy is None:
            raise TypeError("copy is required")
        return copy in self._available

    def titles(self) -> frozenset[Title]:
        return frozenset(copy.title for copy in self._available | self._checked_out)

    def find(self, query: str, *, limit: int | None = None) -> list[Title]:
        index = InvertedIndex(self._stop_words)
        for title in self.titles():
            index.add_title(title)
        logger.debug("reference.find", query=query, titles=len(index.titles()))
        return QueryEngine(index.view(), self._stop_words).search(query, limit=limit)

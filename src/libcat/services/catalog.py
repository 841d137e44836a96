"""Public catalog facade combining the store and the query engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, AbstractSet, Protocol

import structlog

from libcat.models import Copy, Title

from .keywords import DEFAULT_STOP_WORDS
from .query import QueryEngine, SearchHit
from .store import CatalogStore, MutationOutcome

if TYPE_CHECKING:
    from libcat.settings import Settings

logger = structlog.get_logger(__name__)


class Catalog(Protocol):
    """High-level contract shared by the indexed and the linear catalogs."""

    def purchase(self, title: Title) -> Copy:
        ...

    def checkout(self, copy: Copy) -> MutationOutcome:
        ...

    def checkin(self, copy: Copy) -> MutationOutcome:
        ...

    def lose(self, copy: Copy) -> MutationOutcome:
        ...

    def all_copies(self, title: Title) -> set[Copy]:
        ...

    def available_copies(self, title: Title) -> set[Copy]:
        ...

    def is_available(self, copy: Copy) -> bool:
        ...

    def find(self, query: str) -> list[Title]:
        ...


class IndexedCatalog(Catalog):
    """Catalog whose lookups and searches never scan the whole collection."""

    def __init__(
        self,
        *,
        stop_words: AbstractSet[str] = DEFAULT_STOP_WORDS,
        strict: bool = False,
    ) -> None:
        self._store = CatalogStore(stop_words=stop_words, strict=strict)
        self._engine = QueryEngine(self._store.index.view(), self._store.index.stop_words)
        logger.debug("catalog.created", strict=strict, stop_words=len(self._store.index.stop_words))

    @classmethod
    def from_settings(cls, settings: Settings) -> "IndexedCatalog":
        return cls(stop_words=settings.stop_words, strict=settings.strict)

    @property
    def store(self) -> CatalogStore:
        return self._store

    def purchase(self, title: Title) -> Copy:
        return self._store.purchase(title)

    def checkout(self, copy: Copy) -> MutationOutcome:
        return self._store.checkout(copy)

    def checkin(self, copy: Copy) -> MutationOutcome:
        return self._store.checkin(copy)

    def lose(self, copy: Copy) -> MutationOutcome:
        return self._store.lose(copy)

    def all_copies(self, title: Title) -> set[Copy]:
        return self._store.all_copies(title)

    def available_copies(self, title: Title) -> set[Copy]:
        return self._store.available_copies(title)

    def is_available(self, copy: Copy) -> bool:
        return self._store.is_available(copy)

    def find(self, query: str, *, limit: int | None = None) -> list[Title]:
        return self._engine.search(query, limit=limit)

    def find_hits(self, query: str, *, limit: int | None = None) -> list[SearchHit]:
        return self._engine.search_hits(query, limit=limit)

    def titles(self) -> frozenset[Title]:
        return self._store.titles()

    def copy_count(self, title: Title) -> int:
        return self._store.copy_count(title)

    def __len__(self) -> int:
        return len(self._store)

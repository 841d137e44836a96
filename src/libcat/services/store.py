"""Copy partitions, per-title counts, and the index they keep in step."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet

import structlog

from libcat.models import Copy, Title

from .index import InvertedIndex
from .keywords import DEFAULT_STOP_WORDS

logger = structlog.get_logger(__name__)


class CatalogError(RuntimeError):
    """Base class for catalog failures."""


@dataclass(frozen=True, slots=True)
class MutationOutcome:
    """Result of checkout, checkin or lose.

    ``applied`` is False when the copy was not in a state the operation
    accepts; the catalog is left untouched in that case.
    """

    operation: str
    copy: Copy
    applied: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.applied


class CatalogMisuseError(CatalogError):
    """Raised instead of returning an unapplied outcome in strict mode."""

    def __init__(self, outcome: MutationOutcome) -> None:
        super().__init__(f"{outcome.operation} not applied: {outcome.reason}")
        self.outcome = outcome


@dataclass(frozen=True, slots=True)
class StoreSnapshot:
    """Frozen copy of the raw store state, consumed by the invariant verifier."""

    available: frozenset[Copy]
    checked_out: frozenset[Copy]
    lost: frozenset[Copy]
    title_counts: dict[Title, int]
    copies_by_title: dict[Title, frozenset[Copy]]
    postings: dict[str, frozenset[Title]]
    indexed_titles: frozenset[Title]
    stop_words: frozenset[str]


def _require_copy(copy: Copy) -> None:
    if copy is None:
        raise TypeError("copy is required")
    if not isinstance(copy, Copy):
        raise TypeError(f"expected Copy, got {type(copy).__name__}")


def _require_title(title: Title) -> None:
    if title is None:
        raise TypeError("title is required")
    if not isinstance(title, Title):
        raise TypeError(f"expected Title, got {type(title).__name__}")


class CatalogStore:
    """Owns the available / checked-out / lost partitions and the keyword index.

    Every public mutation updates partitions, counts, the per-title copy
    index and (on a zero crossing) the keyword index as one unit.
    """

    def __init__(
        self,
        *,
        stop_words: AbstractSet[str] = DEFAULT_STOP_WORDS,
        strict: bool = False,
    ) -> None:
        self._available: set[Copy] = set()
        self._checked_out: set[Copy] = set()
        self._lost: set[Copy] = set()
        self._title_counts: dict[Title, int] = {}
        self._copies_by_title: dict[Title, set[Copy]] = {}
        self._index = InvertedIndex(stop_words)
        self._strict = strict

    @property
    def index(self) -> InvertedIndex:
        return self._index

    @property
    def strict(self) -> bool:
        return self._strict

    def purchase(self, title: Title) -> Copy:
        _require_title(title)
        copy = Copy(title)
        self._available.add(copy)
        self._copies_by_title.setdefault(title, set()).add(copy)
        count = self._title_counts.get(title, 0) + 1
        self._title_counts[title] = count
        if count == 1:
            self._index.add_title(title)
        logger.info("catalog.purchase", title=title.text, year=title.year, copies=count)
        return copy

    def checkout(self, copy: Copy) -> MutationOutcome:
        _require_copy(copy)
        if copy not in self._available:
            return self._ignored("checkout", copy, self._describe(copy))
        self._available.remove(copy)
        self._checked_out.add(copy)
        logger.info("catalog.checkout", title=copy.title.text)
        return MutationOutcome(operation="checkout", copy=copy, applied=True)

    def checkin(self, copy: Copy) -> MutationOutcome:
        _require_copy(copy)
        if copy not in self._checked_out:
            return self._ignored("checkin", copy, self._describe(copy))
        self._checked_out.remove(copy)
        self._available.add(copy)
        logger.info("catalog.checkin", title=copy.title.text)
        return MutationOutcome(operation="checkin", copy=copy, applied=True)

    def lose(self, copy: Copy) -> MutationOutcome:
        _require_copy(copy)
        if copy in self._available:
            self._available.remove(copy)
        elif copy in self._checked_out:
            self._checked_out.remove(copy)
        else:
            reason = self._describe(copy)
            outcome = self._ignored("lose", copy, reason)
            # Still recorded, but the count only ever drops once per copy.
            self._lost.add(copy)
            return outcome

        self._lost.add(copy)
        title = copy.title
        remaining = self._copies_by_title[title]
        remaining.discard(copy)
        count = self._title_counts[title] - 1
        if count == 0:
            del self._title_counts[title]
            del self._copies_by_title[title]
            self._index.remove_title(title)
            logger.info("catalog.title_retired", title=title.text, year=title.year)
        else:
            self._title_counts[title] = count
        logger.info("catalog.lose", title=title.text, copies=count)
        return MutationOutcome(operation="lose", copy=copy, applied=True)

    def all_copies(self, title: Title) -> set[Copy]:
        _require_title(title)
        return set(self._copies_by_title.get(title, ()))

    def available_copies(self, title: Title) -> set[Copy]:
        _require_title(title)
        return {copy for copy in self._copies_by_title.get(title, ()) if copy in self._available}

    def is_available(self, copy: Copy) -> bool:
        _require_copy(copy)
        return copy in self._available

    def is_checked_out(self, copy: Copy) -> bool:
        _require_copy(copy)
        return copy in self._checked_out

    def is_lost(self, copy: Copy) -> bool:
        _require_copy(copy)
        return copy in self._lost

    def copy_count(self, title: Title) -> int:
        _require_title(title)
        return self._title_counts.get(title, 0)

    def titles(self) -> frozenset[Title]:
        return frozenset(self._title_counts)

    def lost_copies(self, title: Title | None = None) -> set[Copy]:
        if title is None:
            return set(self._lost)
        return {copy for copy in self._lost if copy.title == title}

    def snapshot(self) -> StoreSnapshot:
        view = self._index.view()
        return StoreSnapshot(
            available=frozenset(self._available),
            checked_out=frozenset(self._checked_out),
            lost=frozenset(self._lost),
            title_counts=dict(self._title_counts),
            copies_by_title={
                title: frozenset(copies) for title, copies in self._copies_by_title.items()
            },
            postings={keyword: view[keyword] for keyword in view},
            indexed_titles=self._index.titles(),
            stop_words=self._index.stop_words,
        )

    def __len__(self) -> int:
        return len(self._available) + len(self._checked_out)

    # Internal helpers -----------------------------------------------------

    def _describe(self, copy: Copy) -> str:
        if copy in self._available:
            return "copy is available"
        if copy in self._checked_out:
            return "copy is checked out"
        if copy in self._lost:
            return "copy is lost"
        return "copy is not tracked by this catalog"

    def _ignored(self, operation: str, copy: Copy, reason: str) -> MutationOutcome:
        outcome = MutationOutcome(operation=operation, copy=copy, applied=False, reason=reason)
        if self._strict:
            raise CatalogMisuseError(outcome)
        logger.warning(f"catalog.{operation}_ignored", title=copy.title.text, reason=reason)
        return outcome

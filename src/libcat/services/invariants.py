"""Side-effect-free consistency checks over a catalog store's raw state."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from libcat.models import Title

from .keywords import title_keywords
from .store import CatalogError, CatalogStore, StoreSnapshot


@dataclass(frozen=True, slots=True)
class InvariantViolation:
    rule: str
    detail: str

    def __str__(self) -> str:
        return f"{self.rule}: {self.detail}"


class InvariantError(CatalogError):
    """Raised by assert_consistent when the store is corrupt."""

    def __init__(self, violation: InvariantViolation) -> None:
        super().__init__(str(violation))
        self.violation = violation


def verify_snapshot(snapshot: StoreSnapshot) -> list[InvariantViolation]:
    violations: list[InvariantViolation] = []
    active = snapshot.available | snapshot.checked_out

    overlap = snapshot.available & snapshot.checked_out
    if overlap:
        violations.append(
            InvariantViolation("partitions-disjoint", f"{len(overlap)} copies both available and checked out")
        )
    lost_active = snapshot.lost & active
    if lost_active:
        violations.append(
            InvariantViolation("lost-disjoint", f"{len(lost_active)} lost copies still active")
        )

    expected_counts = Counter(copy.title for copy in active)
    counted_titles = {title for title, count in snapshot.title_counts.items() if count > 0}
    if counted_titles != set(expected_counts):
        missing = len(set(expected_counts) - counted_titles)
        extra = len(counted_titles - set(expected_counts))
        violations.append(
            InvariantViolation("counted-titles", f"{missing} titles uncounted, {extra} counted without copies")
        )
    for title, count in snapshot.title_counts.items():
        if count != expected_counts.get(title, 0):
            violations.append(
                InvariantViolation(
                    "copy-count",
                    f"{title} counted {count}, has {expected_counts.get(title, 0)} active copies",
                )
            )

    grouped: dict[Title, set] = {}
    for copy in active:
        grouped.setdefault(copy.title, set()).add(copy)
    if {title: frozenset(copies) for title, copies in grouped.items()} != snapshot.copies_by_title:
        violations.append(
            InvariantViolation("copy-index", "per-title copy index disagrees with partitions")
        )

    violations.extend(_verify_postings(snapshot, counted_titles))
    return violations


def _verify_postings(snapshot: StoreSnapshot, counted_titles: set[Title]) -> list[InvariantViolation]:
    violations: list[InvariantViolation] = []
    if set(snapshot.indexed_titles) != counted_titles:
        violations.append(
            InvariantViolation("indexed-titles", "indexed titles differ from titles with copies")
        )
    keyword_cache: dict[Title, set[str]] = {}
    for keyword, titles in snapshot.postings.items():
        if not titles:
            violations.append(InvariantViolation("empty-posting", f"keyword {keyword!r} has no titles"))
            continue
        for title in titles:
            if title not in keyword_cache:
                keyword_cache[title] = title_keywords(title, snapshot.stop_words)
            if keyword not in keyword_cache[title]:
                violations.append(
                    InvariantViolation("posting-derivable", f"{keyword!r} is not a keyword of {title}")
                )
    for title in counted_titles:
        keywords = keyword_cache.get(title) or title_keywords(title, snapshot.stop_words)
        absent = [keyword for keyword in keywords if title not in snapshot.postings.get(keyword, ())]
        if absent:
            violations.append(
                InvariantViolation("posting-complete", f"{title} missing from {len(absent)} postings")
            )
    return violations


def verify_catalog(store: CatalogStore) -> list[InvariantViolation]:
    """Recompute every store and index invariant from raw state."""
    return verify_snapshot(store.snapshot())


def first_violation(store: CatalogStore) -> InvariantViolation | None:
    violations = verify_catalog(store)
    return violations[0] if violations else None


def assert_consistent(store: CatalogStore) -> None:
    violation = first_violation(store)
    if violation is not None:
        raise InvariantError(violation)

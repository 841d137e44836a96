"""Phrase-aware ranked search over an inverted index."""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass
from typing import AbstractSet

import structlog

from libcat.models import Title

from .keywords import DEFAULT_STOP_WORDS, QueryToken, split_words, tokenize_query

logger = structlog.get_logger(__name__)

PHRASE_WEIGHT = 10
WORD_WEIGHT = 1
# Weight dominates the score; the year only orders titles of equal weight.
WEIGHT_SCALE = 10000


@dataclass(frozen=True, slots=True)
class SearchHit:
    title: Title
    weight: int

    @property
    def score(self) -> int:
        return self.weight * WEIGHT_SCALE + self.title.year


def rank_key(hit: SearchHit) -> tuple[int, str, tuple[str, ...]]:
    """Score descending, then title text, then author list."""
    return (-hit.score, *hit.title.sort_key)


class QueryEngine:
    """Answers search queries against a read-only postings mapping.

    A query is a sequence of word runs and double-quoted phrases. A phrase
    that is itself a posting key scores ``PHRASE_WEIGHT`` for every title
    filed under it; otherwise it is broken into words that are looked up
    one at a time.
    """

    def __init__(
        self,
        postings: Mapping[str, AbstractSet[Title]],
        stop_words: AbstractSet[str] = DEFAULT_STOP_WORDS,
    ) -> None:
        self._postings = postings
        self._stop_words = frozenset(stop_words)

    def search(self, query: str, *, limit: int | None = None) -> list[Title]:
        return [hit.title for hit in self.search_hits(query, limit=limit)]

    def search_hits(self, query: str, *, limit: int | None = None) -> list[SearchHit]:
        if query is None:
            raise TypeError("query is required")
        weights = self._accumulate(query)
        hits = [SearchHit(title=title, weight=weight) for title, weight in weights.items() if weight > 0]
        hits.sort(key=rank_key)
        ranked = self._dedupe(hits)
        if limit is not None:
            ranked = ranked[: max(limit, 0)]
        logger.debug("query.completed", query=query, matches=len(ranked))
        return ranked

    def _accumulate(self, query: str) -> dict[Title, int]:
        queue: deque[QueryToken] = deque(tokenize_query(query))
        weights: dict[Title, int] = {}
        while queue:
            token = queue.popleft()
            key = token.text.strip().lower()
            if not key or (not token.phrase and key in self._stop_words):
                continue
            posting = self._postings.get(key)
            if posting:
                increment = PHRASE_WEIGHT if token.phrase else WORD_WEIGHT
                for title in posting:
                    weights[title] = weights.get(title, 0) + increment
                continue
            if token.phrase:
                words = split_words(key, self._stop_words)
                logger.debug("query.phrase_fallback", phrase=key, words=words)
                queue.extend(QueryToken(text=word) for word in words)
        return weights

    @staticmethod
    def _dedupe(hits: list[SearchHit]) -> list[SearchHit]:
        seen: set[Title] = set()
        ordered: list[SearchHit] = []
        for hit in hits:
            if hit.title in seen:
                continue
            seen.add(hit.title)
            ordered.append(hit)
        return ordered

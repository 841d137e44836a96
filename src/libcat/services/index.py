"""Inverted keyword index over the titles currently held by the catalog."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import AbstractSet

import structlog

from libcat.models import Title

from .keywords import DEFAULT_STOP_WORDS, title_keywords

logger = structlog.get_logger(__name__)


class IndexView(Mapping[str, frozenset[Title]]):
    """Read-only window onto the postings of an InvertedIndex."""

    def __init__(self, postings: dict[str, set[Title]], stop_words: frozenset[str]) -> None:
        self._postings = postings
        self.stop_words = stop_words

    def __getitem__(self, keyword: str) -> frozenset[Title]:
        return frozenset(self._postings[keyword])

    def __iter__(self) -> Iterator[str]:
        return iter(self._postings)

    def __len__(self) -> int:
        return len(self._postings)

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._postings


class InvertedIndex:
    """Maps lowercase keywords to the set of titles filed under them.

    Posting sets are never empty: a keyword whose last title is removed is
    dropped from the mapping. Titles enter and leave as a whole, so callers
    only touch the index when a title's active copy count crosses zero.
    """

    def __init__(self, stop_words: AbstractSet[str] = DEFAULT_STOP_WORDS) -> None:
        self._stop_words = frozenset(stop_words)
        self._postings: dict[str, set[Title]] = {}
        self._titles: set[Title] = set()

    @property
    def stop_words(self) -> frozenset[str]:
        return self._stop_words

    def keywords_for(self, title: Title) -> set[str]:
        return title_keywords(title, self._stop_words)

    def add_title(self, title: Title) -> None:
        keywords = self.keywords_for(title)
        for keyword in keywords:
            self._postings.setdefault(keyword, set()).add(title)
        self._titles.add(title)
        logger.debug("index.title_added", title=title.text, keywords=len(keywords))

    def remove_title(self, title: Title) -> None:
        for keyword in self.keywords_for(title):
            posting = self._postings.get(keyword)
            if posting is None:
                continue
            posting.discard(title)
            if not posting:
                del self._postings[keyword]
        self._titles.discard(title)
        logger.debug("index.title_removed", title=title.text)

    def lookup(self, keyword: str) -> frozenset[Title]:
        posting = self._postings.get(keyword)
        return frozenset(posting) if posting else frozenset()

    def titles(self) -> frozenset[Title]:
        return frozenset(self._titles)

    def keywords(self) -> frozenset[str]:
        return frozenset(self._postings)

    def view(self) -> IndexView:
        return IndexView(self._postings, self._stop_words)

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._postings

    def __len__(self) -> int:
        return len(self._postings)

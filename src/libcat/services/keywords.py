"""Keyword extraction shared by the inverted index and the query engine."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import AbstractSet, Iterable, Iterator

from libcat.models import Title

# Articles, conjunctions, common prepositions and the possessive suffix.
DEFAULT_STOP_WORDS: frozenset[str] = frozenset(
    {"a", "an", "and", "but", "de", "etc", "in", "is", "le", "of", "on", "or", "the", "'s"}
)

WORD_SPLIT_PATTERN = re.compile(r"\W+")
QUERY_TOKEN_PATTERN = re.compile(r'(\w+|"[^"]+")')


@dataclass(frozen=True, slots=True)
class QueryToken:
    text: str
    phrase: bool = False


def split_words(value: str, stop_words: AbstractSet[str] = DEFAULT_STOP_WORDS) -> list[str]:
    """Split on runs of non-word characters, lowercase, and drop stop words."""
    words: list[str] = []
    for raw in WORD_SPLIT_PATTERN.split(value):
        word = raw.lower()
        if not word or word in stop_words:
            continue
        words.append(word)
    return words


def title_keywords(title: Title, stop_words: AbstractSet[str] = DEFAULT_STOP_WORDS) -> set[str]:
    """Every posting key a title is filed under.

    Individual words of the text, the author names and the year, plus the
    whole lowercased text and each whole lowercased author name so that a
    quoted phrase can hit them verbatim.
    """
    year = str(title.year)
    keywords = set(split_words(title.text, stop_words))
    for author in title.authors:
        keywords.update(split_words(author, stop_words))
    keywords.update(split_words(year, stop_words))

    keywords.add(title.text.strip().lower())
    for author in title.authors:
        name = author.strip().lower()
        if name:
            keywords.add(name)
    keywords.add(year)
    return keywords


def tokenize_query(query: str) -> Iterator[QueryToken]:
    """Yield word runs and double-quoted phrases, left to right."""
    for match in QUERY_TOKEN_PATTERN.finditer(query):
        raw = match.group(1)
        if raw.startswith('"'):
            yield QueryToken(text=raw[1:-1], phrase=True)
        else:
            yield QueryToken(text=raw)


def normalize_stop_words(words: Iterable[str]) -> frozenset[str]:
    return frozenset(word.strip().lower() for word in words if word.strip())

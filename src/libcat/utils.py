"""Utility helpers for seed parsing."""

from __future__ import annotations

AUTHOR_SEPARATOR = ";"


def split_authors(value: str) -> list[str]:
    """Split a ``;``-separated author cell, keeping order."""
    if not value:
        return []
    return [name.strip() for name in value.split(AUTHOR_SEPARATOR) if name.strip()]

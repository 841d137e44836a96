"""Load catalog contents from JSON or CSV seed files.

The catalog itself keeps nothing on disk; a seed file is simply a list of
titles with the number of copies to buy and how many of them start out
checked out or lost.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Iterable

import structlog
from pydantic import BaseModel, Field, ValidationError, model_validator

from libcat.models import Title
from libcat.services.catalog import IndexedCatalog
from libcat.settings import Settings
from libcat.utils import split_authors

logger = structlog.get_logger(__name__)


class SeedError(ValueError):
    """Raised when a seed file cannot be turned into catalog entries."""


class SeedEntry(BaseModel):
    title: Title
    copies: int = Field(default=1, ge=1)
    checked_out: int = Field(default=0, ge=0)
    lost: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _fits_in_copies(self) -> "SeedEntry":
        if self.checked_out + self.lost > self.copies:
            raise ValueError("checked_out + lost exceeds copies")
        return self


def load_seed(path: Path) -> list[SeedEntry]:
    """Parse ``path`` as JSON (``.json``) or CSV (anything else)."""
    if not path.exists():
        raise SeedError(f"seed file not found: {path}")
    if path.suffix.lower() == ".json":
        rows = _read_json_rows(path)
    else:
        rows = _read_csv_rows(path)
    entries = [_to_entry(position, row) for position, row in enumerate(rows, start=1)]
    logger.info("seed.loaded", path=str(path), titles=len(entries))
    return entries


def build_catalog(entries: Iterable[SeedEntry], settings: Settings | None = None) -> IndexedCatalog:
    """Purchase every seeded copy, then apply checkouts and losses."""
    catalog = IndexedCatalog.from_settings(settings) if settings else IndexedCatalog()
    for entry in entries:
        copies = [catalog.purchase(entry.title) for _ in range(entry.copies)]
        for copy in copies[: entry.checked_out]:
            catalog.checkout(copy)
        for copy in copies[entry.checked_out : entry.checked_out + entry.lost]:
            catalog.lose(copy)
    return catalog


def load_catalog(path: Path, settings: Settings | None = None) -> IndexedCatalog:
    return build_catalog(load_seed(path), settings)


def write_seed(path: Path, entries: Iterable[SeedEntry]) -> None:
    payload = [
        {
            "title": entry.title.text,
            "authors": list(entry.title.authors),
            "year": entry.title.year,
            "copies": entry.copies,
            "checked_out": entry.checked_out,
            "lost": entry.lost,
        }
        for entry in entries
    ]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _read_json_rows(path: Path) -> list[dict[str, Any]]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SeedError(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(payload, list):
        raise SeedError(f"{path}: expected a JSON list of titles")
    return payload


def _read_csv_rows(path: Path) -> list[dict[str, Any]]:
    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        missing = {"title", "authors", "year"} - set(reader.fieldnames or [])
        if missing:
            raise SeedError(f"{path}: missing columns {', '.join(sorted(missing))}")
        rows: list[dict[str, Any]] = []
        for row in reader:
            row = {key: value for key, value in row.items() if value not in (None, "")}
            if "authors" in row:
                row["authors"] = split_authors(row["authors"])
            rows.append(row)
    return rows


def _to_entry(position: int, row: Any) -> SeedEntry:
    if not isinstance(row, dict):
        raise SeedError(f"row {position}: expected an object")
    try:
        authors = row.get("authors") or []
        if isinstance(authors, str):
            authors = split_authors(authors)
        title = Title(text=row.get("title", ""), authors=authors, year=row.get("year", 0))
        return SeedEntry(
            title=title,
            copies=row.get("copies", 1),
            checked_out=row.get("checked_out", 0),
            lost=row.get("lost", 0),
        )
    except ValidationError as exc:
        raise SeedError(f"row {position}: {exc.errors()[0]['msg']}") from exc

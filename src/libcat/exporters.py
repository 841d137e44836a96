"""Inventory and search-result export helpers."""

from __future__ import annotations

import csv
import io
import json

from libcat.models import Title
from libcat.services.catalog import IndexedCatalog
from libcat.services.query import SearchHit

INVENTORY_FIELDS = ["title", "authors", "year", "copies", "available", "checked_out", "lost"]


def inventory_rows(catalog: IndexedCatalog) -> list[dict]:
    store = catalog.store
    titles = set(store.titles()) | {copy.title for copy in store.lost_copies()}
    rows: list[dict] = []
    for title in sorted(titles, key=lambda item: (*item.sort_key, item.year)):
        copies = store.copy_count(title)
        available = len(store.available_copies(title))
        rows.append(
            {
                "title": title.text,
                "authors": list(title.authors),
                "year": title.year,
                "copies": copies,
                "available": available,
                "checked_out": copies - available,
                "lost": len(store.lost_copies(title)),
            }
        )
    return rows


def export_inventory_json(catalog: IndexedCatalog) -> str:
    return json.dumps(inventory_rows(catalog), indent=2)


def export_inventory_csv(catalog: IndexedCatalog) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=INVENTORY_FIELDS)
    writer.writeheader()
    for row in inventory_rows(catalog):
        writer.writerow({**row, "authors": "; ".join(row["authors"])})
    return buffer.getvalue()


def title_to_dict(title: Title) -> dict:
    return {"title": title.text, "authors": list(title.authors), "year": title.year}


def export_hits_json(hits: list[SearchHit]) -> str:
    payload = [
        {**title_to_dict(hit.title), "weight": hit.weight, "score": hit.score}
        for hit in hits
    ]
    return json.dumps(payload, indent=2)

from __future__ import annotations

import pytest

from libcat.log import configure_logging
from libcat.models import Title
from libcat.services.catalog import IndexedCatalog
from libcat.settings import Settings

QUIXOTE = Title("Don Quixote", ["Miguel de Cervantes"], 1612)
TWO_CITIES = Title("A Tale of Two Cities", ["Charles Dickens"], 1859)
PHILOSOPHERS_STONE = Title("Harry Potter and the Philosopher's Stone", ["J.K. Rowling"], 1997)
DEATHLY_HOLLOWS = Title("Harry Potter and the Deathly Hollows", ["J.K. Rowling"], 2007)
HALF_BLOOD_PRINCE = Title("Harry Potter and the Half-Blood Prince", ["J.K. Rowling"], 2005)


@pytest.fixture
def catalog() -> IndexedCatalog:
    return IndexedCatalog()


@pytest.fixture
def shelf(catalog: IndexedCatalog) -> IndexedCatalog:
    """Classics plus two Potter books, with one copy of Don Quixote checked out."""
    copy = catalog.purchase(QUIXOTE)
    for title in (TWO_CITIES, PHILOSOPHERS_STONE, DEATHLY_HOLLOWS):
        catalog.purchase(title)
    catalog.checkout(copy)
    return catalog


@pytest.fixture(autouse=True)
def _quiet_logging() -> None:
    configure_logging(Settings(log_level="WARNING"))

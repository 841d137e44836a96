from datetime import datetime

import pytest
from pydantic import ValidationError

from libcat.models import Condition, Copy, Title


def test_title_equality_is_by_value() -> None:
    first = Title("Don Quixote", ["Miguel de Cervantes"], 1612)
    second = Title("Don Quixote", ("Miguel de Cervantes",), 1612)
    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_title_equality_is_case_and_order_sensitive() -> None:
    base = Title("Good Omens", ["Terry Pratchett", "Neil Gaiman"], 1990)
    assert base != Title("good omens", ["Terry Pratchett", "Neil Gaiman"], 1990)
    assert base != Title("Good Omens", ["Neil Gaiman", "Terry Pratchett"], 1990)
    assert base != Title("Good Omens", ["Terry Pratchett", "Neil Gaiman"], 1991)


def test_title_is_immutable() -> None:
    title = Title("Emma", ["Jane Austen"], 1815)
    with pytest.raises(ValidationError):
        title.year = 1816  # type: ignore[misc]


@pytest.mark.parametrize(
    ("text", "authors", "year"),
    [
        ("   ", ["Jane Austen"], 1815),
        ("Emma", [], 1815),
        ("Emma", ["  ", ""], 1815),
        ("Emma", ["Jane Austen"], 0),
        ("Emma", ["Jane Austen"], datetime.now().year + 1),
    ],
)
def test_title_rejects_invalid_values(text: str, authors: list[str], year: int) -> None:
    with pytest.raises(ValidationError):
        Title(text, authors, year)


def test_title_allows_blank_author_next_to_named_one() -> None:
    title = Title("Emma", ["", "Jane Austen"], 1815)
    assert title.authors == ("", "Jane Austen")


def test_title_str_lists_authors_and_year() -> None:
    title = Title("Good Omens", ["Terry Pratchett", "Neil Gaiman"], 1990)
    assert str(title) == "Good Omens[Terry Pratchett, Neil Gaiman]1990"


def test_copy_identity_is_per_instance() -> None:
    title = Title("Emma", ["Jane Austen"], 1815)
    first, second = Copy(title), Copy(title)
    assert first != second
    assert first == first
    assert len({first, second}) == 2


def test_copy_condition_is_mutable() -> None:
    copy = Copy(Title("Emma", ["Jane Austen"], 1815))
    assert copy.condition is Condition.GOOD
    copy.condition = Condition.DAMAGED
    assert str(copy).endswith("(condition: damaged)")


def test_copy_requires_title() -> None:
    with pytest.raises(TypeError):
        Copy(None)  # type: ignore[arg-type]

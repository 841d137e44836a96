"""Core value objects used throughout the libcat catalog."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Sequence

from pydantic import BaseModel, ConfigDict, field_validator


class Title(BaseModel):
    """Bibliographic facts for a book; immutable and compared by value."""

    model_config = ConfigDict(frozen=True)

    text: str
    authors: tuple[str, ...]
    year: int

    def __init__(self, text: str, authors: Sequence[str], year: int, **data) -> None:
        if isinstance(authors, (list, tuple)):
            authors = tuple(authors)
        super().__init__(text=text, authors=authors, year=year, **data)

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title text must not be blank")
        return value

    @field_validator("authors")
    @classmethod
    def _has_named_author(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("a title needs at least one author")
        if not any(name.strip() for name in value):
            raise ValueError("at least one author name must not be blank")
        return value

    @field_validator("year")
    @classmethod
    def _year_in_range(cls, value: int) -> int:
        current = datetime.now().year
        if value <= 0 or value > current:
            raise ValueError(f"year is out of range: {value}")
        return value

    @property
    def sort_key(self) -> tuple[str, tuple[str, ...]]:
        return (self.text, self.authors)

    def __str__(self) -> str:
        return f"{self.text}[{', '.join(self.authors)}]{self.year}"


class Condition(str, Enum):
    GOOD = "good"
    DAMAGED = "damaged"


@dataclass(eq=False, slots=True)
class Copy:
    """A physical copy of a title. Two copies of one title are distinct."""

    title: Title
    condition: Condition = Condition.GOOD

    def __post_init__(self) -> None:
        if not isinstance(self.title, Title):
            raise TypeError("a copy must reference a Title")

    def __str__(self) -> str:
        return f"{self.title} (condition: {self.condition.value})"

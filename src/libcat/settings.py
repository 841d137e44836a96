"""Configuration helpers for libcat."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from libcat.services.keywords import DEFAULT_STOP_WORDS, normalize_stop_words

TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Runtime configuration loaded from env vars with sensible defaults."""

    log_level: str = "INFO"
    stop_words: frozenset[str] = Field(default_factory=lambda: DEFAULT_STOP_WORDS)
    strict: bool = False
    result_limit: int = 25

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @field_validator("stop_words", mode="before")
    @classmethod
    def _normalize_stop_words(cls, value):
        if isinstance(value, str):
            value = value.split(",")
        return normalize_stop_words(value)

    @classmethod
    def load(cls) -> "Settings":
        load_dotenv()
        stop_words = os.environ.get("LIBCAT_STOP_WORDS")
        return cls(
            log_level=os.environ.get("LIBCAT_LOG_LEVEL", "INFO"),
            stop_words=stop_words if stop_words is not None else DEFAULT_STOP_WORDS,
            strict=os.environ.get("LIBCAT_STRICT", "").strip().lower() in TRUTHY,
            result_limit=int(os.environ.get("LIBCAT_RESULT_LIMIT", "25")),
        )


def get_settings() -> Settings:
    """Convenience accessor for lazy modules."""
    return Settings.load()

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for in-document search."""

from __future__ import annotations

from dataclasses import dataclass, field

from notelens.constants import DEFAULT_CASE_SENSITIVE, DEFAULT_WHOLE_WORD
from notelens.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class SearchOptions(CloneFrozenMixin):
    """Match toggles shown next to the find box."""

    case_sensitive: bool = field(
        default=DEFAULT_CASE_SENSITIVE,
        metadata={
            "help": "Only match text with the same letter case as the query",
            "importance": "core",
        },
    )
    whole_word: bool = field(
        default=DEFAULT_WHOLE_WORD,
        metadata={
            "help": "Only match the query when it is bounded by word boundaries on both sides",
            "importance": "core",
        },
    )


__all__ = ["SearchOptions"]

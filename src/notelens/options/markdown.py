#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Markdown output options for HTML conversion."""

from __future__ import annotations

from dataclasses import dataclass, field

from notelens.constants import (
    DEFAULT_BULLET_MARKER,
    DEFAULT_EMPHASIS_SYMBOL,
    DEFAULT_ESCAPE_SPECIAL,
    DEFAULT_HEADING_STYLE,
    DEFAULT_HORIZONTAL_RULE,
    DEFAULT_STRONG_SYMBOL,
    EmphasisSymbol,
    HeadingStyle,
    StrongSymbol,
)
from notelens.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class MarkdownOptions(CloneFrozenMixin):
    """Markdown syntax choices used by the general-purpose conversion rules.

    Parameters
    ----------
    heading_style : {"atx", "setext"}, default "atx"
        ``# Heading`` or underlined headings. Setext only applies to h1/h2;
        deeper levels always use ATX.
    bullet_marker : str, default "-"
        Marker for unordered list items.
    emphasis_symbol : {"*", "_"}, default "_"
        Delimiter for ``em``/``i``.
    strong_symbol : {"**", "__"}, default "**"
        Delimiter for ``strong``/``b``.
    horizontal_rule : str, default "---"
        Text emitted for ``hr``.
    escape_special : bool, default True
        Backslash-escape text that would otherwise read as Markdown syntax:
        ``\\ ` * _ [ ]`` anywhere, and heading, quote and list markers at
        the start of a block. Code is never escaped.

    """

    escape_special: bool = field(
        default=DEFAULT_ESCAPE_SPECIAL,
        metadata={
            "help": "Escape special Markdown characters (e.g. asterisks) in text content",
            "cli_name": "no-escape-special",
            "importance": "core",
        },
    )
    heading_style: HeadingStyle = field(
        default=DEFAULT_HEADING_STYLE,
        metadata={"help": "Heading syntax", "choices": ["atx", "setext"], "importance": "core"},
    )
    bullet_marker: str = field(
        default=DEFAULT_BULLET_MARKER,
        metadata={"help": "Marker for unordered list items", "importance": "core"},
    )
    emphasis_symbol: EmphasisSymbol = field(
        default=DEFAULT_EMPHASIS_SYMBOL,
        metadata={"help": "Symbol to use for emphasis/italic formatting", "choices": ["*", "_"], "importance": "core"},
    )
    strong_symbol: StrongSymbol = field(
        default=DEFAULT_STRONG_SYMBOL,
        metadata={"help": "Symbol to use for strong/bold formatting", "choices": ["**", "__"], "importance": "core"},
    )
    horizontal_rule: str = field(
        default=DEFAULT_HORIZONTAL_RULE,
        metadata={"help": "Text emitted for thematic breaks", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.heading_style not in ("atx", "setext"):
            raise ValueError(f"heading_style must be 'atx' or 'setext', got {self.heading_style!r}")
        if self.bullet_marker not in ("-", "*", "+"):
            raise ValueError(f"bullet_marker must be one of '-', '*', '+', got {self.bullet_marker!r}")
        if self.emphasis_symbol not in ("*", "_"):
            raise ValueError(f"emphasis_symbol must be '*' or '_', got {self.emphasis_symbol!r}")
        if self.strong_symbol not in ("**", "__"):
            raise ValueError(f"strong_symbol must be '**' or '__', got {self.strong_symbol!r}")
        if not self.horizontal_rule.strip():
            raise ValueError("horizontal_rule cannot be empty")


__all__ = ["MarkdownOptions"]

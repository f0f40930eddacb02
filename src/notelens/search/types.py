#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shared data structures for the search subsystem."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union

from notelens.constants import MATCH_ELEMENT_ID_PREFIX
from notelens.options.search import SearchOptions


@dataclass(frozen=True)
class Query:
    """Raw query text plus the toggles it is compiled with."""

    text: str
    case_sensitive: bool = False
    whole_word: bool = False

    @classmethod
    def from_options(cls, text: str, options: SearchOptions | None = None) -> "Query":
        """Build a query from find-box text and a :class:`SearchOptions`."""
        options = options or SearchOptions()
        return cls(text=text, case_sensitive=options.case_sensitive, whole_word=options.whole_word)

    @property
    def options(self) -> SearchOptions:
        return SearchOptions(case_sensitive=self.case_sensitive, whole_word=self.whole_word)


@dataclass(frozen=True)
class Segment:
    """A contiguous span of a document, classified as matching or not."""

    text: str
    is_match: bool = False


@dataclass(frozen=True)
class TextLeaf:
    """Smallest text-bearing unit of a rendered content tree."""

    text: str


@dataclass(frozen=True)
class MatchSpan:
    """Part of a leaf that matched the query, tagged with its ordinal."""

    text: str
    ordinal: int

    @property
    def element_id(self) -> str:
        return f"{MATCH_ELEMENT_ID_PREFIX}{self.ordinal}"


@dataclass(frozen=True)
class Element:
    """Inline or block wrapper around child nodes (``p``, ``strong``, ``code``...)."""

    tag: str
    children: tuple["ContentNode", ...] = ()
    attrs: Mapping[str, str] = field(default_factory=dict)


ContentNode = Union[TextLeaf, Element, MatchSpan]
ContentTree = Union[TextLeaf, Element]


@dataclass(frozen=True)
class MatchLocator:
    """Opaque handle the view layer uses to find and scroll to a match.

    The same ordinal names the same occurrence in the raw editor and in the
    rendered preview; resolving it to a widget or DOM position is the view's job.
    """

    ordinal: int

    @property
    def element_id(self) -> str:
        return f"{MATCH_ELEMENT_ID_PREFIX}{self.ordinal}"


@dataclass(frozen=True)
class HighlightResult:
    """Highlighted tree output together with the final ordinal cursor."""

    nodes: tuple[ContentNode, ...]
    match_count: int


__all__ = [
    "Query",
    "Segment",
    "TextLeaf",
    "MatchSpan",
    "Element",
    "ContentNode",
    "ContentTree",
    "MatchLocator",
    "HighlightResult",
]

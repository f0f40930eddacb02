#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Compile find-box queries into literal, reusable matchers.

A query is always taken literally: every regex metacharacter is escaped
before the pattern is built, so ``a.b*c`` finds exactly that text. Whole-word
mode anchors the escaped text with ``\\b`` on both sides, and matching is
case-insensitive unless requested otherwise.

Examples
--------
    >>> from notelens.search.query import compile_query
    >>> matcher = compile_query("cat", whole_word=True)
    >>> matcher.count("concatenate cat")
    1

"""

from __future__ import annotations

import logging
import re
from typing import Iterator

from notelens.options.base import validate_options
from notelens.options.search import SearchOptions
from notelens.search.types import Query

logger = logging.getLogger(__name__)


class Matcher:
    """Compiled form of a :class:`Query`.

    A matcher holds no document state and can be applied to any number of
    texts. The pattern is wrapped in a single capturing group so that
    :meth:`split` keeps matched substrings as tokens.

    Parameters
    ----------
    pattern : re.Pattern or None
        Compiled pattern, or None for a matcher that never matches.
    query : Query, optional
        The query this matcher was compiled from.

    """

    __slots__ = ("_pattern", "query")

    def __init__(self, pattern: re.Pattern[str] | None, query: Query | None = None) -> None:
        self._pattern = pattern
        self.query = query

    def __repr__(self) -> str:
        if self._pattern is None:
            return "Matcher(<nothing>)"
        return f"Matcher({self._pattern.pattern!r}, flags={self._pattern.flags!r})"

    @property
    def matches_nothing(self) -> bool:
        return self._pattern is None

    @property
    def pattern(self) -> re.Pattern[str] | None:
        return self._pattern

    def finditer(self, text: str) -> Iterator[re.Match[str]]:
        """Yield non-overlapping matches left to right."""
        if self._pattern is None:
            return iter(())
        return self._pattern.finditer(text)

    def spans(self, text: str) -> list[tuple[int, int]]:
        """Return ``(start, end)`` offsets of every match in *text*."""
        return [match.span() for match in self.finditer(text)]

    def count(self, text: str) -> int:
        """Count non-overlapping matches in *text*."""
        return sum(1 for _ in self.finditer(text))

    def search(self, text: str) -> bool:
        """Return True if *text* contains at least one match."""
        if self._pattern is None:
            return False
        return self._pattern.search(text) is not None

    def fullmatch(self, text: str) -> bool:
        """Return True if the whole of *text* matches the pattern."""
        if self._pattern is None:
            return False
        return self._pattern.fullmatch(text) is not None

    def split(self, text: str) -> list[str]:
        """Split *text* around matches, keeping the matches.

        Matched substrings land at odd indices of the result and the text
        between them at even indices, so ``"".join(result) == text``.
        """
        if self._pattern is None:
            return [text]
        return self._pattern.split(text)


NEVER_MATCHER = Matcher(None)


def build_pattern(text: str, whole_word: bool = False) -> str:
    """Return the literal pattern source for *text*, without flags.

    Parameters
    ----------
    text : str
        Raw query text. Must be non-empty.
    whole_word : bool, default False
        Anchor the pattern with word boundaries on both sides.

    Returns
    -------
    str
        Pattern source wrapped in one capturing group.

    """
    escaped = re.escape(text)
    if whole_word:
        escaped = rf"\b{escaped}\b"
    return f"({escaped})"


def compile_query(
    query: Query | str,
    options: SearchOptions | None = None,
    *,
    case_sensitive: bool | None = None,
    whole_word: bool | None = None,
) -> Matcher:
    """Compile a query into a :class:`Matcher`.

    Parameters
    ----------
    query : Query or str
        A :class:`Query`, or raw query text.
    options : SearchOptions, optional
        Toggles used when *query* is a string. Ignored for :class:`Query`.
    case_sensitive : bool, optional
        Overrides ``options.case_sensitive`` when given.
    whole_word : bool, optional
        Overrides ``options.whole_word`` when given.

    Returns
    -------
    Matcher
        A matcher for the query. Empty query text, or any failure while
        building the pattern, yields a matcher that never matches.

    Raises
    ------
    InvalidOptionsError
        If *options* is not a :class:`SearchOptions`.

    """
    options = validate_options(options, SearchOptions, "compile_query")
    if not isinstance(query, Query):
        query = Query(
            text=query,
            case_sensitive=options.case_sensitive if case_sensitive is None else case_sensitive,
            whole_word=options.whole_word if whole_word is None else whole_word,
        )

    if not query.text:
        return NEVER_MATCHER

    try:
        flags = 0 if query.case_sensitive else re.IGNORECASE
        pattern = re.compile(build_pattern(query.text, whole_word=query.whole_word), flags)
    except (re.error, TypeError, OverflowError, RecursionError) as exc:
        logger.warning("Could not compile search query %r: %s", query.text, exc)
        return Matcher(None, query)

    logger.debug("Compiled search query %r as %r", query.text, pattern.pattern)
    return Matcher(pattern, query)


__all__ = ["Matcher", "NEVER_MATCHER", "build_pattern", "compile_query"]

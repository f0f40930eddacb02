#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Cyclic next/previous navigation over the matches of one document."""

from __future__ import annotations

import logging

from notelens.search.query import Matcher
from notelens.search.segmenter import match_count
from notelens.search.types import MatchLocator

logger = logging.getLogger(__name__)


class MatchNavigator:
    """Track the active match ordinal for the visible document.

    The navigator is owned by exactly one view. Whenever the query, its
    options, or the document change, call :meth:`update` (or :meth:`reset`
    with a precomputed total); both put the cursor back on the first match.

    Parameters
    ----------
    total : int, default 0
        Number of matches in the current document.

    Examples
    --------
        >>> nav = MatchNavigator(total=3)
        >>> [nav.next() for _ in range(3)]
        [1, 2, 0]
        >>> nav.prev()
        2

    """

    def __init__(self, total: int = 0) -> None:
        self._total = max(0, total)
        self._current_index = 0

    def __repr__(self) -> str:
        return f"MatchNavigator(current_index={self._current_index}, total={self._total})"

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def total(self) -> int:
        return self._total

    def reset(self, total: int) -> None:
        """Replace the match total and move back to the first match."""
        self._total = max(0, total)
        self._current_index = 0

    def update(self, content: str, matcher: Matcher) -> int:
        """Recount matches for a new document/query pair and reset.

        Returns
        -------
        int
            The new match total.

        """
        self.reset(match_count(content, matcher))
        logger.debug("Navigator reset with %d matches", self._total)
        return self._total

    def next(self) -> int:
        """Advance to the following match, wrapping to the first."""
        if self._total > 0:
            self._current_index = (self._current_index + 1) % self._total
        return self._current_index

    def prev(self) -> int:
        """Step back to the preceding match, wrapping to the last."""
        if self._total > 0:
            self._current_index = (self._current_index - 1 + self._total) % self._total
        return self._current_index

    def locator_for(self, index: int) -> MatchLocator | None:
        """Return the locator for match *index*, or None if it does not exist."""
        if 0 <= index < self._total:
            return MatchLocator(ordinal=index)
        return None

    @property
    def current_locator(self) -> MatchLocator | None:
        return self.locator_for(self._current_index)

    @property
    def position_label(self) -> str:
        """Counter text for the find bar, e.g. ``"2/5"``, or ``"0"`` with no matches."""
        if self._total == 0:
            return "0"
        return f"{self._current_index + 1}/{self._total}"


__all__ = ["MatchNavigator"]

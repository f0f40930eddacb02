#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command entry points for a view's find bar.

A host editor creates one :class:`SearchSession` per visible document view
and forwards its UI events to it: ``on_query_changed`` from the find box,
``on_options_changed`` from the case/whole-word toggles,
``on_document_changed`` when the note or its text changes, and
``on_navigate`` from the next/previous buttons. The session recompiles the
query, recounts matches and hands back a locator to scroll to; it never runs
timers or background work.
"""

from __future__ import annotations

import logging

from notelens.constants import NavigationDirection
from notelens.exceptions import ValidationError
from notelens.options.base import validate_options
from notelens.options.search import SearchOptions
from notelens.search.navigator import MatchNavigator
from notelens.search.query import Matcher, compile_query
from notelens.search.segmenter import number_segments, segment
from notelens.search.tree import highlight_tree, text_content
from notelens.search.types import ContentTree, HighlightResult, MatchLocator, MatchSpan, Query, Segment, TextLeaf

logger = logging.getLogger(__name__)


class SearchSession:
    """Search state for the active document view.

    Parameters
    ----------
    content : str, default ""
        Raw document text.
    tree : ContentTree, optional
        Rendered preview tree for the same document.
    options : SearchOptions, optional
        Initial case/whole-word toggles.

    """

    def __init__(
        self,
        content: str = "",
        tree: ContentTree | None = None,
        options: SearchOptions | None = None,
    ) -> None:
        self._query = Query.from_options("", validate_options(options, SearchOptions, "SearchSession"))
        self._content = content
        self._tree = tree
        self._matcher: Matcher = compile_query(self._query)
        self.navigator = MatchNavigator()

    @property
    def query(self) -> Query:
        return self._query

    @property
    def matcher(self) -> Matcher:
        return self._matcher

    @property
    def content(self) -> str:
        return self._content

    @property
    def tree(self) -> ContentTree | None:
        return self._tree

    @property
    def total(self) -> int:
        return self.navigator.total

    @property
    def current_locator(self) -> MatchLocator | None:
        return self.navigator.current_locator

    def on_query_changed(self, text: str) -> int:
        """Recompile for new find-box text. Returns the new match total."""
        return self._set_query(Query(text, self._query.case_sensitive, self._query.whole_word))

    def on_options_changed(self, case_sensitive: bool | None = None, whole_word: bool | None = None) -> int:
        """Apply toggle changes. Returns the new match total."""
        return self._set_query(
            Query(
                self._query.text,
                self._query.case_sensitive if case_sensitive is None else case_sensitive,
                self._query.whole_word if whole_word is None else whole_word,
            )
        )

    def on_document_changed(self, content: str, tree: ContentTree | None = None) -> int:
        """Switch to new document text (and preview tree). Returns the new match total."""
        self._content = content
        self._tree = tree
        if tree is not None and text_content(tree) != content:
            logger.debug("Preview text differs from raw text; match ordinals may not line up")
        return self.navigator.update(self._content, self._matcher)

    def on_navigate(self, direction: NavigationDirection) -> MatchLocator | None:
        """Move to the next or previous match and return its locator.

        Raises
        ------
        ValidationError
            If *direction* is not ``"next"`` or ``"prev"``.

        """
        if direction == "next":
            self.navigator.next()
        elif direction == "prev":
            self.navigator.prev()
        else:
            raise ValidationError(
                f"Unknown navigation direction: {direction!r}",
                parameter_name="direction",
                parameter_value=direction,
            )
        return self.navigator.current_locator

    def segments(self) -> list[Segment]:
        """Raw-editor rendering of the current document."""
        return segment(self._content, self._matcher)

    def numbered_segments(self) -> list[TextLeaf | MatchSpan]:
        """Raw-editor rendering with each match tagged by ordinal."""
        nodes, _ = number_segments(self._content, self._matcher)
        return nodes

    def highlighted_tree(self) -> HighlightResult | None:
        """Preview rendering, or None when no preview tree was supplied."""
        if self._tree is None:
            return None
        return highlight_tree(self._tree, self._matcher)

    def _set_query(self, query: Query) -> int:
        if query != self._query:
            self._query = query
            self._matcher = compile_query(query)
        return self.navigator.update(self._content, self._matcher)


__all__ = ["SearchSession"]

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""In-document search and highlighting.

The same compiled :class:`Matcher` drives both the raw editor
(:func:`segment`) and the rendered preview (:func:`highlight_tree`), so a
match ordinal names the same occurrence in either view.
"""

from __future__ import annotations

from notelens.search.navigator import MatchNavigator
from notelens.search.notes import TieredResults, filter_notes, tiered_search
from notelens.search.query import NEVER_MATCHER, Matcher, compile_query
from notelens.search.segmenter import match_count, number_segments, segment
from notelens.search.session import SearchSession
from notelens.search.tree import (
    TreeHighlighter,
    content_tree_from_html,
    highlight_tree,
    iter_matches,
    render_highlighted_html,
    text_content,
)
from notelens.search.types import (
    ContentNode,
    ContentTree,
    Element,
    HighlightResult,
    MatchLocator,
    MatchSpan,
    Query,
    Segment,
    TextLeaf,
)

__all__ = [
    "ContentNode",
    "ContentTree",
    "Element",
    "HighlightResult",
    "MatchLocator",
    "MatchNavigator",
    "MatchSpan",
    "Matcher",
    "NEVER_MATCHER",
    "Query",
    "SearchSession",
    "Segment",
    "TextLeaf",
    "TieredResults",
    "TreeHighlighter",
    "compile_query",
    "content_tree_from_html",
    "filter_notes",
    "highlight_tree",
    "iter_matches",
    "match_count",
    "number_segments",
    "render_highlighted_html",
    "segment",
    "text_content",
    "tiered_search",
]

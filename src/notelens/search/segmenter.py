#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Partition document text into matching and non-matching segments.

The raw editor draws its highlight backdrop from :func:`segment`; the preview
runs the same function over each text leaf. Both number matches with
:func:`number_segments` so ordinals line up between the two views.
"""

from __future__ import annotations

from notelens.search.query import Matcher
from notelens.search.types import MatchSpan, Segment, TextLeaf


def segment(content: str, matcher: Matcher) -> list[Segment]:
    """Split *content* into ordered match/non-match segments.

    Parameters
    ----------
    content : str
        Document text.
    matcher : Matcher
        Compiled query.

    Returns
    -------
    list[Segment]
        Segments whose concatenation equals *content*. When nothing matches
        (including the empty query) this is a single non-matching segment
        spanning the whole text.

    Notes
    -----
    A capturing split places matched tokens at odd indices. Tokens are
    classified by that position rather than by re-testing them in isolation:
    with word-boundary anchors a token that matched in context can fail to
    match on its own (whole-word ``" x"`` in ``"a x"``).

    """
    segments = [
        Segment(text=token, is_match=index % 2 == 1)
        for index, token in enumerate(matcher.split(content))
        if token
    ]
    if not segments:
        return [Segment(text=content, is_match=False)]
    return segments


def match_count(content: str, matcher: Matcher) -> int:
    """Count non-overlapping matches of *matcher* in *content*."""
    return matcher.count(content)


def number_segments(
    content: str, matcher: Matcher, start: int = 0
) -> tuple[list[TextLeaf | MatchSpan], int]:
    """Segment *content* and tag every match with a running ordinal.

    Parameters
    ----------
    content : str
        Text to segment.
    matcher : Matcher
        Compiled query.
    start : int, default 0
        Ordinal assigned to the first match.

    Returns
    -------
    tuple[list[TextLeaf | MatchSpan], int]
        Plain leaves interleaved with numbered match spans, and the ordinal
        the next match should receive.

    """
    cursor = start
    nodes: list[TextLeaf | MatchSpan] = []
    for part in segment(content, matcher):
        if part.is_match:
            nodes.append(MatchSpan(text=part.text, ordinal=cursor))
            cursor += 1
        elif part.text:
            nodes.append(TextLeaf(text=part.text))
    return nodes, cursor


__all__ = ["segment", "match_count", "number_segments"]

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Highlight query matches inside a rendered content tree.

The preview shows a tree of rendered nodes rather than raw text. This module
runs the same segmentation as the raw editor over every text leaf and tags
each match with an ordinal, threading a cursor through the traversal so that
numbering continues across leaves in document order.

Numbering agrees with the raw editor when the leaves of the tree,
concatenated in traversal order, equal the raw document text. Renderers that
drop, reorder or add text (list markers, heading hashes, decorative glyphs)
break that precondition and numbering may drift; :func:`text_content` lets
callers check it.

Matches never cross a leaf boundary. A query spanning into or out of bold
text, for example, is not found in the preview.

Examples
--------
    >>> from notelens.search.query import compile_query
    >>> tree = Element("p", (TextLeaf("one "), Element("em", (TextLeaf("one"),))))
    >>> result = highlight_tree(tree, compile_query("one"))
    >>> result.match_count
    2

"""

from __future__ import annotations

import logging
from html import escape
from typing import Any, Iterable, Iterator

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction

from notelens.constants import MATCH_CSS_CLASS, STRIPPED_TAGS
from notelens.search.query import Matcher
from notelens.search.segmenter import number_segments
from notelens.search.types import ContentNode, ContentTree, Element, HighlightResult, MatchSpan, TextLeaf

logger = logging.getLogger(__name__)

_SKIPPED_STRINGS = (Comment, Doctype, Declaration, ProcessingInstruction, CData)
_VOID_TAGS = frozenset({"br", "hr", "img", "wbr", "input", "col", "area", "source"})


class TreeHighlighter:
    """Apply a matcher to the text leaves of a content tree.

    Parameters
    ----------
    matcher : Matcher
        Compiled query, shared with the raw editor.

    """

    def __init__(self, matcher: Matcher) -> None:
        self.matcher = matcher

    def highlight(self, node: ContentNode, cursor: int = 0) -> tuple[list[ContentNode], int]:
        """Highlight *node* and everything below it.

        Parameters
        ----------
        node : ContentNode
            Subtree to highlight.
        cursor : int, default 0
            Ordinal for the first match found in this subtree.

        Returns
        -------
        tuple[list[ContentNode], int]
            Replacement nodes for *node* and the advanced cursor. A leaf may
            expand into several nodes; an element always maps to one.

        """
        if isinstance(node, (TextLeaf, MatchSpan)):
            nodes, cursor = number_segments(node.text, self.matcher, cursor)
            return list(nodes), cursor

        # Open elements with their child iterators and rebuilt children
        stack: list[tuple[Element, Iterator[ContentNode], list[ContentNode]]] = [(node, iter(node.children), [])]
        while True:
            element, children, rebuilt = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                replaced = Element(tag=element.tag, children=tuple(rebuilt), attrs=element.attrs)
                if not stack:
                    return [replaced], cursor
                stack[-1][2].append(replaced)
            elif isinstance(child, (TextLeaf, MatchSpan)):
                nodes, cursor = number_segments(child.text, self.matcher, cursor)
                rebuilt.extend(nodes)
            else:
                stack.append((child, iter(child.children), []))


def highlight_tree(root: ContentTree, matcher: Matcher, start: int = 0) -> HighlightResult:
    """Highlight a whole tree, numbering matches from *start*.

    Returns
    -------
    HighlightResult
        The replacement nodes for *root* and the number of matches tagged.

    """
    nodes, cursor = TreeHighlighter(matcher).highlight(root, start)
    logger.debug("Highlighted %d matches in preview tree", cursor - start)
    return HighlightResult(nodes=tuple(nodes), match_count=cursor - start)


def _walk(nodes: Iterable[ContentNode]) -> Iterator[ContentNode]:
    """Yield every node below *nodes* in document order, without recursion."""
    stack = list(nodes)[::-1]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Element):
            stack.extend(reversed(node.children))


def text_content(node: ContentNode) -> str:
    """Concatenate the text of every leaf below *node* in traversal order."""
    return "".join(leaf.text for leaf in _walk([node]) if isinstance(leaf, (TextLeaf, MatchSpan)))


def iter_matches(nodes: Iterable[ContentNode]) -> Iterable[MatchSpan]:
    """Yield match spans in document order."""
    return (node for node in _walk(nodes) if isinstance(node, MatchSpan))


def content_tree_from_html(html: str, root_tag: str = "div") -> Element:
    """Build a content tree from rendered preview HTML.

    Comments, doctypes and non-content elements (``script``, ``style``...)
    are dropped; every other element and string is kept in order.

    Parameters
    ----------
    html : str
        Rendered preview HTML.
    root_tag : str, default "div"
        Tag of the element wrapping the parsed fragment.

    """
    soup = BeautifulSoup(html, "html.parser")
    # Elements are immutable, so each one is built once its children are done
    stack: list[tuple[Any, Iterator[Any], list[ContentTree]]] = [(soup, iter(soup.children), [])]
    while True:
        tag, children, converted = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            if not stack:
                return Element(tag=root_tag, children=tuple(converted))
            stack[-1][2].append(Element(tag=tag.name, children=tuple(converted), attrs=_flatten_attrs(tag.attrs)))
        elif isinstance(child, _SKIPPED_STRINGS):
            continue
        elif isinstance(child, NavigableString):
            if str(child):
                converted.append(TextLeaf(text=str(child)))
        elif isinstance(child, Tag) and child.name not in STRIPPED_TAGS:
            stack.append((child, iter(child.children), []))


def _flatten_attrs(attrs: dict[str, Any]) -> dict[str, str]:
    # bs4 returns multi-valued attributes such as class as lists
    return {name: " ".join(value) if isinstance(value, list) else str(value) for name, value in attrs.items()}


def render_highlighted_html(nodes: Iterable[ContentNode]) -> str:
    """Serialize highlighted nodes back to HTML.

    Each match becomes ``<mark class="search-match" id="match-N" data-match="N">``
    so the view layer can look it up by ordinal.
    """
    parts: list[str] = []
    # Closing tags are pushed as plain strings between an element's children
    stack: list[ContentNode | str] = list(nodes)[::-1]
    while stack:
        node = stack.pop()
        if isinstance(node, str):
            parts.append(node)
        elif isinstance(node, TextLeaf):
            parts.append(escape(node.text, quote=False))
        elif isinstance(node, MatchSpan):
            parts.append(
                f'<mark class="{MATCH_CSS_CLASS}" id="{node.element_id}" data-match="{node.ordinal}">'
                f"{escape(node.text, quote=False)}</mark>"
            )
        else:
            attrs = "".join(f' {name}="{escape(value)}"' for name, value in node.attrs.items())
            parts.append(f"<{node.tag}{attrs}>")
            if node.tag not in _VOID_TAGS:
                stack.append(f"</{node.tag}>")
                stack.extend(reversed(node.children))
    return "".join(parts)


__all__ = [
    "TreeHighlighter",
    "highlight_tree",
    "text_content",
    "iter_matches",
    "content_tree_from_html",
    "render_highlighted_html",
]

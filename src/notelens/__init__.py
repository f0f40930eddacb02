"""notelens - search highlighting and clipboard Markdown for a note editor.

A note is shown in two renderings: a raw Markdown editor and a rendered
preview. notelens keeps find-in-note results consistent between them and
converts clipboard HTML to canonical Markdown.

Key Features
------------
- Literal, case/whole-word aware query compilation that never raises
- Text segmentation whose segments always reassemble the original document
- Preview tree highlighting with match ordinals shared with the raw editor
- Cyclic next/previous match navigation
- Rule-table HTML to Markdown conversion with code-editor paste detection
- Copy/paste entry points producing plain-text and HTML clipboard payloads

Examples
--------
Search the raw text and the preview with one matcher:

    >>> from notelens import compile_query, segment
    >>> matcher = compile_query("cat", whole_word=True)
    >>> [s.text for s in segment("cat concatenate", matcher) if s.is_match]
    ['cat']

Convert pasted HTML:

    >>> from notelens import html_to_markdown
    >>> html_to_markdown("<p>Hello <strong>world</strong></p>")
    'Hello **world**'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from notelens.clipboard import Clipboard, ClipboardPayload, PasteResult
from notelens.exceptions import InvalidOptionsError, NotelensError, ValidationError
from notelens.html2markdown import ConversionRule, HtmlToMarkdownConverter, html_to_markdown
from notelens.markdown2html import markdown_to_html
from notelens.options import ClipboardOptions, MarkdownOptions, SearchOptions
from notelens.search import (
    Element,
    MatchLocator,
    MatchNavigator,
    MatchSpan,
    Matcher,
    Query,
    SearchSession,
    Segment,
    TextLeaf,
    TreeHighlighter,
    compile_query,
    highlight_tree,
    match_count,
    segment,
)

__version__ = "0.1.0"

__all__ = [
    "Clipboard",
    "ClipboardOptions",
    "ClipboardPayload",
    "ConversionRule",
    "Element",
    "HtmlToMarkdownConverter",
    "InvalidOptionsError",
    "MarkdownOptions",
    "MatchLocator",
    "MatchNavigator",
    "MatchSpan",
    "Matcher",
    "NotelensError",
    "PasteResult",
    "Query",
    "SearchOptions",
    "SearchSession",
    "Segment",
    "TextLeaf",
    "TreeHighlighter",
    "ValidationError",
    "compile_query",
    "highlight_tree",
    "html_to_markdown",
    "markdown_to_html",
    "match_count",
    "segment",
]

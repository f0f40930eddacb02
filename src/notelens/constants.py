#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for notelens.

This module centralizes hardcoded values and default configuration constants
used by the search engine and the clipboard conversion pipeline.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Search Defaults - Query option defaults and match element naming
3. Markdown Formatting - Markdown output settings for HTML conversion
4. Clipboard Heuristics - Signals used to classify pasted HTML
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

HeadingStyle = Literal["atx", "setext"]
EmphasisSymbol = Literal["*", "_"]
StrongSymbol = Literal["**", "__"]
NavigationDirection = Literal["next", "prev"]

# =============================================================================
# Search Defaults
# =============================================================================

DEFAULT_CASE_SENSITIVE = False
DEFAULT_WHOLE_WORD = False

# Prefix for the element id the view layer uses to look up a match
MATCH_ELEMENT_ID_PREFIX = "match-"
MATCH_CSS_CLASS = "search-match"

# Notes shorter than this whose first line matches are treated as titles
SHORT_NOTE_TITLE_LENGTH = 50

# =============================================================================
# Markdown Formatting
# =============================================================================

DEFAULT_HEADING_STYLE: HeadingStyle = "atx"
DEFAULT_BULLET_MARKER = "-"
DEFAULT_EMPHASIS_SYMBOL: EmphasisSymbol = "_"
DEFAULT_STRONG_SYMBOL: StrongSymbol = "**"
DEFAULT_HORIZONTAL_RULE = "---"
DEFAULT_ESCAPE_SPECIAL = True
CODE_FENCE = "```"

# Non-breaking space in literal and entity forms. Parsers accept the entities
# without a trailing semicolon; &#1600; and &#xa00; are other characters.
NBSP_CHAR = "\u00a0"
NBSP_ENTITY_PATTERN = re.compile(r"&(?:nbsp|#0*160(?!\d)|#x0*a0(?![0-9a-f]));?", re.IGNORECASE)

# Escaped with a backslash wherever they appear in converted text
MARKDOWN_SPECIAL_CHARS = "\\`*_[]"

# Escaped only at the start of a block, where they would begin block syntax
LINE_START_ESCAPES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^(#{1,6})(?= |$)"), r"\\\1"),
    (re.compile(r"^>"), r"\\>"),
    (re.compile(r"^-"), r"\\-"),
    (re.compile(r"^\+(?= |$)"), r"\\+"),
    (re.compile(r"^(\d+)([.)])(?= |$)"), r"\1\\\2"),
)

LANGUAGE_CLASS_PATTERN = re.compile(r"language-(\w+)")

# Runs of three or more newlines collapse to one blank line
EXCESS_NEWLINES_PATTERN = re.compile(r"\n{3,}")

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
STRIPPED_TAGS = frozenset({"script", "style", "head", "title", "meta", "link", "noscript", "template"})

# =============================================================================
# Clipboard Heuristics
# =============================================================================

# Class name fragments emitted by common code editors and highlighters
DEFAULT_CODE_EDITOR_CLASSES: tuple[str, ...] = ("monaco", "vscode", "ace_", "hljs")

# Font families that mark a block as monospaced code
DEFAULT_MONOSPACE_FONTS: tuple[str, ...] = ("monospace", "Courier", "Consolas")

RICH_CONTENT_PATTERN = re.compile(
    r"<(?:p|h[1-6]|ul|ol|li|table|tr|td|blockquote|pre|code|strong|em|b|i)\b",
    re.IGNORECASE,
)
CODE_INDICATOR_PATTERN = re.compile(r"monospace|monaco|vscode|consolas|courier|hljs|ace_", re.IGNORECASE)

DEFAULT_COPY_WRAPPER_STYLE: str | None = None

# Elements rendered as blocks; whitespace next to them is insignificant
BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "body", "dd", "details", "dialog", "div", "dl", "dt",
        "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "header",
        "hgroup", "hr", "html", "li", "main", "nav", "ol", "p", "pre", "section", "summary", "table", "tbody",
        "td", "tfoot", "th", "thead", "tr", "ul", "[document]",
    }
)

# Containers whose whitespace-only text children are formatting noise
STRUCTURAL_TAGS = frozenset({"table", "thead", "tbody", "tfoot", "tr", "ul", "ol", "dl"})

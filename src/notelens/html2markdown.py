"""HTML to Markdown conversion for clipboard interchange.

This module turns HTML fragments, as found on the clipboard or cloned from a
preview selection, into canonical Markdown. Conversion is driven by an ordered
table of :class:`ConversionRule` entries; for every element the first rule
whose predicate accepts it produces that element's Markdown from the already
rendered Markdown of its children.

Rule Order
----------
1. ``code`` directly inside ``pre``: raw text, left for the ``pre`` rule
2. Any other ``code``: trimmed and wrapped in backticks
3. ``pre``: fenced block, language taken from ``language-<name>`` classes
4. ``div``/``pre`` carrying code-editor classes or monospace fonts: fenced block
5. ``mark``: unwrapped
6. ``span``: unwrapped
7. ``p``: trimmed, separated by blank lines, dropped when empty
8. General rules: headings, lists, GFM tables, emphasis, strikethrough,
   links, images, blockquotes, rules and line breaks

Processing Steps
----------------
- Non-breaking spaces, literal or as entities, become ordinary spaces before
  parsing.
- The fragment is parsed with BeautifulSoup and converted bottom-up.
- Text outside code is backslash-escaped where it would otherwise read as
  Markdown syntax (see :func:`escape_markdown`).
- Trailing whitespace is stripped from every line, runs of three or more
  newlines collapse to a single blank line, and the result is trimmed.

Conversion never raises for unusual HTML. Unknown elements pass their content
through, and a rule that fails logs a warning and falls back to the element's
text.

Dependencies
------------
- beautifulsoup4: For HTML parsing and DOM traversal

Examples
--------
    >>> from notelens.html2markdown import html_to_markdown
    >>> html_to_markdown("<p>Hello <strong>world</strong></p>")
    'Hello **world**'
    >>> html_to_markdown('<pre><code class="language-python">x=1</code></pre>')
    '```python\\nx=1\\n```'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache, partial
from typing import Any, Callable, Iterator

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction

from notelens.constants import (
    BLOCK_TAGS,
    CODE_FENCE,
    EXCESS_NEWLINES_PATTERN,
    HEADING_TAGS,
    LANGUAGE_CLASS_PATTERN,
    LINE_START_ESCAPES,
    MARKDOWN_SPECIAL_CHARS,
    NBSP_CHAR,
    NBSP_ENTITY_PATTERN,
    STRIPPED_TAGS,
    STRUCTURAL_TAGS,
)
from notelens.exceptions import ValidationError
from notelens.options.base import validate_options
from notelens.options.clipboard import ClipboardOptions
from notelens.options.markdown import MarkdownOptions

logger = logging.getLogger(__name__)

_SKIPPED_STRINGS = (Comment, Doctype, Declaration, ProcessingInstruction, CData)
_WHITESPACE_RUN = re.compile(r"[ \t\r\n\f]+")
_BACKTICK_RUN = re.compile(r"`+")
_TASK_PREFIX = re.compile(r"^(\[[ x]\]) +")
_CODE_LINE_TAGS = frozenset({"div", "p", "pre", "li", "tr"})
_CONTAINER_TAGS = BLOCK_TAGS - HEADING_TAGS - {"p", "pre", "ul", "ol", "li", "blockquote", "hr", "table"}
_TABLE_SECTION_TAGS = frozenset({"thead", "tbody", "tfoot"})

Predicate = Callable[[Tag], bool]
Transform = Callable[[Tag, str], str]


@dataclass(frozen=True)
class ConversionRule:
    """One entry of the conversion rule table.

    Parameters
    ----------
    name : str
        Identifier used in log messages.
    predicate : callable
        ``predicate(node) -> bool``; True when this rule handles *node*.
    transform : callable
        ``transform(node, rendered_children) -> str``; Markdown for *node*.

    """

    name: str
    predicate: Predicate
    transform: Transform


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _class_string(node: Tag) -> str:
    value = node.get("class") or ""
    return " ".join(value) if isinstance(value, list) else str(value)


def _has_ancestor(node: Tag, name: str) -> bool:
    return node.find_parent(name) is not None


def _is_block_boundary(sibling: Any, parent: Any) -> bool:
    if sibling is None:
        return parent is None or getattr(parent, "name", None) in BLOCK_TAGS
    if isinstance(sibling, Tag):
        return sibling.name in BLOCK_TAGS or sibling.name == "br"
    return False


def _starts_block(node: Any) -> bool:
    """Return True when nothing is rendered between *node* and the start of its block."""
    current = node
    while current is not None:
        sibling = current.previous_sibling
        while isinstance(sibling, _SKIPPED_STRINGS) or (isinstance(sibling, NavigableString) and not sibling.strip()):
            sibling = sibling.previous_sibling
        if sibling is not None:
            return isinstance(sibling, Tag) and (sibling.name in BLOCK_TAGS or sibling.name == "br")
        parent = current.parent
        if parent is None or parent.name in BLOCK_TAGS:
            return True
        current = parent
    return True


def _text_of(node: Tag) -> str:
    # Entities missed by preprocessing are decoded to NBSP by the parser
    return node.get_text().replace(NBSP_CHAR, " ")


def escape_markdown(text: str, at_block_start: bool = False) -> str:
    r"""Backslash-escape characters that would read as Markdown syntax.

    Parameters
    ----------
    text : str
        Plain text taken from the HTML.
    at_block_start : bool, default False
        Also escape heading, blockquote and list markers at the start of
        *text*, which only begin block syntax there.

    Examples
    --------
        >>> escape_markdown("*not* emphasis")
        '\\*not\\* emphasis'
        >>> escape_markdown("1. item", at_block_start=True)
        '1\\. item'

    """
    # Backslashes first so the escapes added below are not doubled
    for char in MARKDOWN_SPECIAL_CHARS:
        text = text.replace(char, f"\\{char}")
    if at_block_start:
        body = text.lstrip()
        for pattern, replacement in LINE_START_ESCAPES:
            body = pattern.sub(replacement, body)
        text = text[: len(text) - len(text.lstrip())] + body
    return text


def _wrap_inline(content: str, delimiter: str) -> str:
    """Wrap *content* in *delimiter*, keeping surrounding whitespace outside."""
    core = content.strip()
    if not core:
        return content
    leading = content[: len(content) - len(content.lstrip())]
    trailing = content[len(content.rstrip()) :]
    return f"{leading}{delimiter}{core}{delimiter}{trailing}"


def _fence_for(code: str) -> str:
    longest = max((len(run) for run in _BACKTICK_RUN.findall(code)), default=0)
    return CODE_FENCE if longest < len(CODE_FENCE) else "`" * (longest + 1)


def _fenced_block(code: str, language: str = "") -> str:
    code = code.strip()
    fence = _fence_for(code)
    return f"\n\n{fence}{language}\n{code}\n{fence}\n\n"


def _code_text(node: Tag, parts: list[str]) -> list[str]:
    """Collect the text of a code-editor block, one line per line element."""
    for child in node.children:
        if isinstance(child, _SKIPPED_STRINGS):
            continue
        if isinstance(child, NavigableString):
            text = str(child).replace(NBSP_CHAR, " ")
            # Pretty-printed markup between line elements
            if not text.strip() and "\n" in text:
                continue
            parts.append(text)
        elif isinstance(child, Tag):
            if child.name == "br":
                parts.append("\n")
            elif child.name in _CODE_LINE_TAGS:
                if parts and not parts[-1].endswith("\n"):
                    parts.append("\n")
                _code_text(child, parts)
                if not parts or not parts[-1].endswith("\n"):
                    parts.append("\n")
            elif child.name not in STRIPPED_TAGS:
                _code_text(child, parts)
    return parts


# ---------------------------------------------------------------------------
# Rules 1-7: code handling, unwrapping and paragraphs
# ---------------------------------------------------------------------------


def _is_code_in_pre(node: Tag) -> bool:
    return node.name == "code" and node.parent is not None and node.parent.name == "pre"


def _code_in_pre(node: Tag, content: str) -> str:
    return _text_of(node)


def _is_inline_code(node: Tag) -> bool:
    return node.name == "code"


def _inline_code(node: Tag, content: str) -> str:
    code = _text_of(node).strip()
    if not code:
        return ""
    if "`" not in code:
        return f"`{code}`"
    fence = "`" * (max(len(run) for run in _BACKTICK_RUN.findall(code)) + 1)
    return f"{fence} {code} {fence}"


def _is_pre(node: Tag) -> bool:
    return node.name == "pre"


def _pre_block(node: Tag, content: str) -> str:
    code_child = node.find("code")
    classes = _class_string(node) + " " + (_class_string(code_child) if isinstance(code_child, Tag) else "")
    match = LANGUAGE_CLASS_PATTERN.search(classes)
    return _fenced_block(content, match.group(1) if match else "")


def _is_code_editor_block(node: Tag, options: ClipboardOptions) -> bool:
    if node.name not in ("div", "pre"):
        return False
    class_name = _class_string(node).lower()
    style = str(node.get("style") or "").lower()
    if any(fragment.lower() in class_name for fragment in options.code_editor_classes):
        return True
    return any(font.lower() in style for font in options.monospace_fonts)


def _code_editor_block(node: Tag, content: str) -> str:
    return _fenced_block("".join(_code_text(node, [])))


def _is_tag(node: Tag, names: frozenset[str]) -> bool:
    return node.name in names


def _unwrap(node: Tag, content: str) -> str:
    return content


def _paragraph(node: Tag, content: str) -> str:
    trimmed = content.strip()
    return f"\n\n{trimmed}\n\n" if trimmed else ""


# ---------------------------------------------------------------------------
# Rule 8: general-purpose HTML
# ---------------------------------------------------------------------------


def _dropped(node: Tag, content: str) -> str:
    return ""


def _heading(node: Tag, content: str, options: MarkdownOptions) -> str:
    text = " ".join(content.split())
    if not text:
        return ""
    level = int(node.name[1])
    if options.heading_style == "setext" and level <= 2:
        underline = "=" if level == 1 else "-"
        return f"\n\n{text}\n{underline * len(text)}\n\n"
    return f"\n\n{'#' * level} {text}\n\n"


def _list(node: Tag, content: str) -> str:
    body = content.strip("\n")
    if node.parent is not None and node.parent.name == "li":
        return f"\n{body}\n"
    return f"\n\n{body}\n\n"


def _list_item(node: Tag, content: str, options: MarkdownOptions) -> str:
    parent = node.parent
    if parent is not None and parent.name == "ol":
        try:
            start = int(str(parent.get("start", 1)))
        except ValueError:
            start = 1
        index = len(node.find_previous_siblings("li"))
        marker = f"{start + index}. "
    else:
        marker = f"{options.bullet_marker} "

    body = _TASK_PREFIX.sub(r"\1 ", content.strip())
    if not body:
        return marker.rstrip() + "\n"
    indent = " " * len(marker)
    lines = body.split("\n")
    continued = [f"{indent}{line}" if line.strip() else "" for line in lines[1:]]
    return marker + "\n".join([lines[0], *continued]) + "\n"


def _is_checkbox(node: Tag) -> bool:
    return node.name == "input" and str(node.get("type", "")).lower() == "checkbox" and _has_ancestor(node, "li")


def _checkbox(node: Tag, content: str) -> str:
    return "[x] " if node.has_attr("checked") else "[ ] "


def _cell_alignment(cell: Tag) -> str:
    align = str(cell.get("align") or "").lower()
    if not align:
        style = str(cell.get("style") or "").lower().replace(" ", "")
        if match := re.search(r"text-align:(left|right|center)", style):
            align = match.group(1)
    return {"left": ":---", "right": "---:", "center": ":---:"}.get(align, "---")


def _table_cell(node: Tag, content: str) -> str:
    text = " ".join(content.split()).replace("|", "\\|")
    first = node.find_previous_sibling(["td", "th"]) is None
    prefix = "| " if first else " "
    return f"{prefix}{text} |"


def _table_row(node: Tag, content: str) -> str:
    row = f"\n{content}"
    table = node.find_parent("table")
    if table is not None and table.find("tr") is node:
        cells = node.find_all(["td", "th"], recursive=False)
        if cells:
            row += "\n| " + " | ".join(_cell_alignment(cell) for cell in cells) + " |"
    return row


def _table(node: Tag, content: str) -> str:
    body = "\n".join(line for line in content.split("\n") if line.strip())
    return f"\n\n{body}\n\n" if body else ""


def _blockquote(node: Tag, content: str) -> str:
    body = EXCESS_NEWLINES_PATTERN.sub("\n\n", content.strip())
    if not body:
        return ""
    quoted = "\n".join(f"> {line}" if line.strip() else ">" for line in body.split("\n"))
    return f"\n\n{quoted}\n\n"


def _inline_delimited(node: Tag, content: str, delimiter: str) -> str:
    if _has_ancestor(node, "pre"):
        return content
    return _wrap_inline(content, delimiter)


def _link(node: Tag, content: str) -> str:
    text = " ".join(content.split())
    href = str(node.get("href") or "").strip()
    if not href or _has_ancestor(node, "pre"):
        return content
    title = node.get("title")
    if title:
        escaped_title = str(title).replace('"', '\\"')
        return f'[{text}]({href} "{escaped_title}")'
    return f"[{text}]({href})"


def _image(node: Tag, content: str) -> str:
    src = str(node.get("src") or "").strip()
    if not src:
        return ""
    alt = " ".join(str(node.get("alt") or "").split())
    title = node.get("title")
    title_part = f' "{title}"' if title else ""
    return f"![{alt}]({src}{title_part})"


def _line_break(node: Tag, content: str) -> str:
    return "\n"


def _horizontal_rule(node: Tag, content: str, options: MarkdownOptions) -> str:
    return f"\n\n{options.horizontal_rule}\n\n"


def _container(node: Tag, content: str) -> str:
    return f"\n\n{content}\n\n"


def _always(node: Tag) -> bool:
    return True


@lru_cache(maxsize=16)
def build_rules(options: ClipboardOptions) -> tuple[ConversionRule, ...]:
    """Build the ordered rule table for *options*.

    The table is immutable and holds no per-document state, so one table is
    shared by every conversion that uses the same options.
    """
    md = options.markdown_options
    return (
        ConversionRule("code-in-pre", _is_code_in_pre, _code_in_pre),
        ConversionRule("inline-code", _is_inline_code, _inline_code),
        ConversionRule("pre", _is_pre, _pre_block),
        ConversionRule("code-editor-paste", partial(_is_code_editor_block, options=options), _code_editor_block),
        ConversionRule("mark", partial(_is_tag, names=frozenset({"mark"})), _unwrap),
        ConversionRule("span", partial(_is_tag, names=frozenset({"span"})), _unwrap),
        ConversionRule("paragraph", partial(_is_tag, names=frozenset({"p"})), _paragraph),
        # General-purpose rules
        ConversionRule("dropped", partial(_is_tag, names=STRIPPED_TAGS), _dropped),
        ConversionRule("heading", partial(_is_tag, names=HEADING_TAGS), partial(_heading, options=md)),
        ConversionRule("list", partial(_is_tag, names=frozenset({"ul", "ol"})), _list),
        ConversionRule("list-item", partial(_is_tag, names=frozenset({"li"})), partial(_list_item, options=md)),
        ConversionRule("task-checkbox", _is_checkbox, _checkbox),
        ConversionRule("table-cell", partial(_is_tag, names=frozenset({"td", "th"})), _table_cell),
        ConversionRule("table-row", partial(_is_tag, names=frozenset({"tr"})), _table_row),
        ConversionRule("table-section", partial(_is_tag, names=_TABLE_SECTION_TAGS), _unwrap),
        ConversionRule("table", partial(_is_tag, names=frozenset({"table"})), _table),
        ConversionRule("blockquote", partial(_is_tag, names=frozenset({"blockquote"})), _blockquote),
        ConversionRule(
            "strong",
            partial(_is_tag, names=frozenset({"strong", "b"})),
            partial(_inline_delimited, delimiter=md.strong_symbol),
        ),
        ConversionRule(
            "emphasis",
            partial(_is_tag, names=frozenset({"em", "i"})),
            partial(_inline_delimited, delimiter=md.emphasis_symbol),
        ),
        ConversionRule(
            "strikethrough",
            partial(_is_tag, names=frozenset({"del", "s", "strike"})),
            partial(_inline_delimited, delimiter="~~"),
        ),
        ConversionRule("link", partial(_is_tag, names=frozenset({"a"})), _link),
        ConversionRule("image", partial(_is_tag, names=frozenset({"img"})), _image),
        ConversionRule("line-break", partial(_is_tag, names=frozenset({"br"})), _line_break),
        ConversionRule("horizontal-rule", partial(_is_tag, names=frozenset({"hr"})), partial(_horizontal_rule, options=md)),
        ConversionRule("container", partial(_is_tag, names=_CONTAINER_TAGS), _container),
        ConversionRule("passthrough", _always, _unwrap),
    )


# ---------------------------------------------------------------------------
# Converter
# ---------------------------------------------------------------------------


def normalize_nbsp(html: str) -> str:
    """Replace non-breaking spaces, literal or entity-encoded, with spaces."""
    return NBSP_ENTITY_PATTERN.sub(" ", html.replace(NBSP_CHAR, " "))


def normalize_markdown(markdown: str) -> str:
    """Tidy converted Markdown.

    Strips trailing whitespace from every line (leading whitespace is kept),
    collapses runs of three or more newlines to two, and trims the result.
    """
    lines = "\n".join(line.rstrip() for line in markdown.split("\n"))
    return EXCESS_NEWLINES_PATTERN.sub("\n\n", lines).strip()


class HtmlToMarkdownConverter:
    """Convert HTML fragments to Markdown using a rule table.

    Parameters
    ----------
    options : ClipboardOptions, optional
        Code detection signals and Markdown formatting. Defaults are used
        when omitted.

    """

    def __init__(self, options: ClipboardOptions | None = None) -> None:
        self.options = validate_options(options, ClipboardOptions, "HtmlToMarkdownConverter")
        self.rules = build_rules(self.options)

    def convert(self, html: str | bytes | Tag) -> str:
        """Convert an HTML fragment to Markdown.

        Parameters
        ----------
        html : str, bytes or bs4.Tag
            Fragment to convert. Tags are serialized first so the caller's
            tree is never modified; bytes are decoded as UTF-8.

        Returns
        -------
        str
            Normalized Markdown. Empty input yields an empty string.

        Raises
        ------
        ValidationError
            If *html* is not a string, bytes or BeautifulSoup node.

        """
        source = self._coerce_input(html)
        soup = BeautifulSoup(normalize_nbsp(source), "html.parser")
        root: Any = soup.body if soup.body else soup
        markdown = normalize_markdown(self._process_node(root))
        logger.debug("Converted %d characters of HTML to %d characters of Markdown", len(source), len(markdown))
        return markdown

    def _coerce_input(self, html: Any) -> str:
        if isinstance(html, str):
            return html
        if isinstance(html, (bytes, bytearray)):
            return bytes(html).decode("utf-8", errors="replace")
        if isinstance(html, Tag):
            return str(html)
        raise ValidationError(
            f"Unsupported input type for HTML conversion: {type(html).__name__}",
            parameter_name="html",
            parameter_value=html,
        )

    def _process_node(self, node: Any) -> str:
        """Process a BeautifulSoup node and its children bottom-up.

        The walk keeps its own stack of open elements, each with an iterator
        over its children and the Markdown rendered for them so far, so
        arbitrarily deep markup converts without hitting the interpreter's
        recursion limit.
        """
        if isinstance(node, _SKIPPED_STRINGS):
            return ""
        if isinstance(node, NavigableString):
            return self._process_text(node)

        stack: list[tuple[Tag, Iterator[Any], list[str]]] = [(node, iter(node.children), [])]
        while True:
            current, children, parts = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                rendered = self._apply_rules(current, "".join(parts))
                if not stack:
                    return rendered
                stack[-1][2].append(rendered)
            elif isinstance(child, _SKIPPED_STRINGS):
                continue
            elif isinstance(child, NavigableString):
                parts.append(self._process_text(child))
            else:
                stack.append((child, iter(child.children), []))

    def _apply_rules(self, node: Tag, content: str) -> str:
        if node.name == "[document]":
            return content

        for rule in self.rules:
            if not rule.predicate(node):
                continue
            try:
                return rule.transform(node, content)
            except Exception as exc:
                logger.warning("Rule %r failed on <%s>, using its text: %s", rule.name, node.name, exc)
                return _text_of(node)
        return content

    def _process_text(self, node: NavigableString) -> str:
        text = str(node).replace(NBSP_CHAR, " ")
        parent = node.parent
        if parent is not None and (parent.name == "pre" or _has_ancestor(node, "pre")):
            return text
        if parent is not None and parent.name in STRUCTURAL_TAGS and not text.strip():
            return ""

        text = _WHITESPACE_RUN.sub(" ", text)
        if _is_block_boundary(node.previous_sibling, parent):
            text = text.lstrip()
        if _is_block_boundary(node.next_sibling, parent):
            text = text.rstrip()
        if self.options.markdown_options.escape_special and not _has_ancestor(node, "code"):
            text = escape_markdown(text, at_block_start=_starts_block(node))
        return text


def html_to_markdown(html: str | bytes | Tag, options: ClipboardOptions | None = None) -> str:
    """Convert an HTML fragment to canonical Markdown.

    Parameters
    ----------
    html : str, bytes or bs4.Tag
        Clipboard HTML or a cloned preview selection.
    options : ClipboardOptions, optional
        Conversion options. Defaults are used when omitted.

    Returns
    -------
    str
        Markdown representation of the fragment.

    Examples
    --------
        >>> html_to_markdown("<code>foo</code>")
        '`foo`'

    """
    return HtmlToMarkdownConverter(options).convert(html)


__all__ = [
    "ConversionRule",
    "HtmlToMarkdownConverter",
    "build_rules",
    "escape_markdown",
    "html_to_markdown",
    "normalize_markdown",
    "normalize_nbsp",
]

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Lightweight Markdown to HTML for the rich-text clipboard slot.

Copying from the raw editor puts the selected Markdown on the plain-text
slot and a rough HTML rendering on the rich-text slot, so pasting into a word
processor keeps headings, lists and emphasis. This is intentionally a small
line-oriented transform, not a Markdown renderer: it handles ATX headings up
to level three, bullet and numbered items, strong/emphasis/code spans and
line breaks. Everything else passes through as escaped text.
"""

from __future__ import annotations

import re
from html import escape

_HEADING = re.compile(r"^(#{1,3}) (.*)$")
_BULLET_ITEM = re.compile(r"^\s*[-*]\s+(.*)$")
_ORDERED_ITEM = re.compile(r"^\s*\d+\.\s+(.*)$")
_INLINE = re.compile(r"`([^`]+?)`|\*\*(.+?)\*\*|__(.+?)__|\*(.+?)\*|_(.+?)_")


def _render_inline(text: str) -> str:
    def replace(match: re.Match[str]) -> str:
        code, strong_star, strong_under, em_star, em_under = match.groups()
        if code is not None:
            return f"<code>{code}</code>"
        if strong_star is not None or strong_under is not None:
            return f"<strong>{_render_inline(strong_star or strong_under)}</strong>"
        return f"<em>{_render_inline(em_star or em_under)}</em>"

    return _INLINE.sub(replace, text)


def markdown_to_html(markdown: str, wrapper_style: str | None = None) -> str:
    """Render a Markdown selection as simple HTML.

    Parameters
    ----------
    markdown : str
        Selected editor text.
    wrapper_style : str, optional
        When given, wrap the output in ``<div style="...">``.

    Returns
    -------
    str
        HTML with source lines joined by ``<br />``; consecutive list items
        of the same kind share one list element.

    Examples
    --------
        >>> markdown_to_html("# Title\\n- **a**\\n- b")
        '<h1>Title</h1><br /><ul><li><strong>a</strong></li><li>b</li></ul>'

    """
    rendered: list[str] = []
    list_tag: str | None = None
    items: list[str] = []

    def close_list() -> None:
        nonlocal list_tag
        if list_tag is not None:
            rendered.append(f"<{list_tag}>" + "".join(items) + f"</{list_tag}>")
            items.clear()
            list_tag = None

    for line in escape(markdown, quote=False).split("\n"):
        if heading := _HEADING.match(line):
            close_list()
            level = len(heading.group(1))
            rendered.append(f"<h{level}>{_render_inline(heading.group(2))}</h{level}>")
            continue

        item_tag = None
        if bullet := _BULLET_ITEM.match(line):
            item_tag, item_text = "ul", bullet.group(1)
        elif ordered := _ORDERED_ITEM.match(line):
            item_tag, item_text = "ol", ordered.group(1)

        if item_tag is None:
            close_list()
            rendered.append(_render_inline(line))
            continue

        if item_tag != list_tag:
            close_list()
            list_tag = item_tag
        items.append(f"<li>{_render_inline(item_text)}</li>")

    close_list()
    html = "<br />".join(rendered)
    if wrapper_style:
        return f'<div style="{escape(wrapper_style)}">{html}</div>'
    return html


__all__ = ["markdown_to_html"]

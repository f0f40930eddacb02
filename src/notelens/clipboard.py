#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Copy and paste entry points for the note editor.

The host view forwards clipboard events here and applies the returned
payloads itself:

- ``on_paste``: clipboard HTML that looks rich (structural or emphasis tags)
  or code-like (pasted from a code editor) is converted to Markdown and
  spliced into the buffer at the caret; anything else pastes the plain-text
  payload.
- ``on_copy_preview``: a cloned selection from the rendered preview is
  converted to Markdown for the plain-text slot, while the selection HTML
  goes to the rich-text slot unmodified.
- ``on_copy_raw``: a selection from the raw editor stays as-is on the
  plain-text slot and is rendered to simple HTML for the rich-text slot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bs4 import Tag

from notelens.constants import CODE_INDICATOR_PATTERN, RICH_CONTENT_PATTERN
from notelens.html2markdown import HtmlToMarkdownConverter
from notelens.markdown2html import markdown_to_html
from notelens.options.base import validate_options
from notelens.options.clipboard import ClipboardOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClipboardPayload:
    """Data for the plain-text and rich-text clipboard slots."""

    plain_text: str
    html: str


@dataclass(frozen=True)
class PasteResult:
    """Buffer contents after a paste, and where the caret goes."""

    text: str
    caret: int
    converted: bool = False


def is_rich_html(html: str | None) -> bool:
    """Return True if *html* carries block, structural or emphasis tags."""
    return bool(html) and RICH_CONTENT_PATTERN.search(html) is not None


def has_code_indicators(html: str | None) -> bool:
    """Return True if *html* looks like it was copied from a code editor."""
    return bool(html) and CODE_INDICATOR_PATTERN.search(html) is not None


def should_convert(html: str | None) -> bool:
    """Return True if pasted *html* should be converted rather than ignored."""
    return is_rich_html(html) or has_code_indicators(html)


def splice(buffer: str, start: int, end: int, insert: str) -> tuple[str, int]:
    """Replace ``buffer[start:end]`` with *insert*.

    Offsets are clamped to the buffer and put in order, so a reversed or
    stale selection still yields a valid result.

    Returns
    -------
    tuple[str, int]
        The new buffer and the caret offset just after the inserted text.

    """
    start = min(max(start, 0), len(buffer))
    end = min(max(end, 0), len(buffer))
    if end < start:
        start, end = end, start
    return buffer[:start] + insert + buffer[end:], start + len(insert)


class Clipboard:
    """Clipboard conversion bound to one set of options.

    Parameters
    ----------
    options : ClipboardOptions, optional
        Conversion options; defaults are used when omitted.

    """

    def __init__(self, options: ClipboardOptions | None = None) -> None:
        self.options = validate_options(options, ClipboardOptions, "Clipboard")
        self.converter = HtmlToMarkdownConverter(self.options)

    def on_paste(
        self,
        buffer: str,
        selection_start: int,
        selection_end: int,
        html: str | None = None,
        plain_text: str | None = None,
    ) -> PasteResult:
        """Paste clipboard data over the current selection.

        Parameters
        ----------
        buffer : str
            Editor text before the paste.
        selection_start, selection_end : int
            Selection offsets; equal when there is only a caret.
        html : str, optional
            The clipboard's ``text/html`` payload.
        plain_text : str, optional
            The clipboard's ``text/plain`` payload.

        Returns
        -------
        PasteResult
            New buffer and caret. ``converted`` is True when the HTML payload
            was converted to Markdown.

        """
        if html and should_convert(html):
            markdown = self.converter.convert(html)
            text, caret = splice(buffer, selection_start, selection_end, markdown)
            logger.debug("Pasted %d characters of converted Markdown", len(markdown))
            return PasteResult(text=text, caret=caret, converted=True)

        text, caret = splice(buffer, selection_start, selection_end, plain_text or "")
        return PasteResult(text=text, caret=caret, converted=False)

    def on_copy_preview(self, selection_html: str | Tag) -> ClipboardPayload:
        """Build clipboard data for a selection copied from the preview."""
        html = str(selection_html)
        return ClipboardPayload(plain_text=self.converter.convert(html), html=html)

    def on_copy_raw(self, selected_text: str) -> ClipboardPayload | None:
        """Build clipboard data for a raw-editor selection, or None if it is empty."""
        if not selected_text:
            return None
        return ClipboardPayload(
            plain_text=selected_text,
            html=markdown_to_html(selected_text, wrapper_style=self.options.copy_wrapper_style),
        )


__all__ = [
    "Clipboard",
    "ClipboardPayload",
    "PasteResult",
    "has_code_indicators",
    "is_rich_html",
    "should_convert",
    "splice",
]

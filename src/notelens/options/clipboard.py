#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Clipboard conversion options."""

from __future__ import annotations

from dataclasses import dataclass, field

from notelens.constants import DEFAULT_CODE_EDITOR_CLASSES, DEFAULT_COPY_WRAPPER_STYLE, DEFAULT_MONOSPACE_FONTS
from notelens.options.base import CloneFrozenMixin
from notelens.options.markdown import MarkdownOptions


@dataclass(frozen=True)
class ClipboardOptions(CloneFrozenMixin):
    """Options for HTML to Markdown conversion on copy and paste.

    Parameters
    ----------
    code_editor_classes : tuple of str
        Class name fragments that identify a block pasted from a code editor.
    monospace_fonts : tuple of str
        Font family names that identify a monospaced code block.
    copy_wrapper_style : str or None, default None
        When set, HTML generated for raw-editor copies is wrapped in a ``div``
        with this inline style.
    markdown_options : MarkdownOptions
        Markdown syntax used by the general-purpose rules.

    """

    code_editor_classes: tuple[str, ...] = field(
        default=DEFAULT_CODE_EDITOR_CLASSES,
        metadata={"help": "Class name fragments emitted by code editors", "importance": "advanced"},
    )
    monospace_fonts: tuple[str, ...] = field(
        default=DEFAULT_MONOSPACE_FONTS,
        metadata={"help": "Font family names treated as code", "importance": "advanced"},
    )
    copy_wrapper_style: str | None = field(
        default=DEFAULT_COPY_WRAPPER_STYLE,
        metadata={"help": "Inline style for the div wrapping copied HTML (None for no wrapper)", "importance": "advanced"},
    )
    markdown_options: MarkdownOptions = field(
        default_factory=MarkdownOptions,
        metadata={"help": "Markdown formatting options", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate signal lists.

        Raises
        ------
        ValueError
            If a signal list contains an empty string, which would match everything.

        """
        if any(not fragment for fragment in self.code_editor_classes):
            raise ValueError("code_editor_classes cannot contain empty strings")
        if any(not font for font in self.monospace_fonts):
            raise ValueError("monospace_fonts cannot contain empty strings")


__all__ = ["ClipboardOptions"]

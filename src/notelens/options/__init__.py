#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for notelens components.

Each component has its own frozen Options dataclass. Instances are shared
freely between calls; use ``create_updated`` to derive a variant.
"""

from __future__ import annotations

from notelens.options.base import CloneFrozenMixin, validate_options
from notelens.options.clipboard import ClipboardOptions
from notelens.options.markdown import MarkdownOptions
from notelens.options.search import SearchOptions

__all__ = [
    "CloneFrozenMixin",
    "ClipboardOptions",
    "MarkdownOptions",
    "SearchOptions",
    "validate_options",
]

"""Batch conversion subsystem: renders Markdown chapters with markdown-it-py."""

from mdrender.converter.converter import (
    BatchConverter,
    MarkdownRenderer,
    list_candidates,
)
from mdrender.converter.models import (
    BatchReport,
    ConversionError,
    ConversionResult,
    ListingError,
)

__all__ = [
    "BatchConverter",
    "BatchReport",
    "ConversionError",
    "ConversionResult",
    "ListingError",
    "MarkdownRenderer",
    "list_candidates",
]

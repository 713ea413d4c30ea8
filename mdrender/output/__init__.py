"""Output subsystem: names and writes rendered HTML files."""

from mdrender.output.writer import HtmlWriter, output_filename

__all__ = [
    "HtmlWriter",
    "output_filename",
]

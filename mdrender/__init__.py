"""mdrender - batch Markdown-to-HTML chapter renderer."""

from mdrender.config import MdRenderConfig, load_config
from mdrender.converter import BatchConverter, BatchReport, MarkdownRenderer
from mdrender.output import HtmlWriter

__version__ = "0.1.0"

__all__ = [
    "BatchConverter",
    "BatchReport",
    "HtmlWriter",
    "MarkdownRenderer",
    "MdRenderConfig",
    "load_config",
]

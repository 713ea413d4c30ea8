"""HtmlWriter: writes rendered chapters to the output directory."""

from __future__ import annotations

import logging
from pathlib import Path

from mdrender.config.models import OutputConfig

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


def output_filename(
    filename: str,
    extension: str = ".html",
    strip_source_suffix: bool = False,
) -> str:
    """Build the destination filename for a source file.

    The source suffix is kept by default, so `intro.md` becomes
    `intro.md.html`. Existing rendered trees depend on that naming.
    """
    if strip_source_suffix and filename.endswith(MARKDOWN_SUFFIX):
        filename = filename[: -len(MARKDOWN_SUFFIX)]
    return filename + extension


class HtmlWriter:
    """Writes wrapped HTML documents into a single, pre-existing directory.

    The directory is never created here; writing into a missing directory
    fails like any other write error.
    """

    def __init__(self, config: OutputConfig) -> None:
        self.config = config
        self.base_dir = Path(config.directory)

    def dest_path(self, filename: str) -> Path:
        name = output_filename(
            filename,
            extension=self.config.extension,
            strip_source_suffix=self.config.strip_source_suffix,
        )
        return self.base_dir / name

    def write(self, filename: str, html: str) -> Path:
        """Write one document, overwriting any previous render.

        Returns the Path of the written file.
        """
        dest = self.dest_path(filename)
        data = html.encode("utf-8")
        dest.write_bytes(data)
        logger.debug("wrote %s (%d bytes)", dest, len(data))
        return dest

"""Markdown-to-HTML batch converter built on markdown-it-py."""

from __future__ import annotations

import asyncio
import logging
import os
from functools import cached_property
from pathlib import Path

from markdown_it import MarkdownIt

from mdrender.config.models import MdRenderConfig, RendererConfig
from mdrender.converter.models import (
    BatchReport,
    ConversionError,
    ConversionResult,
    ListingError,
)
from mdrender.output.writer import MARKDOWN_SUFFIX, HtmlWriter

logger = logging.getLogger(__name__)


def list_candidates(source_dir: str | Path) -> list[str]:
    """Return names of non-directory entries in source_dir ending with `.md`.

    Not recursive. Order is whatever the filesystem yields.
    """
    try:
        with os.scandir(source_dir) as it:
            names = [
                entry.name
                for entry in it
                if not entry.is_dir() and entry.name.endswith(MARKDOWN_SUFFIX)
            ]
    except OSError as e:
        raise ListingError(str(source_dir), e) from e

    logger.debug("found %d markdown file(s) in %s", len(names), source_dir)
    return names


class MarkdownRenderer:
    """Renders Markdown with markdown-it-py and wraps it in the chapter div."""

    def __init__(self, config: RendererConfig) -> None:
        self._config = config

    @cached_property
    def _md(self) -> MarkdownIt:
        return MarkdownIt(self._config.preset, {"html": self._config.html})

    def render(self, text: str) -> str:
        return self._md.render(text)

    def wrap(self, body: str) -> str:
        return f'<div class="{self._config.wrapper_class}">{body}</div>'

    def render_wrapped(self, text: str) -> str:
        return self.wrap(self.render(text))


class BatchConverter:
    """Converts every Markdown file in the source directory to wrapped HTML.

    Each file runs read -> render -> wrap -> write on its own. A failure in
    one file is captured as a failed ConversionResult and never stops the
    others. Only a listing failure aborts the batch.
    """

    def __init__(self, config: MdRenderConfig) -> None:
        self._config = config
        self.source_dir = Path(config.source.directory)
        self.renderer = MarkdownRenderer(config.renderer)
        self.writer = HtmlWriter(config.output)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_candidates(self) -> list[str]:
        return list_candidates(self.source_dir)

    def plan(self) -> list[tuple[str, Path]]:
        """Pair each candidate with the path it would be written to."""
        planned = [(name, self.writer.dest_path(name)) for name in self.list_candidates()]
        for name, dest in planned:
            logger.debug("dry-run: would write %s -> %s", name, dest)
        return planned

    def convert(self, filename: str) -> ConversionResult:
        """Convert a single file synchronously. Never raises for file errors."""
        try:
            text = self._read(filename)
            html = self._render(filename, text)
            dest = self._write(filename, html)
        except ConversionError as e:
            return self._failure(e)
        return self._success(filename, dest, html)

    async def convert_all(self) -> BatchReport:
        """Convert all candidates concurrently, at most max_workers at a time.

        Raises ListingError if the source directory cannot be listed.
        """
        names = self.list_candidates()
        report = BatchReport(
            source_dir=str(self.source_dir),
            dest_dir=str(self.writer.base_dir),
        )
        semaphore = asyncio.Semaphore(self._config.max_workers)

        async def _run(name: str) -> None:
            async with semaphore:
                result = await self._convert_async(name)
            report.results.append(result)

        await asyncio.gather(*(_run(name) for name in names))
        logger.info(
            "batch finished: %d rendered, %d failed",
            len(report.rendered),
            len(report.failed),
        )
        return report

    def run(self) -> BatchReport:
        return asyncio.run(self.convert_all())

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    async def _convert_async(self, filename: str) -> ConversionResult:
        try:
            text = await asyncio.to_thread(self._read, filename)
            html = self._render(filename, text)
            dest = await asyncio.to_thread(self._write, filename, html)
        except ConversionError as e:
            return self._failure(e)
        return self._success(filename, dest, html)

    def _read(self, filename: str) -> str:
        path = self.source_dir / filename
        try:
            return path.read_text(encoding=self._config.source.encoding)
        except (OSError, UnicodeDecodeError, LookupError) as e:
            raise ConversionError(filename, "read", e) from e

    def _render(self, filename: str, text: str) -> str:
        try:
            return self.renderer.render_wrapped(text)
        except Exception as e:
            raise ConversionError(filename, "render", e) from e

    def _write(self, filename: str, html: str) -> Path:
        try:
            return self.writer.write(filename, html)
        except OSError as e:
            raise ConversionError(filename, "write", e) from e

    @staticmethod
    def _success(filename: str, dest: Path, html: str) -> ConversionResult:
        return ConversionResult(
            filename=filename,
            ok=True,
            dest_path=str(dest),
            size_bytes=len(html.encode("utf-8")),
        )

    @staticmethod
    def _failure(error: ConversionError) -> ConversionResult:
        # tracebacks only at debug
        logger.warning(
            "%s", error, exc_info=error.__cause__ if logger.isEnabledFor(logging.DEBUG) else None
        )
        return ConversionResult(
            filename=error.filename,
            ok=False,
            stage=error.stage,
            error=str(error.__cause__),
        )

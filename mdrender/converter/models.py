"""Pydantic models and errors for the batch converter."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Stage = Literal["read", "render", "write"]


class ListingError(Exception):
    """The source directory could not be listed."""

    def __init__(self, directory: str, cause: Exception) -> None:
        self.directory = directory
        super().__init__(f"cannot list {directory}: {cause}")
        self.__cause__ = cause


class ConversionError(Exception):
    """Wraps a per-file failure with the pipeline stage it happened in."""

    def __init__(self, filename: str, stage: Stage, cause: Exception) -> None:
        self.filename = filename
        self.stage = stage
        super().__init__(f"{filename} {stage} failed: {cause}")
        self.__cause__ = cause


class ConversionResult(BaseModel):
    """Outcome of converting a single Markdown file."""

    filename: str
    ok: bool
    dest_path: str | None = None
    stage: Stage | None = None  # set on failure
    error: str | None = None
    size_bytes: int = 0


class BatchReport(BaseModel):
    """Outcome of a batch run, results in completion order."""

    source_dir: str
    dest_dir: str
    results: list[ConversionResult] = Field(default_factory=list)

    @property
    def rendered(self) -> list[str]:
        return [r.filename for r in self.results if r.ok]

    @property
    def failed(self) -> list[tuple[str, str]]:
        return [(r.filename, r.error or "") for r in self.results if not r.ok]

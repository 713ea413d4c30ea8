"""Shared test fixtures for mdrender."""

import pytest

from mdrender.config.models import MdRenderConfig, OutputConfig, SourceConfig


@pytest.fixture
def sample_config():
    return MdRenderConfig()


@pytest.fixture
def chapters_dir(tmp_path):
    """Source directory with two chapters, a stray text file and a subdirectory."""
    src = tmp_path / "chapters"
    src.mkdir()
    (src / "intro.md").write_text("# Title", encoding="utf-8")
    (src / "body.md").write_text("Hello <b>world</b>", encoding="utf-8")
    (src / "notes.txt").write_text("ignored", encoding="utf-8")
    (src / "drafts.md").mkdir()
    (src / "drafts.md" / "nested.md").write_text("# Nested", encoding="utf-8")
    return src


@pytest.fixture
def rendered_dir(tmp_path):
    dest = tmp_path / "rendered"
    dest.mkdir()
    return dest


@pytest.fixture
def batch_config(chapters_dir, rendered_dir):
    return MdRenderConfig(
        source=SourceConfig(directory=str(chapters_dir)),
        output=OutputConfig(directory=str(rendered_dir)),
    )

"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import MdRenderConfig

CONFIG_ENV_VAR = "MDRENDER_CONFIG"

# ${VAR} or ${VAR:-fallback}
_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def config_search_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest priority first.

    --config > $MDRENDER_CONFIG > ./mdrender.yaml > ~/.mdrender/config.yaml
    """
    paths: list[Path] = []
    if cli_path:
        paths.append(Path(cli_path))
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        paths.append(Path(env_path))
    paths.append(Path("mdrender.yaml"))
    paths.append(Path.home() / ".mdrender" / "config.yaml")
    return paths


def load_config(cli_path: str | None = None) -> MdRenderConfig:
    """Load the first existing, non-empty config file, or the defaults.

    An explicit --config path that does not exist is an error rather than
    a silent fall-through to the next candidate.
    """
    if cli_path and not Path(cli_path).is_file():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in config_search_paths(cli_path):
        raw = _read_yaml(path)
        if raw is None:
            continue
        try:
            return MdRenderConfig(**_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e

    return MdRenderConfig()


def _read_yaml(path: Path) -> dict | None:
    """Parse one config file. None if it is missing or empty."""
    if not path.is_file():
        return None
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping")
    return raw


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} and ${VAR:-fallback} references in strings."""
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1)) or (m.group(2) or ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `mdrender config init`
DEFAULT_CONFIG_TEMPLATE = """\
# mdrender.yaml

# Markdown sources (non-recursive, *.md only)
source:
  directory: "docs/chapters"
  encoding: "utf-8"

# Renderer (markdown-it-py)
renderer:
  preset: "js-default"         # js-default | commonmark | zero
  html: true                   # pass raw HTML through unescaped
  wrapper_class: "nsw"

# Output (directory must already exist)
output:
  directory: "rendered"
  extension: ".html"
  strip_source_suffix: false   # true: intro.md -> intro.html

# Files converted concurrently
max_workers: 8

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""

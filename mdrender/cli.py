"""CLI entry point for mdrender."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from mdrender.config import MdRenderConfig, load_config
from mdrender.config.loader import DEFAULT_CONFIG_TEMPLATE
from mdrender.converter import BatchConverter, BatchReport, ListingError

app = typer.Typer(
    name="mdrender",
    help="Render a directory of Markdown chapters to wrapped HTML fragments.",
)

config_app = typer.Typer(help="Manage mdrender configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: MdRenderConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _configure_logging(cfg: MdRenderConfig) -> None:
    if cfg.log_format == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
    else:
        handler = RichHandler(show_path=False)
    logging.basicConfig(level=_LOG_LEVELS[cfg.log_level], handlers=[handler], force=True)


def _get_config() -> MdRenderConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to mdrender.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    _configure_logging(_config)


def _apply_overrides(
    cfg: MdRenderConfig,
    source: str | None = None,
    dest: str | None = None,
    workers: int | None = None,
    strip_md_suffix: bool = False,
) -> MdRenderConfig:
    """Return a copy of cfg with CLI overrides applied."""
    if source:
        cfg = cfg.model_copy(
            update={"source": cfg.source.model_copy(update={"directory": source})}
        )
    if dest or strip_md_suffix:
        output_update: dict[str, object] = {}
        if dest:
            output_update["directory"] = dest
        if strip_md_suffix:
            output_update["strip_source_suffix"] = True
        cfg = cfg.model_copy(update={"output": cfg.output.model_copy(update=output_update)})
    if workers is not None:
        cfg = cfg.model_copy(update={"max_workers": workers})
    return cfg


def _display_report(report: BatchReport) -> None:
    """Print one line per file, then a summary."""
    for r in report.results:
        if r.ok:
            rprint(f"[green]The file was saved:[/green] {r.dest_path}")
        else:
            rprint(f"[red]Error:[/red] {escape(r.filename)} ({r.stage}): {escape(r.error or '')}")

    summary = f"{len(report.rendered)} rendered, {len(report.failed)} failed"
    colour = "red" if report.failed else "green"
    rprint(f"\n[bold {colour}]{summary}[/bold {colour}] ({report.source_dir} -> {report.dest_dir})")


@app.command()
def render(
    source: Annotated[
        str | None, typer.Option("--source", "-s", help="Directory of Markdown files")
    ] = None,
    dest: Annotated[
        str | None, typer.Option("--dest", "-d", help="Existing output directory")
    ] = None,
    workers: Annotated[
        int | None, typer.Option("--workers", "-w", min=1, help="Files converted at once")
    ] = None,
    strip_md_suffix: Annotated[
        bool, typer.Option("--strip-md-suffix", help="Write intro.html instead of intro.md.html")
    ] = False,
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without writing"),
) -> None:
    """Render every .md file in the source directory to HTML."""
    cfg = _apply_overrides(_get_config(), source, dest, workers, strip_md_suffix)
    converter = BatchConverter(cfg)

    if dry_run:
        try:
            planned = converter.plan()
        except ListingError as e:
            rprint(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)
        rprint("[yellow](dry run, nothing written)[/yellow]\n")
        for name, target in planned:
            rprint(f"  {name} [dim]->[/dim] {target}")
        return

    rprint(f"[bold]Rendering[/bold] {cfg.source.directory} -> {cfg.output.directory}...")
    try:
        report = converter.run()
    except ListingError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if not report.results:
        rprint(f"[yellow]No .md files found in {cfg.source.directory}.[/yellow]")
        return

    _display_report(report)
    if report.failed:
        raise typer.Exit(1)


@app.command("list")
def list_files(
    source: Annotated[
        str | None, typer.Option("--source", "-s", help="Directory of Markdown files")
    ] = None,
) -> None:
    """List the Markdown files that would be rendered."""
    cfg = _apply_overrides(_get_config(), source)
    converter = BatchConverter(cfg)

    try:
        planned = converter.plan()
    except ListingError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if not planned:
        rprint(f"[yellow]No .md files found in {cfg.source.directory}.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Markdown files ({len(planned)})")
    table.add_column("Source", style="cyan")
    table.add_column("Output", style="green")
    for name, target in planned:
        table.add_row(name, str(target))
    rprint(table)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default mdrender.yaml in current directory."""
    target = Path("mdrender.yaml")
    if target.exists() and not force:
        rprint("[yellow]mdrender.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()

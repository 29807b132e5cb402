"""Click CLI for remder — render markdown with diagrams to HTML."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from remder.config.schema import RemderSettings, load_settings
from remder.types import DiagramDialect

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, base_level: str = "WARNING") -> None:
    """Configure logging from the configured level; -v/-vv override it."""
    level = logging.getLevelName(base_level)
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )
    # basicConfig does nothing once the root logger has handlers
    logging.getLogger("remder").setLevel(level)


def _settings(**overrides: object) -> RemderSettings:
    try:
        return load_settings(**overrides)
    except ValidationError as e:
        error_console.print(f"[red]Invalid configuration:[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(package_name="remder")
def cli() -> None:
    """remder — markdown renderer with cached PlantUML diagrams."""


@cli.command()
@click.argument("markdown", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write HTML here.")
@click.option("--timeout", type=float, default=None, help="Seconds allowed per diagram.")
@click.option("--out-dir", type=click.Path(file_okay=False), help="Diagram cache directory.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def view(
    markdown: str,
    output: str | None,
    timeout: float | None,
    out_dir: str | None,
    verbose: int,
) -> None:
    """Render MARKDOWN to styled HTML (stdout or --output)."""
    settings = _settings(render_timeout=timeout, out_dir=out_dir)
    _setup_logging(verbose, settings.log_level)

    from remder.core import Remder

    with Remder(settings=settings) as remder:
        html = remder.render_for_viewer(markdown)

    if output:
        Path(output).write_text(html, encoding="utf-8")
        console.print(f"[green]Written to {output}[/green]")
    else:
        click.echo(html, nl=False)


@cli.command("open")
@click.argument("markdown", type=click.Path(exists=True, dir_okay=False))
@click.option("--timeout", type=float, default=None, help="Seconds allowed per diagram.")
@click.option("--out-dir", type=click.Path(file_okay=False), help="Page and diagram cache directory.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def open_in_browser(
    markdown: str,
    timeout: float | None,
    out_dir: str | None,
    verbose: int,
) -> None:
    """Render MARKDOWN into the page cache and open it in a browser."""
    settings = _settings(render_timeout=timeout, out_dir=out_dir)
    _setup_logging(verbose, settings.log_level)

    from remder.core import Remder

    with Remder(settings=settings) as remder:
        target = remder.render_for_browser(markdown)
    click.echo(str(target))


@cli.command("dialects")
def list_dialects() -> None:
    """List supported diagram dialects."""
    table = Table(title="Diagram Dialects", show_header=True)
    table.add_column("Fence", style="cyan")
    table.add_column("Start")
    table.add_column("End")

    for dialect in DiagramDialect:
        table.add_row(dialect.value, f"@{dialect.start_marker}", f"@{dialect.end_marker}")

    console.print(table)


@cli.group()
def cache() -> None:
    """Diagram cache commands."""


@cache.command("path")
def cache_path() -> None:
    """Print the cache directory."""
    click.echo(str(_settings().out_dir))


@cache.command("stats")
def cache_stats() -> None:
    """Show cache statistics."""
    from remder.cache.disk import DiskDiagramCache

    disk = DiskDiagramCache(_settings().out_dir)

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Directory", str(disk.base_dir))
    table.add_row("Diagrams", str(disk.entry_count))
    table.add_row("Size (KB)", f"{disk.size_bytes / 1024:.1f}")

    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    cli()

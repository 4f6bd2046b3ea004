"""CLI interface for dayone-org."""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from dayone_org.config import AppConfig, load_config, merge_cli_overrides
from dayone_org.core import load_journal, run_conversion, summarize
from dayone_org.errors import DayOneOrgError

app = typer.Typer(
    name="dayone-org",
    help="Convert a Day One JSON export into an Org-mode outline.",
)

console = Console()
_stderr_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from dayone_org import __version__

        console.print(f"dayone-org {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=_stderr_console, show_path=False)],
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log progress to stderr."),
    ] = False,
) -> None:
    """dayone-org - Day One journals as Org outlines."""
    _configure_logging(verbose)


def _print_error(error: DayOneOrgError) -> None:
    _stderr_console.print(f"[red]Error[/red] {escape(error.describe())}", soft_wrap=True)


def _resolve_config(config_path: Optional[Path], **overrides: object) -> AppConfig:
    return merge_cli_overrides(load_config(config_path), **overrides)


@app.command(name="convert")
def convert_cmd(
    journal: Annotated[
        Optional[Path],
        typer.Argument(help="Day One export to convert. Defaults to ./Journal.json."),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Write the outline to this file instead of stdout.",
        ),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .dayone-org.toml file."),
    ] = None,
    pandoc: Annotated[
        Optional[str],
        typer.Option("--pandoc", help="pandoc executable to run."),
    ] = None,
    images_dir: Annotated[
        Optional[str],
        typer.Option("--images-dir", help="Directory photo links point into."),
    ] = None,
    zero_pad: Annotated[
        Optional[bool],
        typer.Option(
            "--zero-pad/--no-zero-pad",
            help="Zero-pad month and day numbers in headings.",
        ),
    ] = None,
) -> None:
    """Convert a Day One export to an Org outline.

    Entries are grouped by year, month and day. Each entry gets a
    properties drawer and a body converted from Markdown by pandoc.
    Any failure aborts the run without writing partial output.
    """
    config = _resolve_config(
        config_path,
        input_path=journal,
        output_path=output,
        pandoc=pandoc,
        images_dir=images_dir,
        zero_pad_dates=zero_pad,
    )

    try:
        result = run_conversion(config)
    except DayOneOrgError as e:
        _print_error(e)
        raise typer.Exit(1)

    if result.output_path is not None:
        _stderr_console.print(
            f"[green]Wrote {result.stats.entry_count} entries "
            f"across {result.stats.day_count} day(s) to {escape(str(result.output_path))}[/green]",
            soft_wrap=True,
        )


@app.command(name="stats")
def stats_cmd(
    journal: Annotated[
        Optional[Path],
        typer.Argument(help="Day One export to inspect. Defaults to ./Journal.json."),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .dayone-org.toml file."),
    ] = None,
) -> None:
    """Print a JSON summary of an export without converting it."""
    config = _resolve_config(config_path, input_path=journal)

    try:
        stats = summarize(load_journal(config.input_path))
    except DayOneOrgError as e:
        _print_error(e)
        raise typer.Exit(1)

    print(json.dumps(stats.model_dump(), indent=2))

"""colgrid CLI Main Entry Point

Preview how a nested column definition lays out as header rows, and render
the matching <thead> markup.

Usage:
    colgrid layout columns.yaml                 # Table of cells per row
    colgrid layout columns.yaml -f json         # Grid as JSON
    colgrid render columns.yaml                 # <thead> markup to stdout
    colgrid render columns.yaml -o thead.html   # Write markup to a file
    colgrid --version                           # Show version
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from ._version import __version__
from .commands import layout_command, render_command
from .commands.layout import OutputFormat
from .commands.utils import IdStrategyOption, setup_logging
from .lib.errors import handle_error

typer_app = typer.Typer(
    help="Lay out nested table header columns as header rows.",
    no_args_is_help=True,
)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"colgrid {__version__}")
        raise typer.Exit()


@typer_app.callback()
def cli(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Lay out nested table header columns as header rows."""


@typer_app.command("layout")
def layout(
    file: Path = typer.Argument(..., help="Column file (YAML or JSON)."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TABLE, "-f", "--format", help="Output format."
    ),
    id_strategy: Optional[IdStrategyOption] = typer.Option(
        None, "--id-strategy", help="How cell ids are generated."
    ),
    config: Optional[Path] = typer.Option(
        None, "-c", "--config", help="Path to colgrid.yaml."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """Show the header grid built from a column file.

    \b
    Examples:
        colgrid layout columns.yaml
        colgrid layout columns.yaml -f json --id-strategy positional
    """
    setup_logging(verbose)
    try:
        layout_command(
            file,
            output_format=output_format,
            id_strategy=id_strategy,
            config_path=config,
        )
    except Exception as exc:
        handle_error(exc)


@typer_app.command("render")
def render(
    file: Path = typer.Argument(..., help="Column file (YAML or JSON)."),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write markup to file instead of stdout."
    ),
    id_strategy: Optional[IdStrategyOption] = typer.Option(
        None, "--id-strategy", help="How cell ids are generated."
    ),
    css_prefix: Optional[str] = typer.Option(
        None, "--css-prefix", help="Base token for class names."
    ),
    config: Optional[Path] = typer.Option(
        None, "-c", "--config", help="Path to colgrid.yaml."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """Render <thead> markup for a column file."""
    setup_logging(verbose)
    try:
        render_command(
            file,
            output=output,
            id_strategy=id_strategy,
            css_prefix=css_prefix,
            config_path=config,
        )
    except Exception as exc:
        handle_error(exc)


def app(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    ``argv`` replaces ``sys.argv[1:]`` when given.
    """
    typer_app(args=argv)


if __name__ == "__main__":
    app()

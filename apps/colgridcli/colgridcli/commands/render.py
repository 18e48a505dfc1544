"""Render command - produce <thead> markup for a column file"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from colgrid.loader import load_columns

from ..lib.errors import CliError
from .utils import IdStrategyOption, load_header_config

log = logging.getLogger(__name__)


def render_command(
    file: Path,
    output: Optional[Path] = None,
    id_strategy: Optional[IdStrategyOption] = None,
    css_prefix: Optional[str] = None,
    config_path: Optional[Path] = None,
) -> None:
    """Render the header markup, to stdout or to ``output``."""
    config = load_header_config(
        config_path, id_strategy=id_strategy, css_prefix=css_prefix
    )
    columns = load_columns(file)

    grid = config.engine().build_layout(columns)
    markup = config.renderer().render(grid)

    if output is None:
        typer.echo(markup)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(markup + "\n", encoding="utf-8")
    except OSError as exc:
        raise CliError(f"Cannot write {output}: {exc}") from exc
    log.info("Wrote %d header rows to %s", grid.total_rows, output)
    typer.echo(f"Wrote header markup to {output}")

"""Layout command - show the header grid built from a column file"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import msgspec
import typer
from rich.markup import escape
from rich.table import Table

from colgrid.layout import Grid
from colgrid.loader import load_columns
from colgrid.render import HeaderRenderer

from .utils import IdStrategyOption, console, load_header_config

log = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


def grid_to_json(grid: Grid) -> str:
    """Serialize a grid as indented JSON"""
    payload = {
        "rows": grid.total_rows,
        "columns": grid.total_columns,
        "grid": grid.to_list(),
    }
    return msgspec.json.format(msgspec.json.encode(payload), indent=2).decode()


def print_grid(grid: Grid) -> None:
    """Print one rich table listing every cell, row by row"""
    if not grid.total_rows:
        console.print("[yellow]No columns defined[/yellow]")
        return

    table = Table(title=f"{grid.total_rows} rows x {grid.total_columns} columns")
    table.add_column("Row", justify="right")
    table.add_column("#", justify="right")
    table.add_column("Id", style="cyan")
    table.add_column("Content")
    table.add_column("Colspan", justify="right")
    table.add_column("Rowspan", justify="right")
    table.add_column("Headers", style="dim")

    for row_number, row in enumerate(grid, start=1):
        for cell in row:
            content = escape(HeaderRenderer.content(cell))
            if cell.is_leaf:
                content = f"[green]{content}[/green]"
            table.add_row(
                str(row_number),
                str(cell.position),
                cell.id,
                content,
                str(cell.colspan),
                str(cell.rowspan),
                " ".join(cell.headers or ()),
            )

    console.print(table)


def layout_command(
    file: Path,
    output_format: OutputFormat = OutputFormat.TABLE,
    id_strategy: Optional[IdStrategyOption] = None,
    config_path: Optional[Path] = None,
) -> None:
    """Build the grid for a column file and print it."""
    config = load_header_config(config_path, id_strategy=id_strategy)
    columns = load_columns(file)
    log.info("Loaded %d top-level columns from %s", len(columns), file)

    grid = config.engine().build_layout(columns)

    if output_format == OutputFormat.JSON:
        typer.echo(grid_to_json(grid))
    else:
        print_grid(grid)

"""colgrid - nested table header columns to header row grids.

Layout-only core: a column tree goes in, rows of cells with colspan,
rowspan and header-chain ids come out. Rendering and change tracking are
thin layers on top.
"""

from colgrid.config import HeaderConfig
from colgrid.exceptions import (
    ColgridError,
    ColumnFileError,
    ColumnSpecError,
    ConfigError,
    IdExhaustedError,
    IdGenerationError,
    RenderError,
)
from colgrid.ids import PositionalIds, SequentialIds, Uuid7Ids, make_id_factory
from colgrid.layout import ColumnLayoutEngine, Grid, LayoutCell, build_layout
from colgrid.loader import load_columns, load_columns_text
from colgrid.render import HeaderRenderer
from colgrid.spec import ColumnSpec, parse_columns
from colgrid.view import ColumnsChange, ColumnStore, HeaderView, Subscription

__version__ = "0.1.0"

__all__ = [
    # Core
    "ColumnSpec",
    "ColumnLayoutEngine",
    "Grid",
    "LayoutCell",
    "build_layout",
    "parse_columns",
    # Ids
    "SequentialIds",
    "Uuid7Ids",
    "PositionalIds",
    "make_id_factory",
    # Rendering and views
    "HeaderRenderer",
    "HeaderView",
    "ColumnStore",
    "ColumnsChange",
    "Subscription",
    # IO
    "HeaderConfig",
    "load_columns",
    "load_columns_text",
    # Errors
    "ColgridError",
    "ColumnFileError",
    "ColumnSpecError",
    "ConfigError",
    "IdExhaustedError",
    "IdGenerationError",
    "RenderError",
]

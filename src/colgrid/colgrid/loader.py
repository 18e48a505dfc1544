"""Load column trees from YAML or JSON files.

Accepted shapes:

    - key: id
    - key: name
      children:
        - {key: firstName, label: First}
        - {key: lastName, label: Last}

or the same list under a top-level ``columns`` key.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Tuple

import yaml

from .exceptions import ColumnFileError
from .spec import ColumnSpec, parse_columns


def _columns_of(data: Any, source: str) -> Tuple[ColumnSpec, ...]:
    if data is None:
        return ()
    if isinstance(data, dict):
        data = data.get("columns") or []
    if not isinstance(data, list):
        raise ColumnFileError(source, "expected a list of columns")
    return parse_columns(data)


def load_columns_text(text: str, source: str = "<string>") -> Tuple[ColumnSpec, ...]:
    """Parse a YAML (or JSON) string into columns."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ColumnFileError(source, f"invalid YAML: {exc}") from exc
    return _columns_of(data, source)


def load_columns(path: str | Path) -> Tuple[ColumnSpec, ...]:
    """Load columns from a file."""
    p = Path(path)
    if not p.exists():
        raise ColumnFileError(str(p), "file not found")
    return load_columns_text(p.read_text(encoding="utf-8"), source=str(p))

"""colgrid Exceptions

Custom exceptions for the column layout library.
"""

from __future__ import annotations


class ColgridError(Exception):
    """Base exception for all colgrid errors."""

    pass


class ColumnSpecError(ColgridError):
    """Raised when a column node cannot be interpreted at all."""

    def __init__(self, node: object):
        self.node = node
        super().__init__(
            f"Column must be a mapping or string, got {type(node).__name__}"
        )


class ColumnFileError(ColgridError):
    """Raised when a column file cannot be read or parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load columns from {path}: {reason}")


class ConfigError(ColgridError):
    """Raised when a colgrid.yaml file is invalid."""

    pass


class IdGenerationError(ColgridError):
    """Raised when a unique cell id cannot be produced.

    This is an infrastructure fault, not a data error: the grid relies on
    ids being unique to link data cells to their headers.
    """

    pass


class IdExhaustedError(IdGenerationError):
    """Raised when a bounded id sequence has no values left."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Id sequence exhausted after {limit} ids")


class RenderError(ColgridError):
    """Raised when header markup cannot be rendered."""

    pass

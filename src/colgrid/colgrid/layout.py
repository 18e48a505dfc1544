"""Layout engine - turns a column tree into header rows.

The grid has one row per nesting level. Grouping columns sit in the row of
their depth with ``rowspan == 1`` and span their leaves horizontally; leaf
columns stretch down to the last row, so shallow branches next to deep ones
are filled by the leaves' rowspan.

    ---------------------
    |    |     name     |
    |    |---------------
    | id | First | Last |
    ---------------------
"""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from .exceptions import IdGenerationError
from .ids import DEFAULT_IDS, IdFactory
from .spec import ColumnSpec, is_sequence, parse_columns

log = logging.getLogger(__name__)


@dataclass(eq=False)
class LayoutCell:
    """One header cell of the grid, allocated for one column node."""

    id: str
    spec: ColumnSpec
    depth: int
    colspan: int = 1
    rowspan: int = 1
    headers: Optional[Tuple[str, ...]] = None
    index: int = 0
    column: int = 0
    _parent: Optional["weakref.ref[LayoutCell]"] = field(default=None, repr=False)

    @property
    def parent(self) -> Optional["LayoutCell"]:
        if self._parent is None:
            return None
        return self._parent()

    @parent.setter
    def parent(self, cell: Optional["LayoutCell"]) -> None:
        self._parent = weakref.ref(cell) if cell is not None else None

    @property
    def parent_id(self) -> Optional[str]:
        parent = self.parent
        return parent.id if parent is not None else None

    @property
    def is_leaf(self) -> bool:
        return self.spec.is_leaf

    @property
    def label(self) -> Optional[str]:
        return self.spec.label

    @property
    def key(self) -> Optional[str]:
        return self.spec.key

    @property
    def abbr(self) -> Optional[str]:
        return self.spec.abbr

    @property
    def extras(self) -> dict[str, Any]:
        return self.spec.extras

    @property
    def position(self) -> int:
        """1-based position within the row."""
        return self.index + 1

    def to_dict(self) -> dict[str, Any]:
        """Flatten into a property bag; computed fields override extras."""
        data: dict[str, Any] = dict(self.spec.extras)
        data.update(
            {
                "id": self.id,
                "label": self.label,
                "key": self.key,
                "abbr": self.abbr,
                "colspan": self.colspan,
                "rowspan": self.rowspan,
                "depth": self.depth,
                "index": self.index,
                "column": self.column,
                "parent": self.parent_id,
            }
        )
        if self.headers is not None:
            data["headers"] = list(self.headers)
        else:
            # only leaves carry a header chain
            data.pop("headers", None)
        return data


@dataclass
class Grid:
    """Header rows in top-to-bottom order, cells left to right."""

    rows: List[List[LayoutCell]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[List[LayoutCell]]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> List[LayoutCell]:
        return self.rows[index]

    @property
    def total_rows(self) -> int:
        return len(self.rows)

    @property
    def total_columns(self) -> int:
        """Number of leaf columns, i.e. the width of the grid."""
        if not self.rows:
            return 0
        return sum(cell.colspan for cell in self.rows[0])

    def cells(self) -> Iterator[LayoutCell]:
        """All cells, row by row."""
        for row in self.rows:
            yield from row

    def leaves(self) -> List[LayoutCell]:
        """Leaf cells in document (left-to-right) order."""
        return sorted(
            (cell for cell in self.cells() if cell.headers is not None),
            key=lambda cell: cell.column,
        )

    def find(self, key: str) -> Optional[LayoutCell]:
        """First cell (row-major) whose column key is ``key``."""
        for cell in self.cells():
            if cell.key == key:
                return cell
        return None

    def to_list(self) -> List[List[dict[str, Any]]]:
        return [[cell.to_dict() for cell in row] for row in self.rows]


@dataclass
class _Frame:
    """Traversal frame: a row of sibling nodes and the cursor into it."""

    nodes: Sequence[ColumnSpec]
    owner: Optional[LayoutCell] = None
    cursor: int = -1
    cells: List[LayoutCell] = field(default_factory=list)


class ColumnLayoutEngine:
    """Builds header grids from column trees.

    The engine holds no state between builds other than its id factory.
    """

    def __init__(self, ids: Optional[IdFactory] = None):
        self.ids = ids or DEFAULT_IDS

    def build_layout(self, tree: Any) -> Grid:
        """Translate a column tree into a grid of header rows.

        Args:
            tree: Top-level columns, left to right. ColumnSpec instances or
                raw nodes accepted by ``parse_columns``. Anything that is
                not a list/tuple is treated as no columns.

        Returns:
            A complete Grid. Raises IdGenerationError when the id factory
            fails; no partial grid is ever returned.
        """
        if not is_sequence(tree) or not tree:
            log.debug("No columns given, building empty grid")
            return Grid()

        columns = parse_columns(tree)
        if not columns:
            return Grid()

        cells, total_rows = self._measure(columns)
        grid = self._place(columns, cells, total_rows)
        log.debug(
            "Built header grid: %d rows, %d cells, %d columns",
            grid.total_rows,
            len(cells),
            grid.total_columns,
        )
        return grid

    def _measure(
        self, columns: Sequence[ColumnSpec]
    ) -> Tuple[List[LayoutCell], int]:
        """First pass: allocate cells, assign ids, colspans and parents.

        Returns the cells in visiting (pre-)order and the row count.
        """
        order: List[LayoutCell] = []
        seen: set[str] = set()
        total_rows = 1
        stack = [_Frame(nodes=columns)]

        while stack:
            frame = stack[-1]
            frame.cursor += 1

            if frame.cursor < len(frame.nodes):
                node = frame.nodes[frame.cursor]
                path = tuple(f.cursor for f in stack)
                cell = LayoutCell(
                    id=self._next_id(path, seen),
                    spec=node,
                    depth=len(stack) - 1,
                )
                order.append(cell)
                frame.cells.append(cell)

                if node.children:
                    stack.append(_Frame(nodes=node.children, owner=cell))
                    total_rows = max(total_rows, len(stack))
                continue

            # All siblings are measured; aggregate into the owning column.
            # Summing colspans (not counting children) covers 3+ levels.
            stack.pop()
            if frame.owner is not None:
                frame.owner.colspan = sum(c.colspan for c in frame.cells)
                for child in frame.cells:
                    child.parent = frame.owner

        return order, total_rows

    def _place(
        self,
        columns: Sequence[ColumnSpec],
        cells: List[LayoutCell],
        total_rows: int,
    ) -> Grid:
        """Second pass: fill rows, finalize leaf rowspans and header chains."""
        rows: List[List[LayoutCell]] = [[] for _ in range(total_rows)]
        visit = iter(cells)
        leaf_column = 0
        stack = [_Frame(nodes=columns)]

        while stack:
            frame = stack[-1]
            frame.cursor += 1

            if frame.cursor >= len(frame.nodes):
                stack.pop()
                continue

            node = frame.nodes[frame.cursor]
            cell = next(visit)
            depth = len(stack) - 1
            row = rows[depth]

            cell.index = len(row)
            cell.column = leaf_column
            row.append(cell)

            if node.children:
                # grouping cells keep rowspan 1; leaves absorb depth gaps
                stack.append(_Frame(nodes=node.children, owner=cell))
            else:
                ancestors = tuple(f.owner.id for f in stack[1:] if f.owner)
                cell.headers = ancestors + (cell.id,)
                cell.rowspan = total_rows - depth
                leaf_column += 1

        return Grid(rows=rows)

    def _next_id(self, path: Tuple[int, ...], seen: set[str]) -> str:
        try:
            cell_id = self.ids(path)
        except IdGenerationError:
            raise
        except Exception as exc:
            raise IdGenerationError(f"Id factory failed: {exc}") from exc

        if not isinstance(cell_id, str) or not cell_id:
            raise IdGenerationError(f"Id factory returned an invalid id: {cell_id!r}")
        if cell_id in seen:
            raise IdGenerationError(f"Id factory returned a duplicate id: {cell_id}")
        seen.add(cell_id)
        return cell_id


_default_engine = ColumnLayoutEngine()


def build_layout(tree: Any, ids: Optional[IdFactory] = None) -> Grid:
    """Build a grid with the shared default engine, or a one-off engine for ``ids``."""
    if ids is None:
        return _default_engine.build_layout(tree)
    return ColumnLayoutEngine(ids).build_layout(tree)

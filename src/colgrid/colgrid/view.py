"""Header view - keeps rendered header markup in sync with a column source.

A ColumnStore is the source of truth for column definitions. A HeaderView
subscribes to it, and every columns change rebuilds the grid from scratch
and swaps it in together with freshly rendered markup. If a rebuild fails,
the previous grid and markup stay in place.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, Tuple

from .exceptions import ColgridError
from .layout import ColumnLayoutEngine, Grid
from .render import HeaderRenderer

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnsChange:
    """Notification payload: column definitions before and after a change."""

    prev: Any
    new: Any


ChangeCallback = Callable[[ColumnsChange], None]


class Subscription:
    """Handle returned by ``subscribe``; ``detach()`` stops notifications."""

    def __init__(self, store: "ColumnStore", callback: ChangeCallback):
        self._store = store
        self.callback = callback

    @property
    def attached(self) -> bool:
        return any(sub is self for sub in self._store._subscribers)

    def detach(self) -> None:
        self._store._unsubscribe(self)


class ColumnSource(Protocol):
    columns: Any
    css_prefix: Optional[str]

    def subscribe(self, callback: ChangeCallback) -> Subscription: ...


class ColumnStore:
    """Observable holder of column definitions."""

    def __init__(self, columns: Any = None, css_prefix: Optional[str] = None):
        self._columns = columns if columns is not None else []
        self.css_prefix = css_prefix
        self._subscribers: list[Subscription] = []

    @property
    def columns(self) -> Any:
        return self._columns

    def set_columns(self, columns: Any) -> None:
        """Replace the columns, then notify every subscriber."""
        change = ColumnsChange(prev=self._columns, new=columns)
        self._columns = columns
        for subscription in list(self._subscribers):
            subscription.callback(change)

    def subscribe(self, callback: ChangeCallback) -> Subscription:
        subscription = Subscription(self, callback)
        self._subscribers.append(subscription)
        return subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        self._subscribers = [s for s in self._subscribers if s is not subscription]


class HeaderView:
    """Builds, renders and rebuilds the header grid for a set of columns."""

    def __init__(
        self,
        columns: Any = None,
        source: Optional[ColumnSource] = None,
        css_prefix: Optional[str] = None,
        engine: Optional[ColumnLayoutEngine] = None,
        renderer: Optional[HeaderRenderer] = None,
    ):
        """Create a view.

        Args:
            columns: Initial column tree. Defaults to the source's columns.
            source: Source of truth to follow for column changes.
            css_prefix: Class name prefix; falls back to the source's prefix.
            engine: Layout engine; defaults to one with the shared id counter.
            renderer: Markup renderer; built from ``css_prefix`` when omitted.
        """
        self.source = source
        self.engine = engine or ColumnLayoutEngine()

        prefix = css_prefix or (source.css_prefix if source is not None else None)
        if renderer is None:
            renderer = HeaderRenderer(css_prefix=prefix) if prefix else HeaderRenderer()
        self.renderer = renderer

        if columns is None and source is not None:
            columns = source.columns

        self._lock = threading.Lock()
        self._state: Tuple[Grid, Optional[str]] = (
            self.engine.build_layout(columns),
            None,
        )
        self._subscriptions: dict[str, Subscription] = {}

    @property
    def grid(self) -> Grid:
        return self._state[0]

    @property
    def markup(self) -> Optional[str]:
        """Last rendered <thead> markup, None until ``render()`` is called."""
        return self._state[1]

    def render(self) -> str:
        """Render the current grid, remember the markup and start following the source."""
        with self._lock:
            grid = self._state[0]
            markup = self.renderer.render(grid)
            self._state = (grid, markup)
        self.bind()
        return markup

    def bind(self) -> None:
        """Subscribe to the source's column changes (once)."""
        if self.source is not None and "columns" not in self._subscriptions:
            self._subscriptions["columns"] = self.source.subscribe(
                self._after_columns_change
            )

    def destroy(self) -> None:
        """Detach every subscription held by the view."""
        for handle in self._subscriptions.values():
            handle.detach()
        self._subscriptions.clear()

    def _after_columns_change(self, change: ColumnsChange) -> None:
        try:
            grid = self.engine.build_layout(change.new)
            markup = self.renderer.render(grid)
        except ColgridError as exc:
            log.error("Keeping previous header grid, rebuild failed: %s", exc)
            return

        with self._lock:
            self._state = (grid, markup)
        log.debug("Header grid rebuilt: %d rows", grid.total_rows)

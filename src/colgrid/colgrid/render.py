"""Renderer - converts a header Grid to <thead> markup.

Markup comes from three Jinja2 templates (thead, row, cell). The built-in
ones live in colgrid/templates/; any of them can be replaced by an inline
template string. Cell templates receive the cell's full property bag, so
extra column fields can be referenced as ``{{ my_field }}``.

Labels are inserted as-is: they are treated as HTML content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, TemplateError

from .exceptions import RenderError
from .layout import Grid, LayoutCell

DEFAULT_CSS_PREFIX = "colgrid-table"


class HeaderRenderer:
    """Renders Grid rows and cells through Jinja2 templates."""

    CELL_TEMPLATE = "cell.html.j2"
    ROW_TEMPLATE = "row.html.j2"
    THEAD_TEMPLATE = "thead.html.j2"

    def __init__(
        self,
        css_prefix: str = DEFAULT_CSS_PREFIX,
        cell_template: str | None = None,
        row_template: str | None = None,
        thead_template: str | None = None,
        env: Environment | None = None,
    ):
        """Create a renderer.

        Args:
            css_prefix: Base token for generated class names.
            cell_template: Inline Jinja2 source replacing the <th> template.
            row_template: Inline Jinja2 source replacing the <tr> template.
            thead_template: Inline Jinja2 source replacing the <thead> template.
            env: Jinja2 environment; defaults to one loading colgrid/templates/.
        """
        self.css_prefix = css_prefix
        self._env = env or self._default_env()
        self._cell = self._load(self.CELL_TEMPLATE, cell_template)
        self._row = self._load(self.ROW_TEMPLATE, row_template)
        self._thead = self._load(self.THEAD_TEMPLATE, thead_template)

    def class_name(self, *tokens: str) -> str:
        """Build a CSS class name: class_name("liner") -> "colgrid-table-liner"."""
        return "-".join([self.css_prefix, *tokens])

    @staticmethod
    def content(cell: LayoutCell) -> str:
        """Cell text: label, else key, else "Column N" (N = position in row)."""
        return cell.label or cell.key or f"Column {cell.position}"

    @staticmethod
    def headers_attribute(cell: LayoutCell) -> str:
        """Value for a data cell's headers attribute under this leaf column."""
        return " ".join(cell.headers or ())

    def cell_context(self, cell: LayoutCell) -> dict[str, Any]:
        """Template variables for one cell.

        Defaults first, then the cell's fields (missing ones keep the
        default), then the computed content.
        """
        context: dict[str, Any] = {
            "abbr": "",
            "colspan": 1,
            "rowspan": 1,
            "liner_class": self.class_name("liner"),
        }
        context.update({k: v for k, v in cell.to_dict().items() if v is not None})
        context["content"] = self.content(cell)
        return context

    def render_cell(self, cell: LayoutCell) -> str:
        return self._render(self._cell, self.cell_context(cell))

    def render_row(self, row: list[LayoutCell]) -> str:
        html = "".join(self.render_cell(cell) for cell in row)
        return self._render(self._row, {"content": html})

    def render(self, grid: Grid) -> str:
        """Render the complete <thead> for a grid (an empty one for no rows)."""
        rows = "".join(self.render_row(row) for row in grid)
        return self._render(
            self._thead, {"classes": self.class_name("columns"), "content": rows}
        )

    def _load(self, name: str, source: str | None) -> Template:
        try:
            if source is not None:
                return self._env.from_string(source)
            return self._env.get_template(name)
        except TemplateError as exc:
            raise RenderError(f"Invalid template {name}: {exc}") from exc

    @staticmethod
    def _render(template: Template, context: dict[str, Any]) -> str:
        try:
            return template.render(context)
        except TemplateError as exc:
            raise RenderError(f"Failed to render header markup: {exc}") from exc

    @staticmethod
    def _default_env() -> Environment:
        templates_dir = Path(__file__).parent / "templates"
        return Environment(
            loader=FileSystemLoader(str(templates_dir)),
            keep_trailing_newline=False,
        )

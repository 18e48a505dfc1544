"""Example: lay out nested header columns and render them.

Shows how a shallow column (id) stretches down to meet a deeper branch
(address > city > zip/town).
"""

from pathlib import Path

from colgrid import HeaderRenderer, HeaderView, ColumnStore, build_layout, load_columns

columns = load_columns(Path(__file__).parent / "columns.yaml")

# 1. The grid itself
print("=" * 60)
print("GRID")
print("=" * 60)
grid = build_layout(columns)
for number, row in enumerate(grid, start=1):
    cells = ", ".join(
        f"{HeaderRenderer.content(c)} ({c.colspan}x{c.rowspan})" for c in row
    )
    print(f"row {number}: {cells}")

# 2. Leaf header chains, as used by data cells' headers attribute
print("=" * 60)
print("HEADER CHAINS")
print("=" * 60)
for leaf in grid.leaves():
    print(f"{leaf.key}: {HeaderRenderer.headers_attribute(leaf)}")

# 3. A view following a column store
print("=" * 60)
print("VIEW")
print("=" * 60)
store = ColumnStore(list(columns), css_prefix="example")
view = HeaderView(source=store)
print(view.render())

store.set_columns([{"key": "id"}, {"key": "total", "label": "Total"}])
print(view.markup)

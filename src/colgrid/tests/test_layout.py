"""Tests for the layout engine."""

import random

from colgrid import ColumnLayoutEngine, ColumnSpec, PositionalIds, build_layout
from colgrid.layout import Grid


def positional():
    return ColumnLayoutEngine(PositionalIds())


def ids_of(row):
    return [cell.key for cell in row]


def random_tree(rng, depth=0, max_depth=4):
    columns = []
    for i in range(rng.randint(1, 3)):
        node = {"key": f"d{depth}c{i}"}
        if depth < max_depth and rng.random() < 0.5:
            node["children"] = random_tree(rng, depth + 1, max_depth)
        columns.append(node)
    return columns


def max_depth(columns):
    deepest = 0
    for col in columns:
        children = col.get("children")
        if children:
            deepest = max(deepest, 1 + max_depth(children))
    return deepest


def test_empty_input_builds_no_rows():
    grid = build_layout([])
    assert isinstance(grid, Grid)
    assert len(grid) == 0
    assert grid.total_columns == 0


def test_non_sequence_input_builds_no_rows():
    assert build_layout(None).total_rows == 0
    assert build_layout("id").total_rows == 0
    assert build_layout({"key": "id"}).total_rows == 0


def test_single_leaf():
    grid = build_layout([{"key": "only"}])

    assert len(grid) == 1
    assert len(grid[0]) == 1
    cell = grid[0][0]
    assert cell.colspan == 1
    assert cell.rowspan == 1
    assert cell.headers == (cell.id,)
    assert cell.parent is None


def test_two_level_columns():
    """id spans both rows; name groups firstName and lastName."""
    grid = build_layout(
        [
            {"key": "id"},
            {
                "key": "name",
                "children": [{"key": "firstName"}, {"key": "lastName"}],
            },
        ]
    )

    assert len(grid) == 2
    assert ids_of(grid[0]) == ["id", "name"]
    assert ids_of(grid[1]) == ["firstName", "lastName"]

    id_, name = grid[0]
    first, last = grid[1]
    assert (id_.colspan, id_.rowspan) == (1, 2)
    assert (name.colspan, name.rowspan) == (2, 1)
    assert (first.colspan, first.rowspan) == (1, 1)
    assert (last.colspan, last.rowspan) == (1, 1)

    assert id_.headers == (id_.id,)
    assert first.headers == (name.id, first.id)
    assert last.headers == (name.id, last.id)
    assert name.headers is None


def test_uneven_depth_is_absorbed_by_leaf_rowspan():
    grid = build_layout(
        [
            {
                "key": "A",
                "children": [
                    {"key": "B"},
                    {"key": "C", "children": [{"key": "D"}]},
                ],
            }
        ]
    )

    assert len(grid) == 3
    assert ids_of(grid[0]) == ["A"]
    assert ids_of(grid[1]) == ["B", "C"]
    assert ids_of(grid[2]) == ["D"]

    a = grid.find("A")
    b = grid.find("B")
    c = grid.find("C")
    d = grid.find("D")
    assert (a.colspan, a.rowspan) == (2, 1)
    assert (b.colspan, b.rowspan) == (1, 2)
    assert (c.colspan, c.rowspan) == (1, 1)
    assert (d.colspan, d.rowspan) == (1, 1)
    assert b.headers == (a.id, b.id)
    assert d.headers == (a.id, c.id, d.id)


def test_colspan_sums_grandchildren():
    grid = build_layout(
        [
            {
                "key": "top",
                "children": [
                    {"key": "x", "children": [{"key": "x1"}, {"key": "x2"}]},
                    {"key": "y", "children": [{"key": "y1"}, {"key": "y2"}, {"key": "y3"}]},
                    {"key": "z"},
                ],
            }
        ]
    )

    assert grid.find("top").colspan == 6
    assert grid.find("x").colspan == 2
    assert grid.find("y").colspan == 3
    assert grid.find("z").rowspan == 2
    assert grid.total_columns == 6


def test_parent_links():
    grid = build_layout(
        [{"key": "name", "children": [{"key": "first"}, {"key": "last"}]}]
    )
    name = grid.find("name")

    assert grid.find("first").parent is name
    assert grid.find("last").parent_id == name.id
    assert name.parent is None
    assert name.parent_id is None


def test_positions_and_columns():
    grid = build_layout(
        [
            {"key": "id"},
            {"key": "name", "children": [{"key": "first"}, {"key": "last"}]},
            {"key": "age"},
        ]
    )

    assert [c.position for c in grid[0]] == [1, 2, 3]
    assert [c.column for c in grid[0]] == [0, 1, 3]
    assert [c.column for c in grid[1]] == [0, 1]
    assert [c.position for c in grid[1]] == [1, 2]
    assert [c.key for c in grid.leaves()] == ["id", "first", "last", "age"]


def test_invariants_hold_for_random_trees():
    rng = random.Random(1234)

    for _ in range(50):
        tree = random_tree(rng)
        grid = build_layout(tree)
        total = grid.total_rows

        assert total == 1 + max_depth(tree)

        for depth, row in enumerate(grid):
            for cell in row:
                assert cell.depth == depth
                children = [c for c in grid.cells() if c.parent is cell]
                if cell.is_leaf:
                    assert cell.colspan == 1
                    assert depth + cell.rowspan == total
                    assert len(cell.headers) == depth + 1
                    assert len(set(cell.headers)) == len(cell.headers)
                    assert cell.headers[-1] == cell.id
                    ancestor, chain = cell.parent, [cell.id]
                    while ancestor is not None:
                        chain.insert(0, ancestor.id)
                        ancestor = ancestor.parent
                    assert tuple(chain) == cell.headers
                else:
                    assert cell.rowspan == 1
                    assert cell.headers is None
                    assert cell.colspan == sum(c.colspan for c in children)
                assert cell.column + cell.colspan <= grid.total_columns


def test_rebuild_keeps_shape():
    tree = [
        {"key": "a", "children": [{"key": "b"}, {"key": "c", "children": [{"key": "d"}]}]},
        {"key": "e"},
    ]
    first = build_layout(tree)
    second = build_layout(tree)

    def shape(grid):
        return [[(c.key, c.colspan, c.rowspan, len(c.headers or ())) for c in row] for row in grid]

    assert shape(first) == shape(second)
    # default ids come from a process-wide counter, so they are fresh
    assert not {c.id for c in first.cells()} & {c.id for c in second.cells()}


def test_positional_ids_are_stable_across_rebuilds():
    tree = [{"key": "a", "children": [{"key": "b"}, {"key": "c"}]}, {"key": "d"}]
    engine = positional()

    first = engine.build_layout(tree)
    second = engine.build_layout(tree)

    assert [c.id for c in first.cells()] == [c.id for c in second.cells()]
    assert first.find("c").headers == ("colgrid-0", "colgrid-0-1")
    assert first.find("d").id == "colgrid-1"


def test_malformed_children_are_leaves():
    grid = build_layout(
        [
            {"key": "a", "children": "oops"},
            {"key": "b", "children": []},
            {"key": "c", "children": {"key": "nested"}},
            {"key": "d", "children": None},
        ]
    )

    assert len(grid) == 1
    assert all(cell.is_leaf for cell in grid[0])
    assert all(cell.colspan == 1 and cell.rowspan == 1 for cell in grid[0])


def test_input_specs_are_not_mutated():
    shared = ColumnSpec(key="amount")
    tree = (
        ColumnSpec(key="net", children=(shared,)),
        ColumnSpec(key="gross", children=(shared,)),
    )

    grid = build_layout(tree)

    amounts = grid[1]
    assert [c.spec for c in amounts] == [shared, shared]
    assert amounts[0] is not amounts[1]
    assert amounts[0].id != amounts[1].id
    assert amounts[0].parent is grid.find("net")
    assert amounts[1].parent is grid.find("gross")
    assert not hasattr(shared, "colspan")


def test_extension_fields_pass_through():
    grid = build_layout([{"key": "price", "format": "currency", "colspan": 7}])
    cell = grid[0][0]

    assert cell.extras == {"format": "currency", "colspan": 7}
    data = cell.to_dict()
    assert data["format"] == "currency"
    # computed fields win over extension fields of the same name
    assert data["colspan"] == 1
    assert data["headers"] == [cell.id]


def test_deep_tree_does_not_recurse():
    depth = 3000
    node = {"key": "leaf"}
    for i in range(depth):
        node = {"key": f"n{i}", "children": [node]}

    grid = build_layout([node])

    assert grid.total_rows == depth + 1
    leaf = grid.find("leaf")
    assert leaf.rowspan == 1
    assert len(leaf.headers) == depth + 1
    assert grid[0][0].colspan == 1


def test_spec_nodes_with_malformed_children():
    grid = build_layout(
        [
            ColumnSpec(key="a", children="oops"),  # type: ignore[arg-type]
            ColumnSpec(key="g", children=[{"key": "x"}, {"key": "y"}]),  # type: ignore[arg-type]
        ]
    )

    assert len(grid) == 2
    a, g = grid[0]
    assert (a.colspan, a.rowspan, a.headers) == (1, 2, (a.id,))
    assert (g.colspan, g.rowspan) == (2, 1)
    assert [c.key for c in grid[1]] == ["x", "y"]
    assert grid.find("x").headers == (g.id, grid.find("x").id)


def test_grouping_cell_drops_headers_extension_field():
    grid = build_layout(
        [{"key": "g", "headers": ["bogus"], "children": [{"key": "x", "headers": ["bogus"]}]}]
    )
    group, leaf = grid.find("g"), grid.find("x")

    assert "headers" not in group.to_dict()
    assert group.extras == {"headers": ["bogus"]}
    assert leaf.to_dict()["headers"] == [group.id, leaf.id]

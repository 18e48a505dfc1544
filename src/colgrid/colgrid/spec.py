"""Column specification - the input tree of header columns."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .exceptions import ColumnSpecError

CORE_FIELDS = ("label", "key", "abbr", "children")


@dataclass(frozen=True)
class ColumnSpec:
    """A header column, optionally grouping nested child columns.

    Fields other than label/key/abbr/children are kept in ``extras`` and
    passed through to the layout cell untouched.
    """

    label: Optional[str] = None
    key: Optional[str] = None
    abbr: Optional[str] = None
    children: Tuple["ColumnSpec", ...] = ()
    extras: Dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @classmethod
    def from_dict(cls, d: Any) -> "ColumnSpec":
        """Build a single column (and its subtree) from a raw node."""
        return parse_columns([d])[0]


def is_sequence(value: Any) -> bool:
    """True for list/tuple values; strings and mappings are not column lists."""
    return isinstance(value, (list, tuple))


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _coerce_node(raw: Any) -> Mapping[str, Any]:
    if isinstance(raw, Mapping):
        return raw
    if isinstance(raw, str):
        # shorthand: "name" == {key: "name"}
        return {"key": raw}
    raise ColumnSpecError(raw)


def _make_spec(
    fields: Mapping[str, Any], children: Tuple[ColumnSpec, ...]
) -> ColumnSpec:
    return ColumnSpec(
        label=_optional_str(fields.get("label")),
        key=_optional_str(fields.get("key")),
        abbr=_optional_str(fields.get("abbr")),
        children=children,
        extras={k: v for k, v in fields.items() if k not in CORE_FIELDS},
    )


@dataclass
class _ParseFrame:
    items: List[Any]
    owner: Optional[Mapping[str, Any]] = None
    spec: Optional[ColumnSpec] = None
    cursor: int = -1
    built: List[ColumnSpec] = field(default_factory=list)


def _finish(frame: _ParseFrame) -> ColumnSpec:
    children = tuple(frame.built)
    if frame.spec is None:
        return _make_spec(frame.owner or {}, children)
    original = frame.spec.children
    if isinstance(original, tuple) and all(
        new is old for new, old in zip(children, original)
    ):
        return frame.spec
    return replace(frame.spec, children=children)


def parse_columns(data: Any) -> Tuple[ColumnSpec, ...]:
    """Parse raw column nodes into an immutable ColumnSpec tree.

    Nodes may be ColumnSpec instances, mappings or bare strings. A
    ``children`` value that is missing, empty or not a list/tuple makes the
    node a leaf. Anything that is not a list/tuple at the top level parses
    to no columns. ColumnSpec nodes are normalized the same way and only
    replaced when their children change.

    Uses an explicit stack so deeply nested trees do not hit the recursion
    limit; children are built before their owner.
    """
    if not is_sequence(data):
        return ()

    root = _ParseFrame(items=list(data))
    stack = [root]

    while stack:
        frame = stack[-1]
        frame.cursor += 1

        if frame.cursor < len(frame.items):
            raw = frame.items[frame.cursor]
            if isinstance(raw, ColumnSpec):
                children = raw.children
                if is_sequence(children) and children:
                    stack.append(_ParseFrame(items=list(children), spec=raw))
                elif isinstance(children, tuple):
                    frame.built.append(raw)
                else:
                    frame.built.append(replace(raw, children=()))
                continue

            fields = _coerce_node(raw)
            children = fields.get("children")
            if is_sequence(children) and children:
                stack.append(_ParseFrame(items=list(children), owner=fields))
            else:
                frame.built.append(_make_spec(fields, ()))
            continue

        # Every item of this frame is built; hand the result to the owner
        stack.pop()
        if frame is not root:
            stack[-1].built.append(_finish(frame))

    return tuple(root.built)

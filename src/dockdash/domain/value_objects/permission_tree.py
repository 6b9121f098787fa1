"""Permission tree - immutable tagged tree addressed by dotted paths.

A node is one of three kinds:

* boolean leaf (``True`` / ``False``)
* allow-list leaf (``tuple`` of string identifiers, e.g. widget keys)
* mapping node (:class:`PermissionTree`) of named children

Lookups never raise: a missing segment, or a leaf reached before the path
is exhausted, resolves to :data:`NOT_FOUND`.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, StrEnum
from typing import Any, Final, Union

PATH_SEPARATOR: Final = "."


class _Missing(Enum):
    NOT_FOUND = "NOT_FOUND"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND: Final = _Missing.NOT_FOUND


class NodeKind(StrEnum):
    """Kinds of permission tree nodes."""

    BOOLEAN = "boolean"
    ALLOW_LIST = "allow_list"
    MAPPING = "mapping"


Node = Union[bool, tuple[str, ...], "PermissionTree"]


def node_kind(node: Node) -> NodeKind:
    """Return the tag of a node."""
    if isinstance(node, bool):
        return NodeKind.BOOLEAN
    if isinstance(node, tuple):
        return NodeKind.ALLOW_LIST
    if isinstance(node, PermissionTree):
        return NodeKind.MAPPING
    raise TypeError(f"Not a permission node: {node!r}")


def split_path(path: str) -> list[str]:
    """Split dotted path into segments; empty segments are invalid."""
    segments = path.split(PATH_SEPARATOR)
    if not path or any(not s for s in segments):
        raise ValueError(f"Invalid permission path: {path!r}")
    return segments


def _to_node(value: Any, where: str, dropped: list[str] | None = None) -> Node:
    if isinstance(value, bool):
        return value
    if isinstance(value, PermissionTree):
        return value
    if isinstance(value, Mapping):
        return PermissionTree.from_dict(value, dropped=dropped, _prefix=where)
    if isinstance(value, (list, tuple)):
        if not all(isinstance(v, str) for v in value):
            raise ValueError(f"Allow-list at {where!r} must contain only strings")
        return tuple(value)
    raise ValueError(f"Unsupported permission value at {where!r}: {value!r}")


@dataclass(frozen=True)
class PermissionTree:
    """Mapping node of a permission tree. Immutable; edits return new trees."""

    children: tuple[tuple[str, Node], ...] = ()
    _index: dict[str, Node] = field(
        init=False, repr=False, compare=False, hash=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.children, key=lambda item: item[0]))
        object.__setattr__(self, "children", ordered)
        object.__setattr__(self, "_index", dict(ordered))

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any] | None,
        *,
        dropped: list[str] | None = None,
        _prefix: str = "",
    ) -> "PermissionTree":
        """Build a tree from a JSON-shaped mapping.

        Unsupported values raise ``ValueError``. When ``dropped`` is given
        they are skipped instead and their paths appended to it, so they
        resolve to :data:`NOT_FOUND`. The root must still be a mapping.
        """
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError(f"Permission tree must be a mapping, got {type(data).__name__}")
        children = []
        for key, value in data.items():
            where = f"{_prefix}{PATH_SEPARATOR}{key}" if _prefix else str(key)
            try:
                children.append((str(key), _to_node(value, where, dropped)))
            except ValueError:
                if dropped is None:
                    raise
                dropped.append(where)
        return cls(tuple(children))

    def to_dict(self) -> dict[str, Any]:
        """Convert back to a JSON-shaped dict (allow-lists become lists)."""
        out: dict[str, Any] = {}
        for key, node in self.children:
            if isinstance(node, PermissionTree):
                out[key] = node.to_dict()
            elif isinstance(node, tuple):
                out[key] = list(node)
            else:
                out[key] = node
        return out

    @property
    def is_empty(self) -> bool:
        return not self.children

    def keys(self) -> list[str]:
        return [key for key, _ in self.children]

    def child(self, key: str) -> Node | _Missing:
        return self._index.get(key, NOT_FOUND)

    def get(self, path: str) -> Node | _Missing:
        """Resolve dotted path; NOT_FOUND when any segment cannot be walked."""
        try:
            segments = split_path(path)
        except ValueError:
            return NOT_FOUND
        current: Node = self
        for segment in segments:
            if not isinstance(current, PermissionTree):
                return NOT_FOUND
            nxt = current.child(segment)
            if nxt is NOT_FOUND:
                return NOT_FOUND
            current = nxt
        return current

    def with_value(self, path: str, value: Any) -> "PermissionTree":
        """Return a copy with the node at path replaced.

        Intermediate mapping nodes are created when absent. Walking through
        an existing leaf is refused, since a path keeps its node kind.
        """
        segments = split_path(path)
        return self._with_segments(segments, _to_node(value, path), path)

    def _with_segments(
        self, segments: list[str], node: Node, path: str
    ) -> "PermissionTree":
        head, rest = segments[0], segments[1:]
        updated = dict(self._index)
        if not rest:
            updated[head] = node
            return PermissionTree(tuple(updated.items()))
        existing = self._index.get(head)
        if existing is None:
            existing = PermissionTree()
        elif not isinstance(existing, PermissionTree):
            raise ValueError(
                f"Cannot descend into {node_kind(existing)} leaf {head!r} of {path!r}"
            )
        updated[head] = existing._with_segments(rest, node, path)
        return PermissionTree(tuple(updated.items()))

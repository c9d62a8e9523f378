"""Key extraction — flatten and edit nested translation trees.

A locale dictionary is modeled as a two-case variant:

* :class:`Leaf`: any non-object JSON value (strings, numbers, ``null``,
  arrays).  Arrays are opaque and never recursed into.
* :class:`Node`: an insertion-ordered mapping of child name to
  ``Leaf | Node``.

Flattened keys join the path segments with ``"."``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Sequence, Union

_logger = logging.getLogger(__name__)

KEY_SEPARATOR = "."


@dataclass(slots=True)
class Leaf:
    """Terminal value of a translation tree."""

    value: Any


@dataclass(slots=True)
class Node:
    """Internal mapping of a translation tree."""

    children: dict[str, "Tree"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.children)


Tree = Union[Leaf, Node]


# ── JSON conversion ─────────────────────────────────────────────────


def tree_from_json(obj: Any) -> Tree:
    """Convert a decoded JSON value into a :data:`Tree`."""
    if isinstance(obj, Mapping):
        return Node({str(k): tree_from_json(v) for k, v in obj.items()})
    return Leaf(obj)


def tree_to_json(tree: Tree) -> Any:
    """Convert a :data:`Tree` back into plain JSON values (order kept)."""
    if isinstance(tree, Node):
        return {k: tree_to_json(v) for k, v in tree.children.items()}
    return tree.value


def split_key(key: str) -> list[str]:
    return key.split(KEY_SEPARATOR)


# ── flattening ──────────────────────────────────────────────────────


def _walk(tree: Tree, prefix: str) -> Iterator[tuple[str, Any]]:
    if isinstance(tree, Leaf):
        yield prefix, tree.value
        return
    for name, child in tree.children.items():
        path = f"{prefix}{KEY_SEPARATOR}{name}" if prefix else name
        yield from _walk(child, path)


def flatten(tree: Tree) -> set[str]:
    """Return every leaf path of *tree* as a dot-joined key.

    Empty nodes contribute nothing.  A bare root ``Leaf`` has no path and
    yields an empty set.
    """
    if isinstance(tree, Leaf):
        return set()
    return {path for path, _ in _walk(tree, "")}


def flatten_items(tree: Tree) -> dict[str, Any]:
    """Return ``{flattened_key: leaf_value}`` in traversal order."""
    if isinstance(tree, Leaf):
        return {}
    return dict(_walk(tree, ""))


def unflatten(items: Mapping[str, Any]) -> Node:
    """Re-nest ``{flattened_key: value}`` into a fresh :class:`Node`."""
    root = Node()
    for key, value in items.items():
        set_at_path(root, split_key(key), value)
    return root


# ── mutation ────────────────────────────────────────────────────────


def set_at_path(tree: Node, segments: Sequence[str], value: Any) -> None:
    """Store *value* at *segments*, creating intermediate nodes.

    A ``Leaf`` sitting where an intermediate node is needed is replaced by
    an empty ``Node``; whatever it held is lost.  A ``Node`` at the final
    segment is replaced by the leaf, dropping its children; that case is
    logged as a warning.
    """
    if not segments:
        raise ValueError("set_at_path: empty key path")

    current = tree
    for name in segments[:-1]:
        child = current.children.get(name)
        if not isinstance(child, Node):
            child = Node()
            current.children[name] = child
        current = child

    name = segments[-1]
    existing = current.children.get(name)
    if isinstance(existing, Node) and existing.children:
        _logger.warning(
            "Replacing %r and its %d nested key(s) with a single value",
            KEY_SEPARATOR.join(segments),
            len(flatten(existing)),
        )
    current.children[name] = Leaf(value)


def remove_at_path(tree: Tree, segments: Sequence[str]) -> bool:
    """Delete the entry at *segments*; return whether anything was removed.

    Nodes emptied by the removal are pruned on the way back up, so removing
    ``a.b.c`` from ``{a: {b: {c: "x"}}}`` leaves ``{}``.
    """
    if not segments or not isinstance(tree, Node):
        return False

    name = segments[0]
    if name not in tree.children:
        return False

    if len(segments) == 1:
        del tree.children[name]
        return True

    child = tree.children[name]
    if not isinstance(child, Node):
        return False

    removed = remove_at_path(child, segments[1:])
    if removed and not child.children:
        del tree.children[name]
    return removed

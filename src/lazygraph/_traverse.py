"""Read-only walks over a graph for diagnostics.

Nothing here computes values or changes caches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._cache import is_valid

if TYPE_CHECKING:
    from ._cache import CacheState
    from ._handle import Handle
    from ._node import Node


@dataclass(frozen=True, slots=True)
class TraversalEntry:
    """One visited node in a depth-first traversal."""

    name: str
    node_id: int
    depth: int
    state: CacheState

    @property
    def is_valid(self) -> bool:
        """Whether the node held a cached value when visited."""
        return is_valid(self.state)


@dataclass(slots=True)
class TreeNode:
    """A node of a dependency tree for rendering."""

    name: str
    node_id: int
    state: CacheState
    children: list[TreeNode]


def traverse(handle: Handle) -> list[TraversalEntry]:
    """Visit the expression depth-first, parents before children.

    A sub-expression shared by several parents is visited once per path.

    Args:
        handle: Root of the expression.

    Returns:
        Entries in visiting order.

    """
    entries: list[TraversalEntry] = []
    stack: list[tuple[Node, int]] = [(handle.node, 0)]
    while stack:
        node, depth = stack.pop()
        entries.append(TraversalEntry(name=node.name, node_id=node.node_id, depth=depth, state=node.cache_state()))
        stack.extend((child, depth + 1) for child in reversed(node.children))
    return entries


def format_entry(entry: TraversalEntry) -> str:
    """Format an entry as `nodename = <name>, is valid = <true|false>`."""
    return f"nodename = {entry.name}, is valid = {str(entry.is_valid).lower()}"


def build_tree(handle: Handle, *, max_depth: int | None = None) -> TreeNode:
    """Build a dependency tree for rendering.

    Args:
        handle: Root of the tree.
        max_depth: Maximum depth to descend (None for unlimited).

    Returns:
        TreeNode for the root.

    """

    def build(node: Node, depth: int) -> TreeNode:
        children: list[TreeNode] = []
        if max_depth is None or depth < max_depth:
            children = [build(child, depth + 1) for child in node.children]
        return TreeNode(name=node.name, node_id=node.node_id, state=node.cache_state(), children=children)

    return build(handle.node, 0)


def upstream(handle: Handle) -> frozenset[int]:
    """Get the ids of all nodes the root transitively depends on."""
    visited: set[int] = set()
    stack = list(handle.node.children)
    while stack:
        current = stack.pop()
        if current.node_id not in visited:
            visited.add(current.node_id)
            stack.extend(current.children)
    return frozenset(visited)


def dependents(handle: Handle) -> frozenset[int]:
    """Get the ids of all live nodes that transitively depend on the root."""
    visited: set[int] = set()
    stack = list(handle.node.parents())
    while stack:
        current = stack.pop()
        if current.node_id not in visited:
            visited.add(current.node_id)
            stack.extend(current.parents())
    return frozenset(visited)

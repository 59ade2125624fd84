"""Graph nodes with memoized values and upward invalidation.

A node caches the value of its operation. Reading a node computes its
children first (bottom-up), while changing an input walks the other way:
the input clears its own cache and forwards the invalidation to every
node that uses it, stopping at nodes whose cache is already empty.

Children are held strongly. Parents are held through weak references so
that a child never keeps the expressions built on top of it alive.
"""

from __future__ import annotations

import itertools
import logging
import weakref
from typing import TYPE_CHECKING

import numpy as np

from ._cache import EMPTY, CacheState, Valid

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from typing import TypeAlias

    OpFn: TypeAlias = Callable[[Sequence[np.float32], Sequence[np.float32]], np.float32]

logger = logging.getLogger(__name__)

_node_ids = itertools.count()

_MIN_PRUNE_AT = 8


class Node:
    """A vertex of the computation graph.

    Attributes:
        name: Diagnostic label. Not required to be unique.
        node_id: Process-unique identity, assigned at creation.
        evaluations: Number of times the operation has been applied.

    """

    __slots__ = (
        "__weakref__",
        "_cache",
        "_children",
        "_op",
        "_params",
        "_parents",
        "_prune_at",
        "evaluations",
        "name",
        "node_id",
    )

    def __init__(
        self,
        name: str,
        children: Iterable[Node],
        params: Iterable[float],
        op: OpFn,
    ) -> None:
        self.name = name
        self.node_id = next(_node_ids)
        self.evaluations = 0
        self._children: tuple[Node, ...] = tuple(children)
        with np.errstate(over="ignore"):
            self._params: list[np.float32] = [np.float32(p) for p in params]
        self._op = op
        self._parents: list[weakref.ref[Node]] = []
        self._prune_at = _MIN_PRUNE_AT
        self._cache: np.float32 | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, id={self.node_id}, cache={self.cache_state()})"

    @property
    def children(self) -> tuple[Node, ...]:
        """Child nodes in operand order."""
        return self._children

    @property
    def params(self) -> tuple[np.float32, ...]:
        """Auxiliary scalar parameters of the operation."""
        return tuple(self._params)

    def parents(self) -> tuple[Node, ...]:
        """Nodes that currently use this node as an operand."""
        return tuple(parent for ref in self._parents if (parent := ref()) is not None)

    def add_parent(self, parent: Node) -> None:
        """Register `parent` so that invalidating this node reaches it."""
        if len(self._parents) >= self._prune_at:
            self._live_parents()
            self._prune_at = max(_MIN_PRUNE_AT, 2 * len(self._parents))
        self._parents.append(weakref.ref(parent))

    def _live_parents(self) -> list[Node]:
        """Return live parents in insertion order and drop dead references."""
        refs: list[weakref.ref[Node]] = []
        nodes: list[Node] = []
        for ref in self._parents:
            parent = ref()
            if parent is not None:
                refs.append(ref)
                nodes.append(parent)
        self._parents = refs
        return nodes

    def cache_state(self) -> CacheState:
        """Return the current cache state without computing anything."""
        if self._cache is None:
            return EMPTY
        return Valid(self._cache)

    def compute(self) -> np.float32:
        """Return the node value, evaluating only what is not cached.

        Children are evaluated before their parents, in operand order.
        """
        if self._cache is not None:
            return self._cache

        # (node, children_done) pairs; a node is evaluated on its second pop
        stack: list[tuple[Node, bool]] = [(self, False)]
        while stack:
            node, children_done = stack.pop()
            if node._cache is not None:
                continue
            if children_done:
                node._evaluate()
                continue
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node._children) if child._cache is None)
        return self._cache

    def _evaluate(self) -> None:
        values = [child._cache for child in self._children]
        with np.errstate(all="ignore"):
            result = np.float32(self._op(values, self._params))
        self.evaluations += 1
        self._cache = result
        logger.debug("Computed %s#%d = %r", self.name, self.node_id, result)

    def invalidate(self) -> None:
        """Clear the cache and propagate to all parents.

        Stops at nodes whose cache is already empty: every node above an
        empty node is empty as well.
        """
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            if node._cache is None:
                continue
            node._cache = None
            logger.debug("Invalidated %s#%d", node.name, node.node_id)
            stack.extend(reversed(node._live_parents()))


def _stored_value(_values: Sequence[np.float32], params: Sequence[np.float32]) -> np.float32:
    return params[0]


class LeafNode(Node):
    """A node without children that evaluates to its single param."""

    __slots__ = ()

    def __init__(self, name: str, value: float) -> None:
        super().__init__(name, (), (value,), _stored_value)

    @property
    def value(self) -> np.float32:
        """The stored value."""
        return self._params[0]


class ConstantNode(LeafNode):
    """A leaf holding a fixed value."""

    __slots__ = ()


class InputNode(LeafNode):
    """A leaf whose value can be changed after the graph is built."""

    __slots__ = ()

    def __init__(self, name: str, value: float = 0.0) -> None:
        super().__init__(name, value)

    def set(self, value: float) -> None:
        """Store a new value and invalidate everything that depends on it."""
        with np.errstate(over="ignore"):
            self._params[0] = np.float32(value)
        logger.debug("Set %s#%d = %r", self.name, self.node_id, self._params[0])
        self.invalidate()

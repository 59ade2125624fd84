"""Handles: the public face of graph nodes."""

from __future__ import annotations

from numbers import Real
from typing import TYPE_CHECKING

from ._cache import is_valid
from ._node import InputNode

if TYPE_CHECKING:
    import numpy as np

    from ._cache import CacheState
    from ._node import Node


class Handle:
    """Shared reference to a graph node.

    Copies of a handle refer to the same node, so a value set through one
    copy is seen by all of them.
    """

    __slots__ = ("_node",)

    def __init__(self, node: Node) -> None:
        self._node = node

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._node.name!r}, {self._node.cache_state()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Handle):
            return NotImplemented
        return self._node is other._node

    def __hash__(self) -> int:
        return hash(self._node.node_id)

    @property
    def node(self) -> Node:
        """The underlying shared node."""
        return self._node

    @property
    def name(self) -> str:
        """Diagnostic label of the node."""
        return self._node.name

    @property
    def children(self) -> tuple[Handle, ...]:
        """Handles to the child nodes, in operand order."""
        return tuple(wrap(child) for child in self._node.children)

    def cache_state(self) -> CacheState:
        """Return the cache state of the node without computing it."""
        return self._node.cache_state()

    @property
    def is_valid(self) -> bool:
        """Whether the node holds a cached value."""
        return is_valid(self._node.cache_state())

    def compute(self) -> np.float32:
        """Compute the value of the expression rooted at this handle."""
        return self._node.compute()

    # Operators build new nodes; numeric operands become constants.

    def __add__(self, other: Handle | Real) -> Handle:
        from ._build import add  # noqa: PLC0415

        return add(self, _as_handle(other))

    def __radd__(self, other: Real) -> Handle:
        from ._build import add  # noqa: PLC0415

        return add(_as_handle(other), self)

    def __sub__(self, other: Handle | Real) -> Handle:
        from ._build import sub  # noqa: PLC0415

        return sub(self, _as_handle(other))

    def __rsub__(self, other: Real) -> Handle:
        from ._build import sub  # noqa: PLC0415

        return sub(_as_handle(other), self)

    def __mul__(self, other: Handle | Real) -> Handle:
        from ._build import mul  # noqa: PLC0415

        return mul(self, _as_handle(other))

    def __rmul__(self, other: Real) -> Handle:
        from ._build import mul  # noqa: PLC0415

        return mul(_as_handle(other), self)

    def __truediv__(self, other: Handle | Real) -> Handle:
        from ._build import div  # noqa: PLC0415

        return div(self, _as_handle(other))

    def __rtruediv__(self, other: Real) -> Handle:
        from ._build import div  # noqa: PLC0415

        return div(_as_handle(other), self)

    def __neg__(self) -> Handle:
        from ._build import neg  # noqa: PLC0415

        return neg(self)

    def __pow__(self, exponent: Real) -> Handle:
        from ._build import pow  # noqa: A004, PLC0415

        if not isinstance(exponent, Real):
            return NotImplemented
        return pow(self, float(exponent))


class InputHandle(Handle):
    """Handle to an input node. The only handle whose value can be set."""

    __slots__ = ()

    _node: InputNode

    @property
    def node(self) -> InputNode:
        """The underlying shared input node."""
        return self._node

    @property
    def value(self) -> np.float32:
        """The stored input value."""
        return self._node.value

    def set(self, value: float) -> None:
        """Set the input value, invalidating every dependent cache."""
        self._node.set(value)


def wrap(node: Node) -> Handle:
    """Wrap a node in the handle type matching its capabilities."""
    if isinstance(node, InputNode):
        return InputHandle(node)
    return Handle(node)


def _as_handle(value: Handle | Real) -> Handle:
    if isinstance(value, Handle):
        return value
    if isinstance(value, Real):
        from ._build import constant  # noqa: PLC0415

        return constant(float(value))
    msg = f"Expected a Handle or a real number, got {type(value).__name__}"
    raise TypeError(msg)

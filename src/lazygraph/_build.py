"""Functions that build graph nodes and wire them to their operands."""

import logging

from ._errors import ArityError
from ._handle import Handle, InputHandle
from ._node import ConstantNode, InputNode, Node
from ._ops import ADD, COS, DIV, EXP, LOG, MUL, NEG, POW, SIN, SUB, Operation

logger = logging.getLogger(__name__)


def create_input(name: str) -> InputHandle:
    """Create an input node. Its value starts at 0 until set."""
    node = InputNode(name)
    logger.debug("Created input %s#%d", name, node.node_id)
    return InputHandle(node)


def constant(value: float, name: str = "const") -> Handle:
    """Create a leaf node with a fixed value."""
    return Handle(ConstantNode(name, value))


def apply(
    operation: Operation,
    *operands: Handle,
    params: tuple[float, ...] = (),
    name: str | None = None,
) -> Handle:
    """Build a node applying `operation` to `operands`.

    The new node is registered as a parent of every operand, so setting
    any input below it invalidates its cache.

    Args:
        operation: The operation the node evaluates.
        *operands: Handles to the child nodes, in operand order.
        params: Auxiliary scalar params of the operation.
        name: Label of the node. Defaults to the operation name.

    Returns:
        A handle to the new node.

    Raises:
        ArityError: If the number of operands or params does not match the operation.
        TypeError: If an operand is not a Handle.

    """
    if len(operands) != operation.arity:
        raise ArityError(operation.name, "operands", operation.arity, len(operands))
    if len(params) != operation.param_count:
        raise ArityError(operation.name, "params", operation.param_count, len(params))
    for operand in operands:
        if not isinstance(operand, Handle):
            msg = f"Operand of '{operation.name}' must be a Handle, got {type(operand).__name__}"
            raise TypeError(msg)

    children = [operand.node for operand in operands]
    node = Node(name or operation.name, children, params, operation)
    for child in children:
        child.add_parent(node)

    logger.debug(
        "Created %s#%d over %s",
        node.name,
        node.node_id,
        ", ".join(f"{c.name}#{c.node_id}" for c in children),
    )
    return Handle(node)


def add(lhs: Handle, rhs: Handle) -> Handle:
    """Sum of two operands."""
    return apply(ADD, lhs, rhs)


def sub(lhs: Handle, rhs: Handle) -> Handle:
    """Difference of two operands."""
    return apply(SUB, lhs, rhs)


def mul(lhs: Handle, rhs: Handle) -> Handle:
    """Product of two operands."""
    return apply(MUL, lhs, rhs)


def div(lhs: Handle, rhs: Handle) -> Handle:
    """Quotient of two operands."""
    return apply(DIV, lhs, rhs)


def neg(operand: Handle) -> Handle:
    """Negation of the operand."""
    return apply(NEG, operand)


def sin(operand: Handle) -> Handle:
    """Sine of the operand, in radians."""
    return apply(SIN, operand)


def cos(operand: Handle) -> Handle:
    """Cosine of the operand, in radians."""
    return apply(COS, operand)


def exp(operand: Handle) -> Handle:
    """Natural exponential of the operand."""
    return apply(EXP, operand)


def pow(operand: Handle, exponent: float) -> Handle:  # noqa: A001
    """Raise `operand` to a fixed `exponent`."""
    return apply(POW, operand, params=(exponent,))


def log(operand: Handle, base: float) -> Handle:
    """Logarithm of `operand` in a fixed `base`."""
    return apply(LOG, operand, params=(base,))

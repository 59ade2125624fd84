"""Lazily evaluated computation graphs with memoized nodes."""

__all__ = [
    "ADD",
    "COS",
    "DIV",
    "EMPTY",
    "EXP",
    "LOG",
    "MUL",
    "NEG",
    "POW",
    "SIN",
    "SUB",
    "ArityError",
    "CacheState",
    "ConfigError",
    "ConstantNode",
    "Empty",
    "Handle",
    "InputHandle",
    "InputNode",
    "LazygraphError",
    "LeafNode",
    "Node",
    "Operation",
    "TraversalEntry",
    "TreeNode",
    "Valid",
    "add",
    "apply",
    "build_tree",
    "constant",
    "cos",
    "create_input",
    "dependents",
    "div",
    "exp",
    "format_entry",
    "is_valid",
    "log",
    "mul",
    "neg",
    "pow",
    "round_to",
    "sin",
    "sub",
    "traverse",
    "upstream",
    "wrap",
]

from ._build import add, apply, constant, cos, create_input, div, exp, log, mul, neg, pow, sin, sub  # noqa: A004
from ._cache import EMPTY, CacheState, Empty, Valid, is_valid
from ._errors import ArityError, ConfigError, LazygraphError
from ._handle import Handle, InputHandle, wrap
from ._node import ConstantNode, InputNode, LeafNode, Node
from ._ops import ADD, COS, DIV, EXP, LOG, MUL, NEG, POW, SIN, SUB, Operation
from ._traverse import TraversalEntry, TreeNode, build_tree, dependents, format_entry, traverse, upstream
from ._utils import round_to

"""Pure scalar operations that graph nodes apply to their operands.

Each operation receives the computed values of its children and the node's
auxiliary params, both as sequences of ``float32``, and returns a
``float32``. Operations know nothing about caching.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TypeAlias

import numpy as np

Values: TypeAlias = Sequence[np.float32]


@dataclass(frozen=True, slots=True)
class Operation:
    """A named operation with a fixed number of operands and params.

    Attributes:
        name: Label given to nodes built with this operation.
        arity: Number of child nodes.
        param_count: Number of auxiliary scalar params.
        fn: The function computing the result from child values and params.

    """

    name: str
    arity: int
    param_count: int
    fn: Callable[[Values, Values], np.float32]

    def __call__(self, values: Values, params: Values) -> np.float32:
        """Apply the operation to child values and params."""
        return self.fn(values, params)


def _log(values: Values, params: Values) -> np.float32:
    # log_b(x) = ln(x) / ln(b)
    return np.float32(np.log(values[0]) / np.log(params[0]))


ADD = Operation("add", 2, 0, lambda v, _p: v[0] + v[1])
SUB = Operation("sub", 2, 0, lambda v, _p: v[0] - v[1])
MUL = Operation("mul", 2, 0, lambda v, _p: v[0] * v[1])
DIV = Operation("div", 2, 0, lambda v, _p: np.divide(v[0], v[1]))
NEG = Operation("neg", 1, 0, lambda v, _p: -v[0])
SIN = Operation("sin", 1, 0, lambda v, _p: np.sin(v[0]))
COS = Operation("cos", 1, 0, lambda v, _p: np.cos(v[0]))
EXP = Operation("exp", 1, 0, lambda v, _p: np.exp(v[0]))
POW = Operation("pow", 1, 1, lambda v, p: np.power(v[0], p[0]))
LOG = Operation("log", 1, 1, _log)

"""Cache states of a graph node."""

from dataclasses import dataclass
from typing import TypeAlias

import numpy as np


@dataclass(frozen=True, slots=True)
class Empty:
    """No trustworthy cached value."""

    def __str__(self) -> str:
        return "Empty"


@dataclass(frozen=True, slots=True)
class Valid:
    """Holds the last computed value of a node."""

    value: np.float32

    def __str__(self) -> str:
        return f"Valid({self.value})"


CacheState: TypeAlias = Empty | Valid

EMPTY = Empty()


def is_valid(state: CacheState) -> bool:
    """Check whether a cache state holds a value."""
    return isinstance(state, Valid)

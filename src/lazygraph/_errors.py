"""Exception types raised by lazygraph."""


class LazygraphError(Exception):
    """Base class for lazygraph errors."""


class ArityError(LazygraphError, ValueError):
    """Raised when an operation is applied to the wrong number of operands or params."""

    def __init__(self, operation: str, kind: str, expected: int, actual: int) -> None:
        self.operation = operation
        self.kind = kind
        self.expected = expected
        self.actual = actual
        super().__init__(f"Operation '{operation}' expects {expected} {kind}, got {actual}")


class ConfigError(LazygraphError):
    """Error in lazygraph configuration."""

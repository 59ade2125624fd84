"""Numeric helpers."""


def round_to(x: float, precision: int) -> float:
    """Round `x` to `precision` decimal digits.

    Example:
        >>> round_to(-0.327270448, 5)
        -0.32727

    """
    m = 10**precision
    return round(float(x) * m) / m

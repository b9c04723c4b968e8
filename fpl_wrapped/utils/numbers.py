"""
Numeric helpers shared by the analyzers and the scoring pipeline.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List


def round_half_up(value: float, places: int = 0) -> float:
    """
    Round a number with half-up semantics.

    Python's built-in round() uses banker's rounding, so 2.5 becomes 2.
    FPL figures are presented the way fans expect (2.5 -> 3, -2.5 -> -2).

    Args:
        value: Number to round
        places: Decimal places to keep

    Returns:
        Rounded float (an integral float when places is 0)

    Examples:
        >>> round_half_up(2.5)
        3.0
        >>> round_half_up(1.25, 1)
        1.3
    """
    quantum = Decimal(1).scaleb(-places)
    exact = Decimal(str(value))
    rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP)
    if exact < 0 and exact - rounded == quantum / 2:
        # Match "towards +infinity" on exact negative halves
        rounded += quantum
    return float(rounded)


def round_int(value: float) -> int:
    """Round half-up to an int."""
    return int(round_half_up(value))


def clamp01(value: float) -> float:
    """Clamp a value into the 0.0-1.0 range."""
    return max(0.0, min(1.0, value))


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning default when the denominator is zero."""
    if denominator == 0:
        return default
    return numerator / denominator


def mean(values: Iterable[float], default: float = 0.0) -> float:
    """Arithmetic mean with a fallback for empty input."""
    items: List[float] = list(values)
    if not items:
        return default
    return sum(items) / len(items)


def population_std_dev(values: Iterable[float]) -> float:
    """Population standard deviation (divides by N), 0 for empty input."""
    items: List[float] = list(values)
    if not items:
        return 0.0
    avg = sum(items) / len(items)
    variance = sum((v - avg) ** 2 for v in items) / len(items)
    return variance ** 0.5

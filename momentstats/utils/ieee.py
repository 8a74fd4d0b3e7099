"""Float helpers that follow IEEE 754 instead of raising."""
import math

import numpy as np


def divide(numerator: float, denominator: float) -> float:
    """numerator / denominator, giving inf or NaN for a zero denominator."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))


def sqrt(value: float) -> float:
    """Square root that returns NaN for negative input."""
    if value < 0:
        return math.nan
    return math.sqrt(value)


__all__ = ["divide", "sqrt"]

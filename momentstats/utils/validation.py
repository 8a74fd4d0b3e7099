"""Argument checks shared by the statistics and the array buffer."""
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from momentstats.core.errors import (
    DimensionMismatchError,
    MathIllegalArgumentError,
    NotPositiveError,
    NullArgumentError,
    NumberIsTooLargeError,
)


def check_not_none(obj, what: str = "argument") -> None:
    """Raise NullArgumentError when obj is None."""
    if obj is None:
        raise NullArgumentError(what)


def to_array(values: Optional[Sequence[float]], what: str = "input array") -> np.ndarray:
    """
    Read values as a one-dimensional float64 array.

    Lists, tuples, numpy arrays and pandas Series are all accepted. The
    returned array may share memory with the input, so callers must not
    write to it.
    """
    if values is None:
        raise NullArgumentError(what)
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise MathIllegalArgumentError(f"{what} must be one-dimensional, got shape {arr.shape}")
    return arr


def resolve_window(
    values: Optional[Sequence[float]],
    begin: int = 0,
    length: Optional[int] = None,
) -> Tuple[np.ndarray, int, int]:
    """Convert values and fill in a missing length as "to the end of the array"."""
    arr = to_array(values)
    if length is None:
        length = max(arr.size - begin, 0)
    return arr, int(begin), int(length)


def verify_values(values: np.ndarray, begin: int, length: int, allow_empty: bool = False) -> bool:
    """
    Check that (begin, length) designates a sub-array of values.

    Returns:
        True if the window is valid and non-empty (or empty and allow_empty),
        False if the window is empty and allow_empty is False
    """
    if values is None:
        raise NullArgumentError("input array")
    if begin < 0:
        raise NotPositiveError("start position", begin)
    if length < 0:
        raise NotPositiveError("length", length)
    if begin + length > len(values):
        raise NumberIsTooLargeError("subarray end", begin + length, len(values))
    if length == 0 and not allow_empty:
        return False
    return True


def verify_weighted_values(
    values: np.ndarray,
    weights: np.ndarray,
    begin: int,
    length: int,
    allow_empty: bool = False,
) -> bool:
    """
    Check a values/weights pair over (begin, length).

    Weights inside the window must be finite and non-negative, and at least
    one of them must be strictly positive. An empty window skips the weight
    checks and follows allow_empty.
    """
    if weights is None or values is None:
        raise NullArgumentError("input array")
    if len(weights) != len(values):
        raise DimensionMismatchError(len(weights), len(values))
    if not verify_values(values, begin, length, allow_empty=True):
        return False
    if length == 0:
        return allow_empty

    contains_positive_weight = False
    for i in range(begin, begin + length):
        weight = float(weights[i])
        if math.isnan(weight):
            raise MathIllegalArgumentError(f"NaN weight at index {i}")
        if math.isinf(weight):
            raise MathIllegalArgumentError(f"infinite weight {weight} at index {i}")
        if weight < 0:
            raise MathIllegalArgumentError(f"negative weight {weight} at index {i}")
        if not contains_positive_weight and weight > 0.0:
            contains_positive_weight = True

    if not contains_positive_weight:
        raise MathIllegalArgumentError("weights must contain at least one non-zero value")
    return True


__all__ = [
    "check_not_none",
    "to_array",
    "resolve_window",
    "verify_values",
    "verify_weighted_values",
]

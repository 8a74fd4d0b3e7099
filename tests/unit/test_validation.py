"""Unit tests for argument validation, float helpers and the error hierarchy."""
import math
import numpy as np
import pytest
from momentstats.core.errors import (
    ArrayIndexError,
    DimensionMismatchError,
    MathIllegalArgumentError,
    MathIllegalStateError,
    NotPositiveError,
    NullArgumentError,
    NumberIsTooLargeError,
    StatisticsError,
)
from momentstats.utils import ieee
from momentstats.utils.validation import resolve_window, to_array, verify_values, verify_weighted_values


def test_to_array_accepts_sequences():
    """Test lists, tuples and numpy arrays become float64 arrays."""
    assert to_array([1, 2, 3]).dtype == np.float64
    assert to_array((1.5,)).tolist() == [1.5]
    assert to_array(np.arange(3)).tolist() == [0.0, 1.0, 2.0]


def test_to_array_rejects_bad_input():
    """Test None and 2-D input are argument errors."""
    with pytest.raises(NullArgumentError):
        to_array(None)
    with pytest.raises(MathIllegalArgumentError):
        to_array([[1.0, 2.0], [3.0, 4.0]])


def test_resolve_window_defaults():
    """Test a missing length runs to the end of the array."""
    arr, begin, length = resolve_window([1.0, 2.0, 3.0], 1)
    assert (begin, length) == (1, 2)
    assert resolve_window([1.0], 5)[2] == 0


def test_verify_values():
    """Test window checks."""
    arr = np.zeros(5)
    assert verify_values(arr, 0, 5) is True
    assert verify_values(arr, 5, 0) is False
    assert verify_values(arr, 5, 0, allow_empty=True) is True
    with pytest.raises(NotPositiveError):
        verify_values(arr, -1, 1)
    with pytest.raises(NumberIsTooLargeError):
        verify_values(arr, 3, 3)


def test_verify_weighted_values():
    """Test weight checks only look inside the window."""
    values = np.ones(4)
    weights = np.array([-1.0, 1.0, 2.0, float("nan")])
    assert verify_weighted_values(values, weights, 1, 2) is True
    with pytest.raises(MathIllegalArgumentError):
        verify_weighted_values(values, weights, 0, 2)
    with pytest.raises(DimensionMismatchError):
        verify_weighted_values(values, weights[:3], 0, 2)
    assert verify_weighted_values(values, weights, 4, 0) is False


def test_ieee_divide():
    """Test division by zero follows IEEE 754."""
    assert ieee.divide(1.0, 0.0) == math.inf
    assert ieee.divide(-1.0, 0.0) == -math.inf
    assert math.isnan(ieee.divide(0.0, 0.0))
    assert ieee.divide(3.0, 2.0) == 1.5


def test_ieee_sqrt():
    """Test negative input gives NaN."""
    assert math.isnan(ieee.sqrt(-1.0))
    assert math.isnan(ieee.sqrt(float("nan")))
    assert ieee.sqrt(4.0) == 2.0


def test_error_hierarchy():
    """Test errors also derive from the matching builtin exceptions."""
    assert issubclass(MathIllegalArgumentError, ValueError)
    assert issubclass(NullArgumentError, MathIllegalArgumentError)
    assert issubclass(MathIllegalStateError, RuntimeError)
    assert issubclass(ArrayIndexError, IndexError)
    for cls in (MathIllegalArgumentError, MathIllegalStateError, ArrayIndexError):
        assert issubclass(cls, StatisticsError)


def test_error_messages():
    """Test error attributes and messages."""
    error = NumberIsTooLargeError("subarray end", 8, 5)
    assert error.value == 8
    assert error.bound == 5
    assert "subarray end (8) must be <= 5" in str(error)
    assert ArrayIndexError(7).index == 7
    assert DimensionMismatchError(2, 3).expected == 3

"""Base classes for univariate statistics."""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np

from momentstats.utils.validation import (
    resolve_window,
    to_array,
    verify_values,
    verify_weighted_values,
)


def _same_or_both_nan(a: float, b: float) -> bool:
    return a == b or (math.isnan(a) and math.isnan(b))


class UnivariateStatistic(ABC):
    """
    A statistic computed over a window of a double array.

    Subclasses implement ``evaluate(values, begin, length)``. A copy of a
    data set can also be stored with ``set_data`` and evaluated later with
    a bare ``evaluate()``.
    """

    def __init__(self):
        self._stored_data: Optional[np.ndarray] = None

    @property
    def data(self) -> Optional[np.ndarray]:
        """Copy of the stored data (None when nothing is stored)."""
        return None if self._stored_data is None else self._stored_data.copy()

    @data.setter
    def data(self, values: Optional[Sequence[float]]) -> None:
        self._stored_data = None if values is None else to_array(values).copy()

    def set_data(self, values: Sequence[float], begin: int = 0, length: Optional[int] = None) -> None:
        """Store a copy of values[begin:begin + length]."""
        arr, begin, length = resolve_window(values, begin, length)
        verify_values(arr, begin, length, allow_empty=True)
        self._stored_data = arr[begin : begin + length].copy()

    @abstractmethod
    def evaluate(
        self,
        values: Optional[Sequence[float]] = None,
        begin: int = 0,
        length: Optional[int] = None,
    ) -> float:
        """Compute the statistic over values[begin:begin + length]."""

    @abstractmethod
    def copy(self) -> "UnivariateStatistic":
        """Return an independent copy."""

    def _stored_or(self, values: Optional[Sequence[float]]) -> Sequence[float]:
        # evaluate() with no array falls back to the stored data
        return self._stored_data if values is None else values

    @staticmethod
    def _test(values: np.ndarray, begin: int, length: int, allow_empty: bool = False) -> bool:
        return verify_values(values, begin, length, allow_empty)

    @staticmethod
    def _test_weighted(
        values: np.ndarray,
        weights: np.ndarray,
        begin: int,
        length: int,
        allow_empty: bool = False,
    ) -> bool:
        return verify_weighted_values(values, weights, begin, length, allow_empty)


class StorelessUnivariateStatistic(UnivariateStatistic):
    """
    A statistic that can be updated one value at a time without storing data.

    ``evaluate`` on this class clears the statistic, feeds the window
    through ``increment`` and returns ``result``.
    """

    @abstractmethod
    def increment(self, d: float) -> None:
        """Update the statistic with one observation."""

    @property
    @abstractmethod
    def result(self) -> float:
        """Current value of the statistic."""

    @property
    @abstractmethod
    def n(self) -> int:
        """Number of observations consumed."""

    @abstractmethod
    def clear(self) -> None:
        """Reset to the empty state."""

    def increment_all(self, values: Sequence[float], begin: int = 0, length: Optional[int] = None) -> None:
        arr, begin, length = resolve_window(values, begin, length)
        if self._test(arr, begin, length):
            for value in arr[begin : begin + length].tolist():
                self.increment(value)

    def evaluate(
        self,
        values: Optional[Sequence[float]] = None,
        begin: int = 0,
        length: Optional[int] = None,
    ) -> float:
        arr, begin, length = resolve_window(self._stored_or(values), begin, length)
        if self._test(arr, begin, length):
            self.clear()
            self.increment_all(arr, begin, length)
        return self.result

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, StorelessUnivariateStatistic):
            return NotImplemented
        return _same_or_both_nan(other.result, self.result) and other.n == self.n

    def __hash__(self) -> int:
        result = self.result
        # NaN results hash alike
        result_hash = 0 if math.isnan(result) else hash(result)
        return 31 * (31 + result_hash) + hash(self.n)


__all__ = ["UnivariateStatistic", "StorelessUnivariateStatistic"]

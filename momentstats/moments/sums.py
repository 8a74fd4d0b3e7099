"""Storeless sums."""
from __future__ import annotations

from typing import Optional, Sequence

from momentstats.moments.base import StorelessUnivariateStatistic
from momentstats.utils.validation import check_not_none, resolve_window, to_array


class Sum(StorelessUnivariateStatistic):
    """Sum of the values; 0.0 for an empty window."""

    def __init__(self):
        super().__init__()
        self._n = 0
        self._value = 0.0

    def increment(self, d: float) -> None:
        self._value += d
        self._n += 1

    @property
    def result(self) -> float:
        return self._value

    @property
    def n(self) -> int:
        return self._n

    def clear(self) -> None:
        self._value = 0.0
        self._n = 0

    def evaluate(
        self,
        values: Optional[Sequence[float]] = None,
        begin: int = 0,
        length: Optional[int] = None,
    ) -> float:
        arr, begin, length = resolve_window(self._stored_or(values), begin, length)
        total = float("nan")
        if self._test(arr, begin, length, allow_empty=True):
            total = 0.0
            for value in arr[begin : begin + length].tolist():
                total += value
        return total

    def evaluate_weighted(
        self,
        values: Sequence[float],
        weights: Sequence[float],
        begin: int = 0,
        length: Optional[int] = None,
    ) -> float:
        """Weighted sum ``sum(w[i] * x[i])`` over the window."""
        arr, begin, length = resolve_window(values, begin, length)
        w = to_array(weights, "weights array")
        total = float("nan")
        if self._test_weighted(arr, w, begin, length, allow_empty=True):
            total = 0.0
            for value, weight in zip(arr[begin : begin + length].tolist(), w[begin : begin + length].tolist()):
                total += value * weight
        return total

    def copy(self) -> "Sum":
        result = Sum()
        Sum.copy_state(self, result)
        return result

    @staticmethod
    def copy_state(source: "Sum", dest: "Sum") -> None:
        check_not_none(source, "source")
        check_not_none(dest, "dest")
        dest._stored_data = source.data
        dest._n = source._n
        dest._value = source._value


class SumOfSquares(StorelessUnivariateStatistic):
    """Sum of squared values; 0.0 for an empty window."""

    def __init__(self):
        super().__init__()
        self._n = 0
        self._value = 0.0

    def increment(self, d: float) -> None:
        self._value += d * d
        self._n += 1

    @property
    def result(self) -> float:
        return self._value

    @property
    def n(self) -> int:
        return self._n

    def clear(self) -> None:
        self._value = 0.0
        self._n = 0

    def evaluate(
        self,
        values: Optional[Sequence[float]] = None,
        begin: int = 0,
        length: Optional[int] = None,
    ) -> float:
        arr, begin, length = resolve_window(self._stored_or(values), begin, length)
        total = float("nan")
        if self._test(arr, begin, length, allow_empty=True):
            total = 0.0
            for value in arr[begin : begin + length].tolist():
                total += value * value
        return total

    def copy(self) -> "SumOfSquares":
        result = SumOfSquares()
        result._stored_data = self.data
        result._n = self._n
        result._value = self._value
        return result


__all__ = ["Sum", "SumOfSquares"]

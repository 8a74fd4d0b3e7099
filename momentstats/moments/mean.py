"""Arithmetic mean."""
from __future__ import annotations

import math
from typing import Optional, Sequence, Union

from momentstats.moments.base import StorelessUnivariateStatistic
from momentstats.moments.moment import FirstMoment, FourthMoment, SecondMoment, ThirdMoment
from momentstats.moments.sums import Sum
from momentstats.utils.validation import check_not_none, resolve_window, to_array

MomentLike = Union[FirstMoment, SecondMoment, ThirdMoment, FourthMoment]


class Mean(StorelessUnivariateStatistic):
    """
    Arithmetic mean of the values.

    Incrementally the mean is read from a moment accumulator. Any order of
    the chain works, so a Mean can share the SecondMoment that also backs a
    Variance. When the accumulator is passed in, ``increment`` and ``clear``
    are no-ops and the caller drives the shared accumulator.

    ``evaluate`` is a separate two-pass algorithm: the first pass gives
    ``xbar = sum / n``, the second adds the mean of ``x - xbar`` as a
    correction for the rounding error of the first.
    """

    def __init__(self, moment: Optional[MomentLike] = None):
        super().__init__()
        if moment is None:
            self.moment: MomentLike = FirstMoment()
            self.inc_moment = True
        else:
            self.moment = moment
            self.inc_moment = False

    def increment(self, d: float) -> None:
        if self.inc_moment:
            self.moment.increment(d)

    def clear(self) -> None:
        if self.inc_moment:
            self.moment.clear()

    @property
    def result(self) -> float:
        return self.moment.m1

    @property
    def n(self) -> int:
        return self.moment.n

    def evaluate(
        self,
        values: Optional[Sequence[float]] = None,
        begin: int = 0,
        length: Optional[int] = None,
    ) -> float:
        arr, begin, length = resolve_window(self._stored_or(values), begin, length)
        if self._test(arr, begin, length):
            sample_size = float(length)
            xbar = Sum().evaluate(arr, begin, length) / sample_size

            correction = 0.0
            for value in arr[begin : begin + length].tolist():
                correction += value - xbar
            return xbar + (correction / sample_size)
        return math.nan

    def evaluate_weighted(
        self,
        values: Sequence[float],
        weights: Sequence[float],
        begin: int = 0,
        length: Optional[int] = None,
    ) -> float:
        """
        Weighted mean ``sum(w * x) / sum(w)`` with the same correction pass.

        Weights must be finite and non-negative with at least one positive
        entry; values and weights must have the same length.
        """
        arr, begin, length = resolve_window(values, begin, length)
        w = to_array(weights, "weights array")
        if self._test_weighted(arr, w, begin, length):
            total = Sum()
            sumw = total.evaluate(w, begin, length)
            xbarw = total.evaluate_weighted(arr, w, begin, length) / sumw

            correction = 0.0
            for value, weight in zip(arr[begin : begin + length].tolist(), w[begin : begin + length].tolist()):
                correction += weight * (value - xbarw)
            return xbarw + (correction / sumw)
        return math.nan

    def copy(self) -> "Mean":
        result = Mean()
        Mean.copy_state(self, result)
        return result

    @staticmethod
    def copy_state(source: "Mean", dest: "Mean") -> None:
        """Copy source into dest; the accumulator is cloned, never shared."""
        check_not_none(source, "source")
        check_not_none(dest, "dest")
        dest._stored_data = source.data
        dest.inc_moment = source.inc_moment
        dest.moment = source.moment.copy()


__all__ = ["Mean", "MomentLike"]

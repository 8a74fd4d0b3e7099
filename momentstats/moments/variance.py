"""Variance."""
from __future__ import annotations

import math
from typing import Optional, Sequence

from momentstats.moments.base import StorelessUnivariateStatistic
from momentstats.moments.mean import Mean
from momentstats.moments.moment import SecondMoment
from momentstats.utils import ieee
from momentstats.utils.validation import check_not_none, resolve_window, to_array


class Variance(StorelessUnivariateStatistic):
    """
    Sample (bias corrected) or population variance.

    Incremental results come from a SecondMoment: ``m2 / (n - 1)`` when
    ``bias_corrected`` is true, otherwise ``m2 / n``. With fewer than two
    observations the result is NaN (none) or 0.0 (one).

    A Variance built around an existing SecondMoment does not own it:
    ``increment`` and ``clear`` do nothing and the result tracks whatever is
    fed to the shared accumulator. Several views with different bias
    settings can share one accumulator this way.

    ``evaluate`` uses the two-pass "corrected" algorithm::

        var = (sum(dev ** 2) - sum(dev) ** 2 / n) / (n - 1)

    where ``dev = x - mean``. The second term removes first order error from
    an imprecise mean.

    Not thread-safe.
    """

    def __init__(self, bias_corrected: bool = True, moment: Optional[SecondMoment] = None):
        super().__init__()
        if moment is None:
            self.moment = SecondMoment()
            self.inc_moment = True
        else:
            self.moment = moment
            self.inc_moment = False
        self._bias_corrected = bias_corrected

    @property
    def bias_corrected(self) -> bool:
        return self._bias_corrected

    @bias_corrected.setter
    def bias_corrected(self, value: bool) -> None:
        self._bias_corrected = bool(value)

    def increment(self, d: float) -> None:
        if self.inc_moment:
            self.moment.increment(d)

    @property
    def result(self) -> float:
        n = self.moment.n
        if n == 0:
            return math.nan
        if n == 1:
            return 0.0
        if self._bias_corrected:
            return self.moment.m2 / (n - 1.0)
        return self.moment.m2 / n

    @property
    def n(self) -> int:
        return self.moment.n

    def clear(self) -> None:
        if self.inc_moment:
            self.moment.clear()

    def evaluate(
        self,
        values: Optional[Sequence[float]] = None,
        begin: int = 0,
        length: Optional[int] = None,
        mean: Optional[float] = None,
    ) -> float:
        """
        Variance of values[begin:begin + length].

        Args:
            values: Input array (stored data when omitted)
            begin: Index of the first element
            length: Number of elements (defaults to the rest of the array)
            mean: Precomputed mean of the window; computed when omitted

        Returns:
            NaN for an empty window, 0.0 for a single value
        """
        arr, begin, length = resolve_window(self._stored_or(values), begin, length)
        var = math.nan
        if self._test(arr, begin, length):
            if mean is None:
                self.clear()
            if length == 1:
                var = 0.0
            elif length > 1:
                if mean is None:
                    mean = Mean().evaluate(arr, begin, length)
                accum = 0.0
                accum2 = 0.0
                for value in arr[begin : begin + length].tolist():
                    dev = value - mean
                    accum += dev * dev
                    accum2 += dev
                length_f = float(length)
                if self._bias_corrected:
                    var = (accum - (accum2 * accum2 / length_f)) / (length_f - 1.0)
                else:
                    var = (accum - (accum2 * accum2 / length_f)) / length_f
        return var

    def evaluate_weighted(
        self,
        values: Sequence[float],
        weights: Sequence[float],
        begin: int = 0,
        length: Optional[int] = None,
        mean: Optional[float] = None,
    ) -> float:
        """
        Weighted variance over values[begin:begin + length].

        The bias corrected form divides by ``sum(w) - 1``, so it matches the
        unweighted variance only when every weight is exactly 1.
        """
        arr, begin, length = resolve_window(values, begin, length)
        w = to_array(weights, "weights array")
        var = math.nan
        if self._test_weighted(arr, w, begin, length):
            if mean is None:
                self.clear()
            if length == 1:
                var = 0.0
            elif length > 1:
                if mean is None:
                    mean = Mean().evaluate_weighted(arr, w, begin, length)
                window_values = arr[begin : begin + length].tolist()
                window_weights = w[begin : begin + length].tolist()
                accum = 0.0
                accum2 = 0.0
                for value, weight in zip(window_values, window_weights):
                    dev = value - mean
                    accum += weight * (dev * dev)
                    accum2 += weight * dev

                sum_wts = 0.0
                for weight in window_weights:
                    sum_wts += weight

                if self._bias_corrected:
                    var = ieee.divide(accum - (accum2 * accum2 / sum_wts), sum_wts - 1.0)
                else:
                    var = (accum - (accum2 * accum2 / sum_wts)) / sum_wts
        return var

    def copy(self) -> "Variance":
        result = Variance()
        Variance.copy_state(self, result)
        return result

    @staticmethod
    def copy_state(source: "Variance", dest: "Variance") -> None:
        check_not_none(source, "source")
        check_not_none(dest, "dest")
        dest._stored_data = source.data
        dest.moment = source.moment.copy()
        dest._bias_corrected = source._bias_corrected
        dest.inc_moment = source.inc_moment


__all__ = ["Variance"]

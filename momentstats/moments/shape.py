"""Skewness and kurtosis, built on the third and fourth moment accumulators."""
from __future__ import annotations

import math
from typing import Optional, Sequence

from momentstats.moments.base import StorelessUnivariateStatistic
from momentstats.moments.mean import Mean
from momentstats.moments.moment import FourthMoment, ThirdMoment
from momentstats.moments.variance import Variance
from momentstats.utils import ieee
from momentstats.utils.validation import check_not_none, resolve_window

# Below this the sample variance is treated as zero
MIN_VARIANCE = 10e-20


class Skewness(StorelessUnivariateStatistic):
    """
    Sample skewness::

        n / ((n - 1) * (n - 2)) * sum(((x - mean) / s) ** 3)

    NaN for fewer than three values, 0.0 when the variance is negligible.
    Shares or owns a ThirdMoment the same way Variance handles its
    SecondMoment.
    """

    def __init__(self, moment: Optional[ThirdMoment] = None):
        super().__init__()
        if moment is None:
            self.moment = ThirdMoment()
            self.inc_moment = True
        else:
            self.moment = moment
            self.inc_moment = False

    def increment(self, d: float) -> None:
        if self.inc_moment:
            self.moment.increment(d)

    @property
    def result(self) -> float:
        if self.moment.n < 3:
            return math.nan
        variance = self.moment.m2 / (self.moment.n - 1)
        if variance < MIN_VARIANCE:
            return 0.0
        n0 = float(self.moment.n)
        return (n0 * self.moment.m3) / ((n0 - 1) * (n0 - 2) * math.sqrt(variance) * variance)

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
    ) -> float:
        arr, begin, length = resolve_window(self._stored_or(values), begin, length)
        skew = math.nan
        if self._test(arr, begin, length) and length > 2:
            m = Mean().evaluate(arr, begin, length)
            window = arr[begin : begin + length].tolist()

            accum = 0.0
            accum2 = 0.0
            for value in window:
                d = value - m
                accum += d * d
                accum2 += d
            variance = (accum - (accum2 * accum2 / length)) / (length - 1)

            accum3 = 0.0
            for value in window:
                d = value - m
                accum3 += d * d * d
            accum3 = ieee.divide(accum3, variance * ieee.sqrt(variance))

            n0 = float(length)
            skew = (n0 / ((n0 - 1) * (n0 - 2))) * accum3
        return skew

    def copy(self) -> "Skewness":
        result = Skewness()
        Skewness.copy_state(self, result)
        return result

    @staticmethod
    def copy_state(source: "Skewness", dest: "Skewness") -> None:
        check_not_none(source, "source")
        check_not_none(dest, "dest")
        dest._stored_data = source.data
        dest.moment = source.moment.copy()
        dest.inc_moment = source.inc_moment


class Kurtosis(StorelessUnivariateStatistic):
    """
    Sample excess kurtosis::

        n (n + 1) / ((n - 1)(n - 2)(n - 3)) * sum(((x - mean) / s) ** 4)
            - 3 (n - 1) ** 2 / ((n - 2)(n - 3))

    NaN for fewer than four values, 0.0 when the variance is negligible.
    """

    def __init__(self, moment: Optional[FourthMoment] = None):
        super().__init__()
        if moment is None:
            self.moment = FourthMoment()
            self.inc_moment = True
        else:
            self.moment = moment
            self.inc_moment = False

    def increment(self, d: float) -> None:
        if self.inc_moment:
            self.moment.increment(d)

    @property
    def result(self) -> float:
        kurtosis = math.nan
        if self.moment.n > 3:
            variance = self.moment.m2 / (self.moment.n - 1)
            if variance < MIN_VARIANCE:
                kurtosis = 0.0
            else:
                n = float(self.moment.n)
                m2 = self.moment.m2
                kurtosis = (n * (n + 1) * self.moment.result - 3 * m2 * m2 * (n - 1)) / (
                    (n - 1) * (n - 2) * (n - 3) * variance * variance
                )
        return kurtosis

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
    ) -> float:
        arr, begin, length = resolve_window(self._stored_or(values), begin, length)
        kurt = math.nan
        if self._test(arr, begin, length) and length > 3:
            variance = Variance()
            variance.increment_all(arr, begin, length)
            mean = variance.moment.m1
            std_dev = ieee.sqrt(variance.result)

            accum3 = 0.0
            for value in arr[begin : begin + length].tolist():
                d = value - mean
                accum3 += d * d * d * d
            std_dev_sq = std_dev * std_dev
            accum3 = ieee.divide(accum3, std_dev_sq * std_dev_sq)

            n0 = float(length)
            coefficient_one = (n0 * (n0 + 1)) / ((n0 - 1) * (n0 - 2) * (n0 - 3))
            term_two = (3 * (n0 - 1) * (n0 - 1)) / ((n0 - 2) * (n0 - 3))
            kurt = (coefficient_one * accum3) - term_two
        return kurt

    def copy(self) -> "Kurtosis":
        result = Kurtosis()
        Kurtosis.copy_state(self, result)
        return result

    @staticmethod
    def copy_state(source: "Kurtosis", dest: "Kurtosis") -> None:
        check_not_none(source, "source")
        check_not_none(dest, "dest")
        dest._stored_data = source.data
        dest.moment = source.moment.copy()
        dest.inc_moment = source.inc_moment


__all__ = ["Skewness", "Kurtosis", "MIN_VARIANCE"]

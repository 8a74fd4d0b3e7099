"""Storeless summary statistics over a stream of values."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass

import pandas as pd

from momentstats.moments.mean import Mean
from momentstats.moments.moment import SecondMoment
from momentstats.moments.sums import Sum, SumOfSquares
from momentstats.moments.variance import Variance
from momentstats.utils.validation import check_not_none


@dataclass(frozen=True)
class StatisticalSummaryValues:
    """Snapshot of the basic univariate statistics."""
    mean: float
    variance: float
    n: int
    max: float
    min: float
    sum: float

    @property
    def standard_deviation(self) -> float:
        return math.sqrt(self.variance) if self.variance >= 0 else math.nan

    def to_series(self) -> pd.Series:
        """Summary as a pandas Series indexed by statistic name."""
        values = asdict(self)
        values["standard_deviation"] = self.standard_deviation
        return pd.Series(values, name="summary")


class SummaryStatistics:
    """
    Running statistics that do not keep the values.

    One SecondMoment is incremented per value; the mean and both variances
    are views over it, so the moment recurrences run once per value.
    """

    def __init__(self):
        self._n = 0
        self._second_moment = SecondMoment()
        self._sum = Sum()
        self._sumsq = SumOfSquares()
        self._min = math.nan
        self._max = math.nan
        self._mean = Mean(self._second_moment)
        self._variance = Variance(moment=self._second_moment)

    def add_value(self, value: float) -> None:
        value = float(value)
        self._sum.increment(value)
        self._sumsq.increment(value)
        if value < self._min or math.isnan(self._min):
            self._min = value
        if value > self._max or math.isnan(self._max):
            self._max = value
        self._second_moment.increment(value)
        self._n += 1

    def add_values(self, values) -> None:
        for value in values:
            self.add_value(value)

    @property
    def n(self) -> int:
        return self._n

    @property
    def sum(self) -> float:
        return self._sum.result

    @property
    def sumsq(self) -> float:
        return self._sumsq.result

    @property
    def mean(self) -> float:
        return self._mean.result

    @property
    def variance(self) -> float:
        return self._variance.result

    @property
    def population_variance(self) -> float:
        return Variance(bias_corrected=False, moment=self._second_moment).result

    @property
    def standard_deviation(self) -> float:
        std_dev = math.nan
        if self.n > 0:
            std_dev = math.sqrt(self.variance) if self.n > 1 else 0.0
        return std_dev

    @property
    def min(self) -> float:
        return self._min

    @property
    def max(self) -> float:
        return self._max

    @property
    def second_moment(self) -> float:
        return self._second_moment.result

    def get_summary(self) -> StatisticalSummaryValues:
        return StatisticalSummaryValues(
            mean=self.mean,
            variance=self.variance,
            n=self.n,
            max=self.max,
            min=self.min,
            sum=self.sum,
        )

    def clear(self) -> None:
        self._n = 0
        self._second_moment.clear()
        self._sum.clear()
        self._sumsq.clear()
        self._min = math.nan
        self._max = math.nan

    def copy(self) -> "SummaryStatistics":
        result = SummaryStatistics()
        SummaryStatistics.copy_state(self, result)
        return result

    @staticmethod
    def copy_state(source: "SummaryStatistics", dest: "SummaryStatistics") -> None:
        """Copy source into dest, rebuilding dest's views over its own moment."""
        check_not_none(source, "source")
        check_not_none(dest, "dest")
        dest._n = source._n
        dest._second_moment = source._second_moment.copy()
        dest._sum = source._sum.copy()
        dest._sumsq = source._sumsq.copy()
        dest._min = source._min
        dest._max = source._max
        dest._mean = Mean(dest._second_moment)
        dest._variance = Variance(bias_corrected=source._variance.bias_corrected, moment=dest._second_moment)

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, SummaryStatistics):
            return NotImplemented
        return _summary_equal_with_nan(self.get_summary(), other.get_summary())

    __hash__ = None

    def __str__(self) -> str:
        lines = [
            "SummaryStatistics:",
            f"n: {self.n}",
            f"min: {self.min}",
            f"max: {self.max}",
            f"sum: {self.sum}",
            f"mean: {self.mean}",
            f"variance: {self.variance}",
            f"population variance: {self.population_variance}",
            f"standard deviation: {self.standard_deviation}",
        ]
        return "\n".join(lines) + "\n"


def _summary_equal_with_nan(a: StatisticalSummaryValues, b: StatisticalSummaryValues) -> bool:
    for key, left in asdict(a).items():
        right = getattr(b, key)
        if left != right and not (math.isnan(left) and math.isnan(right)):
            return False
    return True


__all__ = ["SummaryStatistics", "StatisticalSummaryValues"]

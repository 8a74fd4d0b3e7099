"""Descriptive statistics over stored values, optionally in a rolling window."""
from __future__ import annotations

import logging
import math
from typing import Callable, Optional, Sequence, Union

import numpy as np
import pandas as pd

from momentstats.analysis.summary import StatisticalSummaryValues
from momentstats.core.errors import MathIllegalArgumentError, MathIllegalStateError
from momentstats.moments.base import UnivariateStatistic
from momentstats.moments.mean import Mean
from momentstats.moments.shape import Kurtosis, Skewness
from momentstats.moments.sums import Sum, SumOfSquares
from momentstats.moments.variance import Variance
from momentstats.utils.resizable_array import ResizableDoubleArray
from momentstats.utils.validation import check_not_none

logger = logging.getLogger(__name__)

INFINITE_WINDOW = -1

WindowFunction = Callable[[np.ndarray, int, int], float]


def _window_min(values: np.ndarray, begin: int, length: int) -> float:
    window = values[begin : begin + length]
    window = window[~np.isnan(window)]
    return float(window.min()) if window.size else math.nan


def _window_max(values: np.ndarray, begin: int, length: int) -> float:
    window = values[begin : begin + length]
    window = window[~np.isnan(window)]
    return float(window.max()) if window.size else math.nan


class DescriptiveStatistics:
    """
    Statistics computed from a stored data set.

    Values are kept in a ResizableDoubleArray. With a finite
    ``window_size`` only the most recent values are kept: once the window is
    full each new value pushes the oldest one out. Every statistic is
    evaluated on a snapshot taken through ``ResizableDoubleArray.compute``.
    """

    def __init__(
        self,
        window_size: int = INFINITE_WINDOW,
        values: Optional[Sequence[float]] = None,
    ):
        self._window_size = INFINITE_WINDOW
        self._values = ResizableDoubleArray() if values is None else ResizableDoubleArray(data=values)
        self.window_size = window_size

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def add_value(self, value: float) -> None:
        if self._window_size != INFINITE_WINDOW:
            if self.n == self._window_size:
                self._values.add_element_rolling(value)
            elif self.n < self._window_size:
                self._values.add_element(value)
        else:
            self._values.add_element(value)

    def add_values(self, values: Sequence[float]) -> None:
        for value in values:
            self.add_value(value)

    def remove_most_recent_value(self) -> None:
        try:
            self._values.discard_most_recent_elements(1)
        except MathIllegalArgumentError as exc:
            raise MathIllegalStateError("no data to remove") from exc

    def replace_most_recent_value(self, value: float) -> float:
        return self._values.substitute_most_recent_element(value)

    def clear(self) -> None:
        self._values.clear()

    @property
    def window_size(self) -> int:
        return self._window_size

    @window_size.setter
    def window_size(self, value: int) -> None:
        if value < 1 and value != INFINITE_WINDOW:
            raise MathIllegalArgumentError(f"window size must be positive, got {value}")
        self._window_size = value
        if value != INFINITE_WINDOW and value < self._values.num_elements:
            dropped = self._values.num_elements - value
            logger.debug("Window shrunk to %d, discarding %d oldest values", value, dropped)
            self._values.discard_front_elements(dropped)

    @property
    def n(self) -> int:
        return self._values.num_elements

    @property
    def values(self) -> np.ndarray:
        return self._values.get_elements()

    @property
    def sorted_values(self) -> np.ndarray:
        return np.sort(self.values)

    def get_element(self, index: int) -> float:
        return self._values.get_element(index)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def apply(self, stat: Union[UnivariateStatistic, WindowFunction]) -> float:
        """Evaluate a statistic (or a (values, begin, length) function) on the data."""
        return self._values.compute(stat)

    @property
    def mean(self) -> float:
        return self.apply(Mean())

    @property
    def variance(self) -> float:
        return self.apply(Variance())

    @property
    def population_variance(self) -> float:
        return self.apply(Variance(bias_corrected=False))

    @property
    def standard_deviation(self) -> float:
        std_dev = math.nan
        if self.n > 0:
            std_dev = math.sqrt(self.variance) if self.n > 1 else 0.0
        return std_dev

    @property
    def skewness(self) -> float:
        return self.apply(Skewness())

    @property
    def kurtosis(self) -> float:
        return self.apply(Kurtosis())

    @property
    def min(self) -> float:
        return self.apply(_window_min)

    @property
    def max(self) -> float:
        return self.apply(_window_max)

    @property
    def sum(self) -> float:
        return self.apply(Sum())

    @property
    def sumsq(self) -> float:
        return self.apply(SumOfSquares())

    def get_percentile(self, p: float) -> float:
        """
        Estimate of the p-th percentile, 0 < p <= 100.

        Uses the ``(n + 1) * p / 100`` position with linear interpolation
        (numpy's "weibull" method); NaN when there is no data.
        """
        if p <= 0 or p > 100:
            raise MathIllegalArgumentError(f"percentile {p} out of range (0, 100]")

        def percentile(values: np.ndarray, begin: int, length: int) -> float:
            if length == 0:
                return math.nan
            return float(np.percentile(values[begin : begin + length], p, method="weibull"))

        return self.apply(percentile)

    def get_summary(self) -> StatisticalSummaryValues:
        return StatisticalSummaryValues(
            mean=self.mean,
            variance=self.variance,
            n=self.n,
            max=self.max,
            min=self.min,
            sum=self.sum,
        )

    def to_series(self) -> pd.Series:
        """All statistics as a pandas Series."""
        series = self.get_summary().to_series()
        series["median"] = self.get_percentile(50) if self.n else math.nan
        series["skewness"] = self.skewness
        series["kurtosis"] = self.kurtosis
        series.name = "descriptive"
        return series

    # ------------------------------------------------------------------
    # Copying
    # ------------------------------------------------------------------

    def copy(self) -> "DescriptiveStatistics":
        result = DescriptiveStatistics()
        DescriptiveStatistics.copy_state(self, result)
        return result

    @staticmethod
    def copy_state(source: "DescriptiveStatistics", dest: "DescriptiveStatistics") -> None:
        check_not_none(source, "source")
        check_not_none(dest, "dest")
        dest._values = source._values.copy()
        dest._window_size = source._window_size

    def __str__(self) -> str:
        lines = [
            "DescriptiveStatistics:",
            f"n: {self.n}",
            f"min: {self.min}",
            f"max: {self.max}",
            f"mean: {self.mean}",
            f"std dev: {self.standard_deviation}",
            f"median: {self.get_percentile(50) if self.n else 'unavailable'}",
            f"skewness: {self.skewness}",
            f"kurtosis: {self.kurtosis}",
        ]
        return "\n".join(lines) + "\n"


__all__ = ["DescriptiveStatistics", "INFINITE_WINDOW"]

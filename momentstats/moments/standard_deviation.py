"""Standard deviation as the square root of Variance."""
from __future__ import annotations

from typing import Optional, Sequence

from momentstats.moments.base import StorelessUnivariateStatistic
from momentstats.moments.moment import SecondMoment
from momentstats.moments.variance import Variance
from momentstats.utils import ieee
from momentstats.utils.validation import check_not_none


class StandardDeviation(StorelessUnivariateStatistic):
    """Every operation is ``sqrt`` of the wrapped Variance's. Not thread-safe."""

    def __init__(self, bias_corrected: bool = True, moment: Optional[SecondMoment] = None):
        super().__init__()
        self.variance = Variance(bias_corrected=bias_corrected, moment=moment)

    def increment(self, d: float) -> None:
        self.variance.increment(d)

    @property
    def n(self) -> int:
        return self.variance.n

    @property
    def result(self) -> float:
        return ieee.sqrt(self.variance.result)

    def clear(self) -> None:
        self.variance.clear()

    def evaluate(
        self,
        values: Optional[Sequence[float]] = None,
        begin: int = 0,
        length: Optional[int] = None,
        mean: Optional[float] = None,
    ) -> float:
        return ieee.sqrt(self.variance.evaluate(self._stored_or(values), begin, length, mean=mean))

    def evaluate_weighted(
        self,
        values: Sequence[float],
        weights: Sequence[float],
        begin: int = 0,
        length: Optional[int] = None,
        mean: Optional[float] = None,
    ) -> float:
        return ieee.sqrt(self.variance.evaluate_weighted(values, weights, begin, length, mean=mean))

    @property
    def bias_corrected(self) -> bool:
        return self.variance.bias_corrected

    @bias_corrected.setter
    def bias_corrected(self, value: bool) -> None:
        self.variance.bias_corrected = value

    def copy(self) -> "StandardDeviation":
        result = StandardDeviation()
        StandardDeviation.copy_state(self, result)
        return result

    @staticmethod
    def copy_state(source: "StandardDeviation", dest: "StandardDeviation") -> None:
        check_not_none(source, "source")
        check_not_none(dest, "dest")
        dest._stored_data = source.data
        dest.variance = source.variance.copy()


__all__ = ["StandardDeviation"]

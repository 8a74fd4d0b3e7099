"""
Storeless central moment accumulators.

Each order wraps the next lower one: ``SecondMoment`` owns a
``FirstMoment``, ``ThirdMoment`` owns a ``SecondMoment`` and so on. An
increment captures the lower-order state it needs, delegates the update
downwards and then applies its own recurrence using the deviation values
the first-order update left behind (``dev`` and ``n_dev``). The order of
those steps fixes the floating point evaluation order of the updating
formulas (Welford, West; Chan, Golub and LeVeque).

``result`` of the orders above one is the central moment *sum*, for
example ``m2 = sum((x - mean) ** 2)``; dividing by ``n`` or ``n - 1`` is left
to Variance, Skewness and Kurtosis.

None of these classes are thread-safe.
"""
from __future__ import annotations

import math

from momentstats.moments.base import StorelessUnivariateStatistic
from momentstats.utils.validation import check_not_none


class FirstMoment(StorelessUnivariateStatistic):
    """Running mean: ``m1 += (x - m1) / n``."""

    def __init__(self):
        super().__init__()
        self._n = 0
        self.m1 = math.nan
        # Deviation of the newest value from the previous mean, and dev / n
        self.dev = math.nan
        self.n_dev = math.nan

    def increment(self, d: float) -> None:
        if self._n == 0:
            self.m1 = 0.0
        self._n += 1
        n0 = float(self._n)
        self.dev = float(d) - self.m1
        self.n_dev = self.dev / n0
        self.m1 += self.n_dev

    def clear(self) -> None:
        self.m1 = math.nan
        self._n = 0
        self.dev = math.nan
        self.n_dev = math.nan

    @property
    def result(self) -> float:
        return self.m1

    @property
    def n(self) -> int:
        return self._n

    def copy(self) -> "FirstMoment":
        result = FirstMoment()
        FirstMoment.copy_state(self, result)
        return result

    @staticmethod
    def copy_state(source: "FirstMoment", dest: "FirstMoment") -> None:
        check_not_none(source, "source")
        check_not_none(dest, "dest")
        dest._stored_data = source.data
        dest._n = source._n
        dest.m1 = source.m1
        dest.dev = source.dev
        dest.n_dev = source.n_dev


class SecondMoment(StorelessUnivariateStatistic):
    """Sum of squared deviations from the mean, ``m2``."""

    def __init__(self):
        super().__init__()
        self._first = FirstMoment()
        self.m2 = math.nan

    def increment(self, d: float) -> None:
        if self._first.n < 1:
            self.m2 = 0.0
        self._first.increment(d)
        self.m2 += (self._first.n - 1.0) * self._first.dev * self._first.n_dev

    def clear(self) -> None:
        self._first.clear()
        self.m2 = math.nan

    @property
    def result(self) -> float:
        return self.m2

    @property
    def n(self) -> int:
        return self._first.n

    @property
    def m1(self) -> float:
        return self._first.m1

    @property
    def dev(self) -> float:
        return self._first.dev

    @property
    def n_dev(self) -> float:
        return self._first.n_dev

    def copy(self) -> "SecondMoment":
        result = SecondMoment()
        SecondMoment.copy_state(self, result)
        return result

    @staticmethod
    def copy_state(source: "SecondMoment", dest: "SecondMoment") -> None:
        check_not_none(source, "source")
        check_not_none(dest, "dest")
        FirstMoment.copy_state(source._first, dest._first)
        dest._stored_data = source.data
        dest.m2 = source.m2


class ThirdMoment(StorelessUnivariateStatistic):
    """Sum of cubed deviations from the mean, ``m3``."""

    def __init__(self):
        super().__init__()
        self._second = SecondMoment()
        self.m3 = math.nan
        self.n_dev_sq = math.nan

    def increment(self, d: float) -> None:
        if self._second.n < 1:
            self.m3 = 0.0
            prev_m2 = 0.0
        else:
            prev_m2 = self._second.m2

        self._second.increment(d)

        n_dev = self._second.n_dev
        self.n_dev_sq = n_dev * n_dev
        n0 = float(self._second.n)
        self.m3 = self.m3 - 3.0 * n_dev * prev_m2 + (n0 - 1) * (n0 - 2) * self.n_dev_sq * self._second.dev

    def clear(self) -> None:
        self._second.clear()
        self.m3 = math.nan
        self.n_dev_sq = math.nan

    @property
    def result(self) -> float:
        return self.m3

    @property
    def n(self) -> int:
        return self._second.n

    @property
    def m1(self) -> float:
        return self._second.m1

    @property
    def m2(self) -> float:
        return self._second.m2

    @property
    def dev(self) -> float:
        return self._second.dev

    @property
    def n_dev(self) -> float:
        return self._second.n_dev

    def copy(self) -> "ThirdMoment":
        result = ThirdMoment()
        ThirdMoment.copy_state(self, result)
        return result

    @staticmethod
    def copy_state(source: "ThirdMoment", dest: "ThirdMoment") -> None:
        check_not_none(source, "source")
        check_not_none(dest, "dest")
        SecondMoment.copy_state(source._second, dest._second)
        dest._stored_data = source.data
        dest.m3 = source.m3
        dest.n_dev_sq = source.n_dev_sq


class FourthMoment(StorelessUnivariateStatistic):
    """Sum of fourth powers of deviations from the mean, ``m4``."""

    def __init__(self):
        super().__init__()
        self._third = ThirdMoment()
        self.m4 = math.nan

    def increment(self, d: float) -> None:
        if self._third.n < 1:
            self.m4 = 0.0
            prev_m3 = 0.0
            prev_m2 = 0.0
        else:
            prev_m3 = self._third.m3
            prev_m2 = self._third.m2

        self._third.increment(d)

        n_dev = self._third.n_dev
        n_dev_sq = self._third.n_dev_sq
        n0 = float(self._third.n)
        self.m4 = (
            self.m4
            - 4.0 * n_dev * prev_m3
            + 6.0 * n_dev_sq * prev_m2
            + ((n0 * n0) - 3 * (n0 - 1)) * (n_dev_sq * n_dev_sq * (n0 - 1) * n0)
        )

    def clear(self) -> None:
        self._third.clear()
        self.m4 = math.nan

    @property
    def result(self) -> float:
        return self.m4

    @property
    def n(self) -> int:
        return self._third.n

    @property
    def m1(self) -> float:
        return self._third.m1

    @property
    def m2(self) -> float:
        return self._third.m2

    @property
    def m3(self) -> float:
        return self._third.m3

    @property
    def dev(self) -> float:
        return self._third.dev

    @property
    def n_dev(self) -> float:
        return self._third.n_dev

    def copy(self) -> "FourthMoment":
        result = FourthMoment()
        FourthMoment.copy_state(self, result)
        return result

    @staticmethod
    def copy_state(source: "FourthMoment", dest: "FourthMoment") -> None:
        check_not_none(source, "source")
        check_not_none(dest, "dest")
        ThirdMoment.copy_state(source._third, dest._third)
        dest._stored_data = source.data
        dest.m4 = source.m4


__all__ = ["FirstMoment", "SecondMoment", "ThirdMoment", "FourthMoment"]

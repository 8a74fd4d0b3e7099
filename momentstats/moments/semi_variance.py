"""Semivariance: variance restricted to one side of a cutoff."""
from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from momentstats.moments.mean import Mean
from momentstats.utils.validation import resolve_window, verify_values


class Direction(Enum):
    """Which side of the cutoff contributes."""
    UPSIDE = True      # values above the cutoff
    DOWNSIDE = False   # values below the cutoff


@dataclass(frozen=True)
class SemiVariance:
    """
    ``sum((x - cutoff) ** 2 for x on one side of cutoff) / (n - 1)``.

    The cutoff defaults to the mean of the window. Configuration is fixed
    at construction; pass overrides to ``evaluate`` or derive a new instance
    with ``with_options``.
    """
    bias_corrected: bool = True
    direction: Direction = Direction.DOWNSIDE

    def with_options(
        self,
        bias_corrected: Optional[bool] = None,
        direction: Optional[Direction] = None,
    ) -> "SemiVariance":
        """Return a copy with the given settings replaced."""
        changes = {}
        if bias_corrected is not None:
            changes["bias_corrected"] = bias_corrected
        if direction is not None:
            changes["direction"] = direction
        return dataclasses.replace(self, **changes)

    def evaluate(
        self,
        values: Sequence[float],
        begin: int = 0,
        length: Optional[int] = None,
        cutoff: Optional[float] = None,
        direction: Optional[Direction] = None,
        bias_corrected: Optional[bool] = None,
    ) -> float:
        """
        Semivariance of values[begin:begin + length].

        Returns:
            NaN for an empty window, 0.0 for a single value
        """
        arr, begin, length = resolve_window(values, begin, length)
        verify_values(arr, begin, length, allow_empty=True)
        if length == 0:
            return math.nan
        if length == 1:
            return 0.0

        if cutoff is None:
            cutoff = Mean().evaluate(arr, begin, length)
        upside = (direction if direction is not None else self.direction).value
        corrected = self.bias_corrected if bias_corrected is None else bias_corrected

        sumsq = 0.0
        for value in arr[begin : begin + length].tolist():
            if (value > cutoff) == upside:
                dev = value - cutoff
                sumsq += dev * dev

        if corrected:
            return sumsq / (length - 1.0)
        return sumsq / length

    def copy(self) -> "SemiVariance":
        return dataclasses.replace(self)


UPSIDE_VARIANCE = Direction.UPSIDE
DOWNSIDE_VARIANCE = Direction.DOWNSIDE

__all__ = ["SemiVariance", "Direction", "UPSIDE_VARIANCE", "DOWNSIDE_VARIANCE"]

"""Growable double buffer with rolling (FIFO) insertion and automatic contraction."""
from __future__ import annotations

import logging
import math
import threading
from enum import Enum
from typing import Callable, Optional, Sequence, Union

import numpy as np

from momentstats.core.config import ArraySettings, Settings
from momentstats.core.errors import (
    ArrayIndexError,
    MathIllegalArgumentError,
    MathIllegalStateError,
    NotStrictlyPositiveError,
    NumberIsTooSmallError,
)
from momentstats.utils.validation import check_not_none, to_array

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_CAPACITY = 16
DEFAULT_EXPANSION_FACTOR = 2.0
DEFAULT_CONTRACTION_DELTA = 0.5


class ExpansionMode(Enum):
    MULTIPLICATIVE = "multiplicative"
    ADDITIVE = "additive"


def _to_mode(value: Union[ExpansionMode, str]) -> ExpansionMode:
    try:
        return ExpansionMode(value)
    except ValueError as exc:
        raise MathIllegalArgumentError(f"unsupported expansion mode: {value!r}") from exc


class ResizableDoubleArray:
    """
    A variable length array of doubles.

    Elements live in an internal numpy array between ``start_index`` and
    ``start_index + num_elements``. Storage grows when an append finds no
    room at the end, either multiplicatively (``ceil(capacity * factor)``)
    or additively (``capacity + round(factor)``).

    Rolling inserts and discards can leave unused slots in front of the
    window. After those operations the buffer contracts to
    ``num_elements + 1`` slots when the ratio ``capacity / num_elements``
    (multiplicative mode) or the slack ``capacity - num_elements`` (additive
    mode) exceeds ``contraction_criterion``.

    Every operation takes one internal lock, so a single call is atomic.
    Sequences of calls from different threads are not.
    """

    def __init__(
        self,
        initial_capacity: int = DEFAULT_INITIAL_CAPACITY,
        expansion_factor: float = DEFAULT_EXPANSION_FACTOR,
        contraction_criterion: Optional[float] = None,
        expansion_mode: Union[ExpansionMode, str] = ExpansionMode.MULTIPLICATIVE,
        data: Optional[Sequence[float]] = None,
    ):
        if initial_capacity <= 0:
            raise NotStrictlyPositiveError("initial capacity", initial_capacity)
        if contraction_criterion is None:
            contraction_criterion = expansion_factor + DEFAULT_CONTRACTION_DELTA
        self._check_contract_expand(contraction_criterion, expansion_factor)

        self._lock = threading.RLock()
        self._expansion_factor = float(expansion_factor)
        self._contraction_criterion = float(contraction_criterion)
        self._expansion_mode = _to_mode(expansion_mode)
        self._internal_array = np.zeros(int(initial_capacity), dtype=np.float64)
        self._num_elements = 0
        self._start_index = 0

        if data is not None:
            self.add_elements(data)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[ArraySettings] = None,
        data: Optional[Sequence[float]] = None,
    ) -> "ResizableDoubleArray":
        """Build a buffer from configured (or environment) array settings."""
        if settings is None:
            settings = Settings.load().array
        return cls(
            initial_capacity=settings.initial_capacity,
            expansion_factor=settings.expansion_factor,
            contraction_criterion=settings.contraction_criterion,
            expansion_mode=settings.expansion_mode,
            data=data,
        )

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def add_element(self, value: float) -> None:
        """Append value at the end, expanding storage first if it is full."""
        with self._lock:
            if len(self._internal_array) <= self._start_index + self._num_elements:
                self._expand()
            self._internal_array[self._start_index + self._num_elements] = value
            self._num_elements += 1

    def add_elements(self, values: Sequence[float]) -> None:
        """Append all values with a single reallocation sized to fit."""
        new_values = to_array(values)
        with self._lock:
            temp = np.zeros(self._num_elements + new_values.size + 1, dtype=np.float64)
            temp[: self._num_elements] = self._internal_array[
                self._start_index : self._start_index + self._num_elements
            ]
            temp[self._num_elements : self._num_elements + new_values.size] = new_values
            self._internal_array = temp
            self._start_index = 0
            self._num_elements += new_values.size

    def add_element_rolling(self, value: float) -> float:
        """
        Push value onto the end and drop the first element of the window.

        The logical size stays the same. On an empty buffer nothing becomes
        addressable and the stale front slot is returned.

        Returns:
            The value that fell out of the front of the window
        """
        with self._lock:
            if self._start_index + self._num_elements + 1 > len(self._internal_array):
                self._expand()
            discarded = float(self._internal_array[self._start_index])
            self._start_index += 1
            self._internal_array[self._start_index + (self._num_elements - 1)] = value
            if self._should_contract():
                self.contract()
            return discarded

    def substitute_most_recent_element(self, value: float) -> float:
        """Overwrite the last element and return its previous value."""
        with self._lock:
            if self._num_elements < 1:
                raise MathIllegalStateError("cannot substitute an element of an empty array")
            subst_index = self._start_index + (self._num_elements - 1)
            discarded = float(self._internal_array[subst_index])
            self._internal_array[subst_index] = value
            return discarded

    def set_element(self, index: int, value: float) -> None:
        """
        Write value at index, growing the logical size if index is past the end.

        Slots between the old end and index read back as 0.0.
        """
        with self._lock:
            if index < 0:
                raise ArrayIndexError(index)
            if index + 1 > self._num_elements:
                self._grow_logical_size(index + 1)
            self._internal_array[self._start_index + index] = value

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Forget all elements; storage is kept."""
        with self._lock:
            self._num_elements = 0
            self._start_index = 0

    def discard_front_elements(self, i: int) -> None:
        """Remove the i oldest elements."""
        self._discard_extreme_elements(i, front=True)

    def discard_most_recent_elements(self, i: int) -> None:
        """Remove the i newest elements."""
        self._discard_extreme_elements(i, front=False)

    def _discard_extreme_elements(self, i: int, front: bool) -> None:
        with self._lock:
            if i > self._num_elements:
                raise MathIllegalArgumentError(
                    f"cannot discard {i} elements from an array of {self._num_elements}"
                )
            if i < 0:
                raise MathIllegalArgumentError(f"cannot discard a negative number of elements ({i})")
            self._num_elements -= i
            if front:
                self._start_index += i
            if self._should_contract():
                self.contract()

    # ------------------------------------------------------------------
    # Storage management
    # ------------------------------------------------------------------

    def contract(self) -> None:
        """Shrink storage to num_elements + 1 and move the window to index 0."""
        with self._lock:
            temp = np.zeros(self._num_elements + 1, dtype=np.float64)
            temp[: self._num_elements] = self._internal_array[
                self._start_index : self._start_index + self._num_elements
            ]
            logger.debug(
                "Contracting array from %d to %d slots", len(self._internal_array), len(temp)
            )
            self._internal_array = temp
            self._start_index = 0

    def _expand(self) -> None:
        capacity = len(self._internal_array)
        if self._expansion_mode is ExpansionMode.MULTIPLICATIVE:
            new_size = int(math.ceil(capacity * self._expansion_factor))
        else:
            new_size = capacity + int(math.floor(self._expansion_factor + 0.5))
        logger.debug("Expanding array from %d to %d slots", capacity, new_size)
        self._expand_to(new_size)

    def _expand_to(self, size: int) -> None:
        temp = np.zeros(size, dtype=np.float64)
        temp[: len(self._internal_array)] = self._internal_array
        self._internal_array = temp

    def _grow_logical_size(self, new_count: int) -> None:
        old_end = self._start_index + self._num_elements
        new_end = self._start_index + new_count
        if new_end > len(self._internal_array):
            self._expand_to(new_end)
        # Storage past the old end may hold discarded values
        self._internal_array[old_end:new_end] = 0.0
        self._num_elements = new_count

    def _should_contract(self) -> bool:
        if self._expansion_mode is ExpansionMode.MULTIPLICATIVE:
            if self._num_elements == 0:
                return True
            return len(self._internal_array) / self._num_elements > self._contraction_criterion
        return len(self._internal_array) - self._num_elements > self._contraction_criterion

    @staticmethod
    def _check_contract_expand(contraction: float, expansion: float) -> None:
        if contraction < expansion:
            raise NumberIsTooSmallError(
                f"contraction criterion ({contraction}) must not be smaller than "
                f"the expansion factor ({expansion})",
                contraction,
                expansion,
            )
        if contraction <= 1:
            raise NumberIsTooSmallError(
                f"contraction criterion ({contraction}) must be greater than one",
                contraction,
                1,
                bound_is_allowed=False,
            )
        if expansion <= 1:
            raise NumberIsTooSmallError(
                f"expansion factor ({expansion}) must be greater than one",
                expansion,
                1,
                bound_is_allowed=False,
            )

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get_element(self, index: int) -> float:
        with self._lock:
            if index < 0 or index >= self._num_elements:
                raise ArrayIndexError(index)
            return float(self._internal_array[self._start_index + index])

    def get_elements(self) -> np.ndarray:
        """Return a copy of the addressable elements."""
        with self._lock:
            return self._internal_array[
                self._start_index : self._start_index + self._num_elements
            ].copy()

    def compute(self, f: Union[Callable[[np.ndarray, int, int], float], object]) -> float:
        """
        Apply f to (array, start, count) captured under the lock.

        f is either a callable taking those three arguments or a statistic
        with an ``evaluate(values, begin, length)`` method. It runs without
        the lock held and must not modify the array.
        """
        with self._lock:
            array = self._internal_array
            start = self._start_index
            num = self._num_elements
        evaluate = getattr(f, "evaluate", f)
        return evaluate(array, start, num)

    @property
    def capacity(self) -> int:
        with self._lock:
            return len(self._internal_array)

    @property
    def num_elements(self) -> int:
        with self._lock:
            return self._num_elements

    def set_num_elements(self, count: int) -> None:
        """Resize the window; new slots read back as 0.0."""
        with self._lock:
            if count < 0:
                raise MathIllegalArgumentError(f"index ({count}) must be non-negative")
            if count > self._num_elements:
                self._grow_logical_size(count)
            else:
                self._num_elements = count

    @property
    def start_index(self) -> int:
        with self._lock:
            return self._start_index

    @property
    def expansion_factor(self) -> float:
        return self._expansion_factor

    @expansion_factor.setter
    def expansion_factor(self, value: float) -> None:
        with self._lock:
            self._check_contract_expand(self._contraction_criterion, value)
            self._expansion_factor = float(value)

    @property
    def contraction_criterion(self) -> float:
        return self._contraction_criterion

    @contraction_criterion.setter
    def contraction_criterion(self, value: float) -> None:
        with self._lock:
            self._check_contract_expand(value, self._expansion_factor)
            self._contraction_criterion = float(value)

    @property
    def expansion_mode(self) -> ExpansionMode:
        return self._expansion_mode

    @expansion_mode.setter
    def expansion_mode(self, value: Union[ExpansionMode, str]) -> None:
        with self._lock:
            self._expansion_mode = _to_mode(value)

    # ------------------------------------------------------------------
    # Copying and comparison
    # ------------------------------------------------------------------

    @staticmethod
    def copy_state(source: "ResizableDoubleArray", dest: "ResizableDoubleArray") -> None:
        """Deep-copy configuration and storage of source into dest."""
        check_not_none(source, "source")
        check_not_none(dest, "dest")
        # Never hold both locks at once
        state = source._snapshot()
        with dest._lock:
            (
                dest._contraction_criterion,
                dest._expansion_factor,
                dest._expansion_mode,
                dest._num_elements,
                dest._start_index,
                dest._internal_array,
            ) = state

    def _snapshot(self) -> tuple:
        """Configuration, counters and a copy of the storage, read under the lock."""
        with self._lock:
            return (
                self._contraction_criterion,
                self._expansion_factor,
                self._expansion_mode,
                self._num_elements,
                self._start_index,
                self._internal_array.copy(),
            )

    def copy(self) -> "ResizableDoubleArray":
        result = ResizableDoubleArray()
        ResizableDoubleArray.copy_state(self, result)
        return result

    def __len__(self) -> int:
        return self.num_elements

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, ResizableDoubleArray):
            return NotImplemented
        mine = self._snapshot()
        theirs = other._snapshot()
        return mine[:-1] == theirs[:-1] and np.array_equal(mine[-1], theirs[-1], equal_nan=True)

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"ResizableDoubleArray(num_elements={self.num_elements}, capacity={self.capacity}, "
            f"mode={self._expansion_mode.value})"
        )


__all__ = ["ResizableDoubleArray", "ExpansionMode"]

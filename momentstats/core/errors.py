"""
Error classes for momentstats.
"""

__all__ = [
    "StatisticsError",
    "MathIllegalArgumentError",
    "NullArgumentError",
    "NotPositiveError",
    "NotStrictlyPositiveError",
    "NumberIsTooLargeError",
    "NumberIsTooSmallError",
    "DimensionMismatchError",
    "MathIllegalStateError",
    "ArrayIndexError",
]


class StatisticsError(Exception):
    """Base error for statistics operations."""
    pass


class MathIllegalArgumentError(StatisticsError, ValueError):
    """Caller-supplied argument violates a precondition."""
    pass


class NullArgumentError(MathIllegalArgumentError):
    """A required array or object was None."""

    def __init__(self, what: str = "input array"):
        super().__init__(f"{what} must not be None")
        self.what = what


class NotPositiveError(MathIllegalArgumentError):
    """Value is negative where zero or more is required."""

    def __init__(self, what: str, value):
        super().__init__(f"{what} ({value}) must be non-negative")
        self.what = what
        self.value = value


class NotStrictlyPositiveError(MathIllegalArgumentError):
    """Value is zero or negative where more than zero is required."""

    def __init__(self, what: str, value):
        super().__init__(f"{what} ({value}) must be strictly positive")
        self.what = what
        self.value = value


class NumberIsTooLargeError(MathIllegalArgumentError):
    """Value exceeds its upper bound."""

    def __init__(self, what: str, value, bound, bound_is_allowed: bool = True):
        relation = "<=" if bound_is_allowed else "<"
        super().__init__(f"{what} ({value}) must be {relation} {bound}")
        self.value = value
        self.bound = bound


class NumberIsTooSmallError(MathIllegalArgumentError):
    """Value is below its lower bound."""

    def __init__(self, message: str, value, bound, bound_is_allowed: bool = True):
        super().__init__(message)
        self.value = value
        self.bound = bound
        self.bound_is_allowed = bound_is_allowed


class DimensionMismatchError(MathIllegalArgumentError):
    """Two arrays that must line up have different lengths."""

    def __init__(self, wrong: int, expected: int):
        super().__init__(f"dimension mismatch: {wrong} != {expected}")
        self.wrong = wrong
        self.expected = expected


class MathIllegalStateError(StatisticsError, RuntimeError):
    """Operation not allowed in the object's current state."""
    pass


class ArrayIndexError(StatisticsError, IndexError):
    """Index outside the addressable range of a buffer."""

    def __init__(self, index: int):
        super().__init__(f"index {index} out of range")
        self.index = index

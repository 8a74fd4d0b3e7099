"""Unit tests for SemiVariance."""
import math
import dataclasses
import pytest
from momentstats.core.errors import NumberIsTooLargeError
from momentstats.moments.semi_variance import (
    DOWNSIDE_VARIANCE,
    UPSIDE_VARIANCE,
    Direction,
    SemiVariance,
)


def test_downside_default(sample_values):
    """Test downside semivariance around the mean."""
    # Values below 5.5 contribute 4.5^2 + 3.5^2 + 2.5^2 + 1.5^2 + 0.5^2 = 41.25
    assert SemiVariance().evaluate(sample_values) == pytest.approx(41.25 / 9)


def test_upside(sample_values):
    """Test upside semivariance around the mean."""
    semi = SemiVariance(direction=UPSIDE_VARIANCE)
    assert semi.evaluate(sample_values) == pytest.approx(41.25 / 9)


def test_population(sample_values):
    """Test the non bias corrected form divides by n."""
    semi = SemiVariance(bias_corrected=False)
    assert semi.evaluate(sample_values) == pytest.approx(41.25 / 10)


def test_explicit_cutoff(sample_values):
    """Test a caller supplied cutoff."""
    # Only 1 and 2 fall below 3: (1 - 3)^2 + (2 - 3)^2 = 5
    assert SemiVariance().evaluate(sample_values, cutoff=3.0) == pytest.approx(5.0 / 9)
    assert SemiVariance().evaluate(sample_values, cutoff=3.0, direction=Direction.UPSIDE) == pytest.approx(
        sum((v - 3.0) ** 2 for v in sample_values if v > 3.0) / 9
    )


def test_window_only_uses_range(sample_values):
    """Test values outside (begin, length) never contribute."""
    # Window [4, 5, 6] with mean 5: only 4 is below
    assert SemiVariance().evaluate(sample_values, 3, 3) == pytest.approx(1.0 / 2)
    assert SemiVariance().evaluate(sample_values, 3, 3, bias_corrected=False) == pytest.approx(1.0 / 3)


def test_empty_and_single():
    """Test NaN for empty input and zero for a single value."""
    assert math.isnan(SemiVariance().evaluate([]))
    assert SemiVariance().evaluate([2.0]) == 0.0


def test_invalid_window(sample_values):
    """Test a window past the end is rejected."""
    with pytest.raises(NumberIsTooLargeError):
        SemiVariance().evaluate(sample_values, 5, 10)


def test_configuration_is_immutable():
    """Test settings cannot be changed in place."""
    semi = SemiVariance()
    with pytest.raises(dataclasses.FrozenInstanceError):
        semi.bias_corrected = False


def test_with_options():
    """Test with_options derives a new instance."""
    semi = SemiVariance()
    upside = semi.with_options(direction=UPSIDE_VARIANCE, bias_corrected=False)
    assert upside.direction is Direction.UPSIDE
    assert upside.bias_corrected is False
    assert semi.direction is DOWNSIDE_VARIANCE
    assert semi.with_options() == semi
    assert semi.copy() == semi

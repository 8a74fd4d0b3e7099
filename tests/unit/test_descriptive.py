"""Unit tests for DescriptiveStatistics."""
import math
import numpy as np
import pandas as pd
import pytest
from momentstats.analysis.descriptive import INFINITE_WINDOW, DescriptiveStatistics
from momentstats.core.errors import ArrayIndexError, MathIllegalArgumentError, MathIllegalStateError
from momentstats.moments.semi_variance import SemiVariance


def test_statistics_match_numpy(skewed_values):
    """Test stored statistics against numpy."""
    stats = DescriptiveStatistics(values=skewed_values)
    arr = np.asarray(skewed_values)
    assert stats.n == arr.size
    assert stats.window_size == INFINITE_WINDOW
    assert stats.mean == pytest.approx(arr.mean())
    assert stats.variance == pytest.approx(arr.var(ddof=1))
    assert stats.population_variance == pytest.approx(arr.var())
    assert stats.standard_deviation == pytest.approx(arr.std(ddof=1))
    assert stats.sum == pytest.approx(arr.sum())
    assert stats.sumsq == pytest.approx(np.sum(arr ** 2))
    assert stats.min == 8.2
    assert stats.max == 21.0


def test_empty_statistics():
    """Test NaN conventions with no data."""
    stats = DescriptiveStatistics()
    assert stats.n == 0
    assert math.isnan(stats.mean)
    assert math.isnan(stats.variance)
    assert math.isnan(stats.standard_deviation)
    assert math.isnan(stats.min)
    assert math.isnan(stats.get_percentile(50))


def test_rolling_window():
    """Test a finite window keeps only the newest values."""
    stats = DescriptiveStatistics(window_size=3)
    stats.add_values([1.0, 2.0, 3.0, 4.0, 5.0])
    assert stats.n == 3
    assert list(stats.values) == [3.0, 4.0, 5.0]
    assert stats.mean == pytest.approx(4.0)


def test_shrinking_window_discards_oldest(sample_values):
    """Test shrinking the window drops values from the front."""
    stats = DescriptiveStatistics(values=sample_values)
    stats.window_size = 4
    assert list(stats.values) == [7.0, 8.0, 9.0, 10.0]
    stats.add_value(11.0)
    assert list(stats.values) == [8.0, 9.0, 10.0, 11.0]


@pytest.mark.parametrize("window", [0, -2])
def test_invalid_window(window):
    """Test non-positive windows other than INFINITE_WINDOW are rejected."""
    with pytest.raises(MathIllegalArgumentError):
        DescriptiveStatistics(window_size=window)


def test_remove_and_replace(sample_values):
    """Test editing the most recent value."""
    stats = DescriptiveStatistics(values=sample_values[:3])
    assert stats.replace_most_recent_value(30.0) == 3.0
    assert list(stats.values) == [1.0, 2.0, 30.0]
    stats.remove_most_recent_value()
    assert list(stats.values) == [1.0, 2.0]


def test_remove_from_empty():
    """Test removing from an empty data set fails."""
    with pytest.raises(MathIllegalStateError):
        DescriptiveStatistics().remove_most_recent_value()


def test_percentiles(sample_values):
    """Test (n + 1) p / 100 percentile positions."""
    stats = DescriptiveStatistics(values=sample_values)
    assert stats.get_percentile(50) == pytest.approx(5.5)
    # Position 0.25 * 11 = 2.75 lies between 2 and 3
    assert stats.get_percentile(25) == pytest.approx(2.75)
    assert stats.get_percentile(100) == 10.0


@pytest.mark.parametrize("p", [0, -5, 100.5])
def test_percentile_out_of_range(sample_values, p):
    """Test percentiles outside (0, 100] are rejected."""
    with pytest.raises(MathIllegalArgumentError):
        DescriptiveStatistics(values=sample_values).get_percentile(p)


def test_sorted_values_and_elements():
    """Test value accessors."""
    stats = DescriptiveStatistics(values=[3.0, 1.0, 2.0])
    assert list(stats.sorted_values) == [1.0, 2.0, 3.0]
    assert stats.get_element(0) == 3.0
    with pytest.raises(ArrayIndexError):
        stats.get_element(3)


def test_min_max_ignore_nan():
    """Test NaN values are skipped by min and max."""
    stats = DescriptiveStatistics(values=[2.0, float("nan"), -1.0])
    assert stats.min == -1.0
    assert stats.max == 2.0


def test_apply_custom_statistic(sample_values):
    """Test apply evaluates any statistic on the stored window."""
    stats = DescriptiveStatistics(window_size=5, values=sample_values[:5])
    stats.add_value(6.0)
    assert stats.apply(SemiVariance()) == pytest.approx(SemiVariance().evaluate([2.0, 3.0, 4.0, 5.0, 6.0]))


def test_shape_statistics(skewed_values):
    """Test skewness and kurtosis use the stored values."""
    stats = DescriptiveStatistics(values=skewed_values)
    assert stats.skewness > 0
    assert not math.isnan(stats.kurtosis)


def test_to_series(sample_values):
    """Test the pandas report."""
    series = DescriptiveStatistics(values=sample_values).to_series()
    assert isinstance(series, pd.Series)
    assert series.name == "descriptive"
    assert series["median"] == pytest.approx(5.5)
    assert series["n"] == 10


def test_copy_independent(sample_values):
    """Test copies keep the window and data but not the storage."""
    stats = DescriptiveStatistics(window_size=20, values=sample_values)
    clone = stats.copy()
    stats.add_value(100.0)
    assert clone.n == 10
    assert clone.window_size == 20
    assert clone.mean == pytest.approx(5.5)


def test_clear(sample_values):
    """Test clear keeps the window size."""
    stats = DescriptiveStatistics(window_size=5, values=sample_values[:5])
    stats.clear()
    assert stats.n == 0
    assert stats.window_size == 5


def test_str(sample_values):
    """Test the text report."""
    text = str(DescriptiveStatistics(values=sample_values))
    assert text.startswith("DescriptiveStatistics:")
    assert "median: 5.5" in text
    assert "median: unavailable" in str(DescriptiveStatistics())

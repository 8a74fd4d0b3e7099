"""Pytest configuration and fixtures."""
import sys
from pathlib import Path
import numpy as np
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from momentstats.utils.resizable_array import ResizableDoubleArray


@pytest.fixture
def sample_values():
    """Small data set with known statistics."""
    return [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0]


@pytest.fixture
def skewed_values():
    """Right-skewed data set for shape statistics."""
    return [12.5, 12.0, 11.8, 14.2, 14.9, 14.5, 21.0, 8.2, 10.3, 11.3, 14.1, 9.9, 12.2, 12.0, 12.1, 11.0, 19.8, 11.0, 10.0, 8.8, 9.0, 12.3]


@pytest.fixture
def random_values():
    """Reproducible normal sample."""
    rng = np.random.default_rng(42)
    return rng.normal(loc=50.0, scale=5.0, size=500)


@pytest.fixture
def sample_weights():
    """Weights aligned with sample_values."""
    return [1.0, 2.0, 1.0, 0.5, 3.0, 1.0, 1.0, 2.0, 0.0, 1.5]


@pytest.fixture
def small_array():
    """Buffer with a small initial capacity so growth is easy to observe."""
    return ResizableDoubleArray(initial_capacity=2)


@pytest.fixture
def filled_array():
    """Buffer holding 1.0 through 4.0."""
    return ResizableDoubleArray(data=[1.0, 2.0, 3.0, 4.0])


@pytest.fixture
def clean_env(monkeypatch):
    """Remove MOMENTSTATS_* variables so settings fall back to defaults."""
    for name in (
        "MOMENTSTATS_INITIAL_CAPACITY",
        "MOMENTSTATS_EXPANSION_FACTOR",
        "MOMENTSTATS_CONTRACTION_CRITERION",
        "MOMENTSTATS_EXPANSION_MODE",
        "MOMENTSTATS_LOG_LEVEL",
        "MOMENTSTATS_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch

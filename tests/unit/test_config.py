"""Unit tests for settings and logging setup."""
import logging
import pytest
from pydantic import ValidationError
from momentstats.core.config import ArraySettings, Settings
from momentstats.core.logging import setup_logging
from momentstats.utils.resizable_array import ExpansionMode, ResizableDoubleArray


def test_default_settings(clean_env):
    """Test defaults when no environment variables are set."""
    settings = Settings.load()
    assert settings.array.initial_capacity == 16
    assert settings.array.expansion_factor == 2.0
    assert settings.array.contraction_criterion == 2.5
    assert settings.array.expansion_mode == "multiplicative"
    assert settings.logging.level == "INFO"
    assert settings.logging.log_file is None


def test_settings_from_environment(clean_env):
    """Test MOMENTSTATS_* variables override the defaults."""
    clean_env.setenv("MOMENTSTATS_INITIAL_CAPACITY", "8")
    clean_env.setenv("MOMENTSTATS_EXPANSION_FACTOR", "1.5")
    clean_env.setenv("MOMENTSTATS_CONTRACTION_CRITERION", "4")
    clean_env.setenv("MOMENTSTATS_EXPANSION_MODE", "ADDITIVE")
    clean_env.setenv("MOMENTSTATS_LOG_LEVEL", "DEBUG")
    settings = Settings.load()
    assert settings.array.initial_capacity == 8
    assert settings.array.expansion_factor == 1.5
    assert settings.array.contraction_criterion == 4.0
    assert settings.array.expansion_mode == "additive"
    assert settings.logging.level == "DEBUG"


def test_from_settings_uses_environment(clean_env):
    """Test the buffer picks up environment settings when none are passed."""
    clean_env.setenv("MOMENTSTATS_INITIAL_CAPACITY", "3")
    clean_env.setenv("MOMENTSTATS_EXPANSION_MODE", "additive")
    array = ResizableDoubleArray.from_settings()
    assert array.capacity == 3
    assert array.expansion_mode is ExpansionMode.ADDITIVE


def test_invalid_array_settings():
    """Test inconsistent settings fail validation."""
    with pytest.raises(ValidationError):
        ArraySettings(expansion_factor=3.0, contraction_criterion=2.0)
    with pytest.raises(ValidationError):
        ArraySettings(initial_capacity=0)
    with pytest.raises(ValidationError):
        ArraySettings(expansion_factor=1.0)
    with pytest.raises(ValidationError):
        ArraySettings(expansion_mode="exponential")


def test_setup_logging_is_idempotent(tmp_path):
    """Test repeated setup does not duplicate handlers."""
    log_file = tmp_path / "logs" / "stats.log"
    logger = setup_logging("momentstats.test_idempotent", level="debug", log_file=log_file)
    handler_count = len(logger.handlers)
    logger = setup_logging("momentstats.test_idempotent", level="debug", log_file=log_file)
    assert len(logger.handlers) == handler_count == 2
    assert logger.level == logging.DEBUG


def test_setup_logging_writes_file(tmp_path):
    """Test messages reach the log file in the shared format."""
    log_file = tmp_path / "stats.log"
    logger = setup_logging("momentstats.test_file", level=logging.INFO, log_file=log_file)
    logger.info("hello from the tests")
    for handler in logger.handlers:
        handler.flush()
    content = log_file.read_text()
    assert "momentstats.test_file - INFO - hello from the tests" in content


def test_array_logs_growth(caplog):
    """Test storage changes are logged at debug level."""
    caplog.set_level(logging.DEBUG, logger="momentstats.utils.resizable_array")
    array = ResizableDoubleArray(initial_capacity=1)
    array.add_element(1.0)
    array.add_element(2.0)
    array.discard_front_elements(2)
    messages = [record.getMessage() for record in caplog.records]
    assert "Expanding array from 1 to 2 slots" in messages
    assert any(message.startswith("Contracting array") for message in messages)

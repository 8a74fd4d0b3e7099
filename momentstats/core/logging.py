"""Logging setup shared by the library and the scripts."""
import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    name: str = "momentstats",
    level: Optional[Union[str, int]] = None,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure and return the named logger.

    Calling this repeatedly is safe: the console handler and each file
    handler are only attached once.

    Args:
        name: Logger name (children such as "momentstats.utils" inherit it)
        level: Level name or number; falls back to settings when omitted
        log_file: Optional path of an extra file handler

    Returns:
        The configured logger
    """
    if level is None or log_file is None:
        from momentstats.core.config import Settings

        settings = Settings.load().logging
        level = level if level is not None else settings.level
        log_file = log_file if log_file is not None else settings.log_file

    logger = logging.getLogger(name)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    formatter = logging.Formatter(LOG_FORMAT)

    has_console = any(
        isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)
        for handler in logger.handlers
    )
    if not has_console:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    if log_file:
        log_path = Path(log_file)
        existing_targets = {
            getattr(handler, "baseFilename", None) for handler in logger.handlers
        }
        if str(log_path.resolve()) not in existing_targets:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


__all__ = ["setup_logging", "LOG_FORMAT"]

"""Logging configuration for the application logger."""

from __future__ import annotations

from pathlib import Path
import logging

from .settings import LoggingSettings
from .utils import LOGGER_NAME


def setup_logging(settings: LoggingSettings) -> logging.Logger:
    """Configure the dedicated "scoreworks" logger.

    Output goes to the console and, when ``settings.log_file`` is set, to that
    file as well. The root logger is left alone so pygame and other libraries
    keep their own defaults. Calling this again replaces earlier handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.getLevelName(settings.level)
    logger.setLevel(level if isinstance(level, int) else logging.INFO)
    logger.propagate = False

    formatter = logging.Formatter(settings.format)

    if logger.hasHandlers():
        logger.handlers.clear()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized at level %s", settings.level)
    return logger

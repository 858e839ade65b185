"""Logging for nounspec: one package logger, stderr plus an optional file."""

import logging
import sys
from pathlib import Path
from typing import Optional
from .settings import get_settings

PACKAGE_LOGGER = "nounspec"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None, log_file: Optional[Path] = None) -> None:
    """
    (Re)configure the package logger.

    Args:
        level: Level name; defaults to the log_level setting
        log_file: Also log here; defaults to the log_file setting
    """
    settings = get_settings()
    log_level = getattr(logging, (level or settings.log_level).upper())
    log_file = log_file or settings.log_file

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(log_level)
    package_logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    package_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Logger under the package namespace, configuring logging on first use."""
    if not logging.getLogger(PACKAGE_LOGGER).handlers:
        setup_logging()
    if name.startswith(PACKAGE_LOGGER):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")

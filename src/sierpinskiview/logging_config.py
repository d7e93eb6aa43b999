"""
Logging Configuration
=====================
Sets up the 'sierpinskiview' namespace logger.

The level and the optional log file come from the caller or, when not given,
from the environment:

    SIERPINSKI_LOG_LEVEL   level name (DEBUG, INFO, WARNING, ...)
    SIERPINSKI_DEBUG       any non-empty value means DEBUG
    SIERPINSKI_LOG_FILE    path of a log file (overwritten on start)

Per-frame messages (subdivision counts, frame summaries) are logged at DEBUG
by `sierpinskiview.model.subdivision` and `sierpinskiview.view.canvas`; they
only show up once DEBUG is enabled.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Mapping, Optional

LOGGER_NAME = "sierpinskiview"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def resolve_log_level(environ: Mapping[str, str] = os.environ, default: int = logging.INFO) -> int:
    """Pick the level from SIERPINSKI_LOG_LEVEL, then SIERPINSKI_DEBUG, then `default`."""
    name = environ.get("SIERPINSKI_LOG_LEVEL", "").strip().upper()
    if name:
        level = logging.getLevelName(name)
        if isinstance(level, int):
            return level
    if environ.get("SIERPINSKI_DEBUG"):
        return logging.DEBUG
    return default


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    environ: Mapping[str, str] = os.environ,
) -> logging.Logger:
    """
    Configure the package logger with a stdout handler and an optional file.

    Args:
        level: Logging level; None resolves it from the environment.
        log_file: Log file path; None falls back to SIERPINSKI_LOG_FILE.
        environ: Environment mapping to read (injectable for tests).

    Returns:
        The configured 'sierpinskiview' logger.
    """
    if level is None:
        level = resolve_log_level(environ)
    if log_file is None:
        log_file = environ.get("SIERPINSKI_LOG_FILE") or None

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # a second call (e.g. from tests) replaces the handlers instead of stacking them
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}"
                + (f", writing to {log_file}." if log_file else "."))
    return logger

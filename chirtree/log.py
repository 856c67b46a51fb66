"""Logging utilities."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Handlers attached by the last configure_logging call
_installed: List[logging.Handler] = []


def configure_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> logging.Logger:
    """Attach a stream handler (and optionally a file handler) to the package logger.

    The library itself only installs a ``NullHandler``; applications that
    want to see parser and translator diagnostics call this once. Calling it
    again replaces the handlers it attached before, so records are never
    emitted twice.

    Returns:
        The ``chirtree`` logger.
    """
    logger = logging.getLogger("chirtree")
    while _installed:
        handler = _installed.pop()
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    _installed.append(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        _installed.append(file_handler)

    for handler in _installed:
        logger.addHandler(handler)
    return logger

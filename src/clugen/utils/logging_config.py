"""
Logging configuration for clugen.

Library modules obtain their logger with ``get_logger(__name__)`` and never
configure handlers themselves. Applications and notebooks that want to see
clugen's log records call ``setup_logging()`` once.

Usage:
    from clugen.utils.logging_config import setup_logging

    setup_logging("DEBUG")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER_NAME = "clugen"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Silent unless the application configures logging
logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a clugen module (usually ``__name__``)."""
    return logging.getLogger(name)


def setup_logging(
    level: Optional[Union[str, int]] = None,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Attach handlers to the ``clugen`` package logger.

    Handlers previously added by this function are removed first, so it is safe
    to call more than once.

    Args:
        level: Logging level name or number. Defaults to the level configured
            through ``CLUGEN_LOG_LEVEL`` (see ``clugen.config``).
        log_file: Optional file that receives a copy of the log records.

    Returns:
        The configured package logger.
    """
    if level is None:
        from ..config import config

        level = config.logging.level

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level}")

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if getattr(handler, "_clugen_handler", False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    stream_handler._clugen_handler = True
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler._clugen_handler = True
        logger.addHandler(file_handler)

    return logger

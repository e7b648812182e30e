"""Utility helpers: logging setup for scripts that build matrices."""

from __future__ import annotations

import logging

from stackdetective.config import DEFAULTS


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure the root logger and return the ``stackdetective`` logger.

    The package never configures logging itself; call this from the
    script that drives the matrix.  ``logging.basicConfig`` is a no-op if
    the root logger already has handlers; the package logger level is set
    on every call.
    """
    logging.basicConfig(
        format=DEFAULTS.log_format,
        datefmt=DEFAULTS.log_datefmt,
        level=level,
    )
    logger = logging.getLogger("stackdetective")
    logger.setLevel(level)
    return logger

"""Logging for the ``crossmath`` package namespace."""

from __future__ import annotations

import logging
from typing import IO, Optional

PACKAGE_LOGGER = "crossmath"

_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def configure_logging(level: int = logging.INFO, stream: Optional[IO[str]] = None) -> None:
    """Attach a single handler to the package logger.

    Generation runs many cheap restarts, so per-attempt detail is logged at
    DEBUG and only stage outcomes surface at INFO. The root logger is left
    alone so embedding applications keep their own configuration.
    """

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%H:%M:%S"))

    logger = logging.getLogger(PACKAGE_LOGGER)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger inside the package namespace, configuring defaults if needed."""

    if not logging.getLogger(PACKAGE_LOGGER).handlers:
        configure_logging()
    if not name:
        return logging.getLogger(PACKAGE_LOGGER)
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)

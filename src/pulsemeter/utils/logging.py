"""Minimal logging helpers for the project."""

from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def get_logger(name: str = "pulsemeter", level: int = logging.INFO, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Return a configured :class:`logging.Logger` instance.

    A ``StreamHandler`` is attached only once per logger, so repeated calls
    do not duplicate output.  Loggers created with ``logging.getLogger(__name__)``
    inside the package propagate to the ``pulsemeter`` logger configured here.
    """

    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def verbosity_to_level(verbose: int) -> int:
    """Map a repeat count of ``-v`` flags to a logging level."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING

"""Logging helpers for PyFastResample."""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    """Return the package-level logger, configuring it on first use."""

    global _LOGGER
    if _LOGGER is None:
        _LOGGER = logging.getLogger("pyfastresample")
        if not _LOGGER.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            handler.setFormatter(formatter)
            _LOGGER.addHandler(handler)
        if _LOGGER.level == logging.NOTSET:
            _LOGGER.setLevel(logging.WARNING)
    return _LOGGER


def set_verbosity(verbose: bool) -> None:
    """Switch the package logger between DEBUG and WARNING."""
    get_logger().setLevel(logging.DEBUG if verbose else logging.WARNING)


logger = get_logger()

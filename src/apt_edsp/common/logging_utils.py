"""Logging helpers shared by the readers and writers.

Library code only obtains module loggers; :func:`configure_logging` is meant
for the process embedding the solver (it must not write logs to stdout, which
carries the protocol).
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional

from ..constants import Constants

_HANDLER_NAME = "apt_edsp"


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records of ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` payload for structured log records.

    None values are dropped so formatters only see populated keys.
    """
    return {key: value for key, value in fields.items() if value is not None}


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start: Optional[float] = None
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        if self._start is None:
            return 0.0
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 3)


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or Constants.DEFAULT_LOG_LEVEL).upper()
    value = getattr(logging, name, None)
    return value if isinstance(value, int) else logging.WARNING


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """Install a stderr (or file) handler on the ``apt_edsp`` package logger.

    Level precedence: argument, ``EDSP_LOG_LEVEL``, then the default. The file
    target comes from the argument or ``EDSP_LOG_FILE``. Calling it again
    replaces the handler instead of stacking a new one.
    """
    logger = logging.getLogger("apt_edsp")
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)
            handler.close()

    target = log_file or os.environ.get(Constants.ENV_LOG_FILE)
    if target:
        handler: logging.Handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT, Constants.LOG_DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(_resolve_level(level))
    return logger

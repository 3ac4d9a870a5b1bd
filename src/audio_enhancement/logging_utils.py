"""Logging helpers for the enhancement engine, including a TRACE level."""

import logging
from typing import Any

# Below DEBUG; used for per-stage timings
TRACE_LEVEL = 5


def _trace(self: logging.Logger, message: str, *args: Any, **kwargs: Any) -> None:
    """Log a message with severity 'TRACE'."""
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kwargs)


def install_trace_level() -> None:
    """Register the TRACE level name and attach ``Logger.trace``."""
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    logging.Logger.trace = _trace  # type: ignore[attr-defined]


def get_logger(name: str) -> logging.Logger:
    """Get a module logger that supports ``logger.trace(...)``."""
    if not hasattr(logging.Logger, "trace"):
        install_trace_level()

    return logging.getLogger(name)

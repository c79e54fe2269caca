"""
ColorWeaver Structured Logging

ColorWeaver is a library: its loguru records are disabled on import and no
sink is installed for the host application. Call ``configure_logging`` to
opt in to the engine's own output, or ``logger.enable("colorweaver")`` to
route its records into sinks you already manage.
"""
import sys
from functools import partialmethod
from typing import Any, Dict, Optional

from loguru import logger

from colorweaver.config import config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}"


def configure_logging(level: Optional[str] = None, sink: Any = sys.stdout,
                      serialize: bool = False) -> int:
    """
    Enable ColorWeaver records and send them to ``sink``.

    Only records emitted from the ``colorweaver`` package reach the new sink,
    and existing sinks are left in place.

    Returns:
        The loguru sink id, for ``logger.remove``
    """
    logger.enable("colorweaver")
    return logger.add(
        sink,
        format=LOG_FORMAT,
        level=level or config.LOG_LEVEL,
        filter="colorweaver",
        serialize=serialize,
    )


class StructuredLogger:
    """Logger carrying extraction context (id, algorithm) on every record."""

    def __init__(self, **context: Any):
        self.context = context

    def bind(self, **context: Any) -> "StructuredLogger":
        """Return a logger with ``context`` added to the bound fields."""
        return StructuredLogger(**{**self.context, **context})

    def _log(self, level: str, message: str, extra: Optional[Dict[str, Any]] = None):
        fields = {**self.context, **(extra or {})}
        logger.opt(depth=1).bind(**fields).log(level, message)

    debug = partialmethod(_log, "DEBUG")
    info = partialmethod(_log, "INFO")
    warning = partialmethod(_log, "WARNING")
    error = partialmethod(_log, "ERROR")


_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Shared context-free logger; use ``bind`` for per-run fields."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger

"""
Piet execution trace

Step-level events are emitted as DEBUG records on the ``piet.trace`` logger.
Each record carries an ``event`` name and a ``fields`` dict so a handler can
render or collect them; by default they are discarded.

Events:
    step     : successful move (state before/after)
    recover  : one DP/CC change of the recovery protocol
    halt     : recovery exhausted all 8 DP/CC states
    command  : operation dispatched on a color transition
"""

import logging
from typing import Any, Optional


TRACE_LOGGER = 'piet.trace'

logging.getLogger(TRACE_LOGGER).addHandler(logging.NullHandler())


def get_logger(logger: Optional[logging.Logger] = None) -> logging.Logger:
    """Return the injected logger or the default (silent) trace logger."""
    return logger if logger is not None else logging.getLogger(TRACE_LOGGER)


def emit(logger: logging.Logger, event: str, **fields: Any) -> None:
    """Emit one structured trace event."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(event, extra={'event': event, 'fields': fields})


class TraceFormatter(logging.Formatter):
    """Render trace events as ``event key=value ...`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        fields = getattr(record, 'fields', None)
        if fields is None:
            return super().format(record)
        parts = [f"{key}={value}" for key, value in fields.items()]
        return ' '.join([f"{getattr(record, 'event', record.getMessage()):<8}"] + parts)

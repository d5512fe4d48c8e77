"""Correlation ID logging context for tracing turns across modules.

Provides a sender-aware logger that attaches the sender identity to every
log message, making it easy to trace one staff member's turns through the
router, the flows, and the text assistant.

Usage:
    from src.logging_context import get_turn_logger, set_sender_id

    set_sender_id("+447700900123")
    logger = get_turn_logger(__name__)
    logger.info("Routing turn")  # record.sender_id == "+447700900123"
"""

import logging
from contextvars import ContextVar

_sender_id: ContextVar[str] = ContextVar("sender_id", default="NO_SENDER")


def set_sender_id(sender_id: str) -> None:
    """Set the correlation ID for the current async context."""
    _sender_id.set(sender_id)


class SenderIdFilter(logging.Filter):
    """Injects sender_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.sender_id = _sender_id.get()  # type: ignore[attr-defined]
        return True


def get_turn_logger(name: str) -> logging.Logger:
    """Return a logger with the SenderIdFilter attached.

    The filter adds ``sender_id`` to each record so formatters can
    include ``%(sender_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, SenderIdFilter) for f in logger.filters):
        logger.addFilter(SenderIdFilter())
    return logger

"""
Logging setup

Standard-library logging with module loggers. Every record is stamped with
the current request id so log lines from one request can be correlated.
The id lives in a ContextVar bound by ``api.middleware.RequestIdMiddleware``.
"""
from __future__ import annotations

import logging
from contextvars import ContextVar

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"

# ---------------------------------------------------------------------------
# Context variable: thread/task-safe request state
# ---------------------------------------------------------------------------

current_request_id: ContextVar[str] = ContextVar("current_request_id", default="-")


def get_request_id() -> str:
    """Return the id of the current request, or ``"-"`` outside a request.

    Safe to call from any async context within the request lifecycle::

        logger.info("handling %s", get_request_id())
    """
    return current_request_id.get()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

class RequestIdFilter(logging.Filter):
    """Attach ``request_id`` to every record passing through the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the root logger. Safe to call repeatedly."""
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        if any(isinstance(f, RequestIdFilter) for f in handler.filters):
            return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)

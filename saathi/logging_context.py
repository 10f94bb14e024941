"""Session-scoped logging context for dialog turns.

While a turn is processed the current session id is held in a ContextVar.
The handler built by ``build_log_handler`` stamps it on every record it
emits, so each log line shows which conversation produced it, whichever
module logged it.

Usage:
    with session_context("s_1a2b3c4d5"):
        logger.info("Processing turn")
    # 2026-10-19 10:00:00 [saathi.x] INFO [s_1a2b3c4d5]: Processing turn
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

NO_SESSION = "-"

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s [%(session_id)s]: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_session_id: ContextVar[str] = ContextVar("session_id", default=NO_SESSION)


@contextmanager
def session_context(session_id: str) -> Iterator[None]:
    """Bind a session id to all records logged inside the block."""
    token = _session_id.set(session_id)
    try:
        yield
    finally:
        _session_id.reset(token)


class SessionIdFilter(logging.Filter):
    """Injects session_id into every record passing through a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "session_id"):
            record.session_id = _session_id.get()  # type: ignore[attr-defined]
        return True


def build_log_handler() -> logging.Handler:
    """Stream handler whose format includes the session id of the current turn."""
    handler = logging.StreamHandler()
    handler.addFilter(SessionIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler

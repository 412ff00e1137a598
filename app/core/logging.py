"""
Logging Setup

Stdout logging with a per-request correlation id.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Optional

_request_id: ContextVar[str] = ContextVar("request_id", default="-")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] [rid=%(request_id)s] %(message)s"


def set_request_id(rid: Optional[str] = None) -> str:
    """
    Bind a request id to the current context.

    Args:
        rid: Incoming id (e.g. from an x-request-id header). A new one is
            generated when empty.

    Returns:
        The id that was bound.
    """
    rid = rid or uuid.uuid4().hex[:12]
    _request_id.set(rid)
    return rid


def clear_request_id() -> None:
    _request_id.set("-")


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()
        return True


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure root logging to stdout.

    Args:
        level: Level name, e.g. "INFO" or "DEBUG".

    Returns:
        The application logger.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=(level or "INFO").upper(), handlers=[handler], force=True)
    return logging.getLogger("app")

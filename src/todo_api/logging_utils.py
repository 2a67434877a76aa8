"""Logging setup and per-request correlation ids for the todo service."""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator, Optional
from uuid import uuid4

LOG_FORMAT = "%(asctime)s level=%(levelname)s logger=%(name)s request_id=%(request_id)s message=\"%(message)s\""
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

_request_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("todo_request_id", default=None)


class CorrelationFilter(logging.Filter):
    """Stamps every record with the id of the request being served, or '-'."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get() or "-"
        return True


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> None:
    """
    Install the service log format on the root logger (once) and set the
    level of the todo_api loggers. Unknown level names are treated as INFO.
    """
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("todo_api").setLevel(level if level in LOG_LEVELS else "INFO")
    for handler in root_logger.handlers:
        if not any(isinstance(f, CorrelationFilter) for f in handler.filters):
            handler.addFilter(CorrelationFilter())


# PUBLIC_INTERFACE
@contextmanager
def request_context(request_id: Optional[str] = None) -> Iterator[str]:
    """
    Bind a correlation id for the duration of one request. A fresh hex id is
    generated when the caller did not supply one.
    """
    token = _request_id.set(request_id or uuid4().hex)
    try:
        yield _request_id.get()
    finally:
        _request_id.reset(token)


def get_request_id() -> Optional[str]:
    return _request_id.get()

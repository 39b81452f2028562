"""Per-request correlation ids for log lines.

Each front-end request (a CLI command, an API call) runs inside
``request_context``; every record logged while it is active carries the id
as ``record.request_id``, and ``LOG_FORMAT`` prints it. ``load_config``
installs the filter on the root handlers, so records from any module pick
it up without a special logger.

Usage:
    from detailing.logging_context import request_context

    with request_context() as request_id:
        slots = await engine.check_availability(target)
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

NO_REQUEST_ID = "-"

LOG_FORMAT = "%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s"

_request_id: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST_ID)


def new_request_id(prefix: str = "REQ") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def set_request_id(request_id: str) -> None:
    """Set the correlation id for the current context without scoping it."""
    _request_id.set(request_id)


def get_request_id() -> str:
    return _request_id.get()


@contextmanager
def request_context(request_id: Optional[str] = None) -> Iterator[str]:
    """Bind a correlation id for the duration of the block, then restore the previous one."""
    token = _request_id.set(request_id or new_request_id())
    try:
        yield _request_id.get()
    finally:
        _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Stamps the active request id onto records that do not already carry one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = _request_id.get()  # type: ignore[attr-defined]
        return True


def install_request_id_filter(logger: Optional[logging.Logger] = None) -> None:
    """Attach one RequestIdFilter to each handler of ``logger`` (root by default).

    Handler-level filters see records propagated from every child logger,
    so a format string using ``%(request_id)s`` never hits a missing key.
    """
    target = logger or logging.getLogger()
    for handler in target.handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())


def get_request_logger(name: str) -> logging.Logger:
    """Module logger that stamps the request id at emit time.

    Used where the id must be on the record before any handler sees it,
    e.g. for handlers added after configuration.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, RequestIdFilter) for f in logger.filters):
        logger.addFilter(RequestIdFilter())
    return logger

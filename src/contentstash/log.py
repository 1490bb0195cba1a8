"""Request-scoped logging for contentstash.

Library modules log through ``logging.getLogger(__name__)``. A request id is
kept in a context variable so every record emitted inside ``request_scope()``
can be correlated, and ``configure_logging()`` renders records with Rich.

Example:
    >>> with request_scope("req-1"):
    ...     get_request_id()
    'req-1'
"""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler


if TYPE_CHECKING:
    from collections.abc import Iterator


LOGGER_NAME = "contentstash"
LOG_FORMAT = "[%(request_id)s] %(message)s"

_request_id: ContextVar[str | None] = ContextVar("contentstash_request_id", default=None)


def get_request_id() -> str | None:
    """Return the current request id, or None outside a request scope."""
    return _request_id.get()


@contextmanager
def request_scope(request_id: str | None = None) -> Iterator[str]:
    """Bind a request id for the duration of the block.

    Args:
        request_id: Id to bind. A random hex id is generated if omitted.

    Yields:
        The bound request id.
    """
    rid = request_id or uuid.uuid4().hex
    token = _request_id.set(rid)
    try:
        yield rid
    finally:
        _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Adds ``request_id`` to every record ("-" outside a request scope)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


def configure_logging(
    level: int | str = logging.WARNING, console: Console | None = None
) -> logging.Logger:
    """Attach a Rich handler to the package logger.

    Calling it again replaces the previously installed handler.

    Args:
        level: Log level for the package logger.
        console: Console to render to. Defaults to stderr.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_contentstash", False):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    handler._contentstash = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger

"""Logging helpers for blogstore."""

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _correlation_id.get() or "-"
        return True


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger("blogstore")
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"
        )
    )
    handler.addFilter(CorrelationIdFilter())
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"blogstore.{name}")


def get_correlation_id() -> str | None:
    return _correlation_id.get()


@contextmanager
def correlation_scope(value: str | None = None) -> Iterator[str]:
    """Tag log records emitted inside the block with one id (new one if not given)."""
    correlation_id = value or uuid.uuid4().hex[:12]
    token = _correlation_id.set(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id.reset(token)

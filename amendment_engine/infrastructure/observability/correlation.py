"""Correlation IDs for tracing one amendment request through the logs.

The ID lives in a ContextVar so every workflow, store and notifier log
entry emitted while handling a request carries the same value, across
awaits and asyncio.to_thread hops.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

CORRELATION_KEY = "correlation_id"

_current: ContextVar[str | None] = ContextVar(CORRELATION_KEY, default=None)


def generate_correlation_id() -> str:
    return uuid4().hex


def get_correlation_id() -> str | None:
    """Correlation ID of the running request, or None outside one."""
    return _current.get()


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Run a block under a correlation ID, restoring the previous one after.

    Args:
        correlation_id: ID to use; a fresh one is generated when empty.

    Yields:
        The correlation ID in effect inside the block.
    """
    value = correlation_id or generate_correlation_id()
    token = _current.set(value)
    try:
        yield value
    finally:
        _current.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor stamping the current correlation ID.

    An explicitly bound correlation_id wins over the context value.
    """
    value = _current.get()
    if value is not None:
        event_dict.setdefault(CORRELATION_KEY, value)
    return event_dict

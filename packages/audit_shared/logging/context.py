"""Structured logging context bound per request.

Context lives in a ``ContextVar`` so correlation fields attach to every log
line emitted while a request is in flight, in threads and tasks alike.
Values are always derived from explicit request metadata; nothing here is
shared between requests.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Mapping

from . import fields

_LOG_CONTEXT: ContextVar[dict[str, str]] = ContextVar("audit_log_context", default={})


def get_context() -> dict[str, str]:
    """Return a shallow copy of current logging context."""
    return dict(_LOG_CONTEXT.get())


def bind_context(**values: object) -> None:
    """Bind non-empty values into the current logging context.

    ``None`` values are ignored; everything else is stringified.
    """
    if not values:
        return
    current = _LOG_CONTEXT.get().copy()
    current.update(
        {str(key): str(value) for key, value in values.items() if value is not None}
    )
    _LOG_CONTEXT.set(current)


def clear_context() -> None:
    """Drop all bound context values."""
    _LOG_CONTEXT.set({})


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Temporarily bind logging context for the duration of a block."""
    token = _LOG_CONTEXT.set(_LOG_CONTEXT.get().copy())
    try:
        bind_context(**dict(values))
        yield
    finally:
        _LOG_CONTEXT.reset(token)


@contextmanager
def request_log_context(meta: object) -> Iterator[None]:
    """Bind correlation fields from one envelope metadata object."""
    values = {
        fields.TRACE_ID: getattr(meta, "trace_id", None),
        fields.ENVELOPE_ID: getattr(meta, "envelope_id", None),
        fields.PRINCIPAL: getattr(meta, "principal", None),
    }
    with log_context({key: value for key, value in values.items() if value}):
        yield

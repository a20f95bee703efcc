"""Public logging API for audit services.

Wraps Python's ``logging`` module with stdout defaults, request-scoped
structured context and public API instrumentation.
"""

from . import fields
from .config import configure_logging, get_logger
from .context import (
    bind_context,
    clear_context,
    get_context,
    log_context,
    request_log_context,
)
from .public_api import (
    CompletionContext,
    InvocationContext,
    PublicApiInstrumentationConcern,
    PublicApiLoggingConcern,
    PublicApiTracingConcern,
    public_api_instrumented,
)

__all__ = [
    "bind_context",
    "clear_context",
    "CompletionContext",
    "configure_logging",
    "fields",
    "get_context",
    "get_logger",
    "InvocationContext",
    "log_context",
    "PublicApiInstrumentationConcern",
    "PublicApiLoggingConcern",
    "PublicApiTracingConcern",
    "public_api_instrumented",
    "request_log_context",
]

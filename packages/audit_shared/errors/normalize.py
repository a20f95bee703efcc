"""Fallback classification for exceptions raised by collaborators."""

from __future__ import annotations

from . import codes
from .factories import dependency_error, internal_error
from .types import ErrorDetail


def exception_to_error(exc: Exception) -> ErrorDetail:
    """Classify an exception that escaped a collaborator call.

    Only timeouts and connection failures count as dependency trouble; any
    other exception is internal. Collaborator exceptions never become
    validation errors, even ``ValueError`` subclasses such as pydantic's
    ``ValidationError``, because only caller input may be reported as invalid.
    """
    metadata = {"exception_type": type(exc).__name__}

    if isinstance(exc, TimeoutError):
        return dependency_error(
            str(exc) or "dependency timeout",
            code=codes.DEPENDENCY_TIMEOUT,
            metadata=metadata,
        )
    if isinstance(exc, ConnectionError):
        return dependency_error(
            str(exc) or "dependency unavailable",
            code=codes.DEPENDENCY_UNAVAILABLE,
            metadata=metadata,
        )
    return internal_error(
        str(exc) or "unexpected exception",
        code=codes.UNEXPECTED_EXCEPTION,
        metadata=metadata,
    )

"""Postgres/SQLAlchemy exception normalization helpers."""

from __future__ import annotations

from packages.audit_shared.errors import (
    ErrorDetail,
    codes,
    dependency_error,
    internal_error,
)


def is_postgres_error(exc: Exception) -> bool:
    """Return whether one exception originates from the SQLAlchemy/psycopg stack."""
    module = type(exc).__module__
    return module.startswith("sqlalchemy") or module.startswith("psycopg")


def normalize_postgres_error(exc: Exception) -> ErrorDetail:
    """Map low-level DB exceptions into shared structured error semantics.

    The store is read-only from this side, so integrity violations never
    apply; everything maps to dependency or internal failures.
    """
    exc_type_name = type(exc).__name__
    metadata = {"exception_type": exc_type_name}

    if "OperationalError" in exc_type_name or "timeout" in str(exc).lower():
        return dependency_error(
            "postgres unavailable",
            code=codes.DEPENDENCY_UNAVAILABLE,
            retryable=True,
            metadata=metadata,
        )

    if "InterfaceError" in exc_type_name or "ProgrammingError" in exc_type_name:
        return dependency_error(
            "postgres request failed",
            code=codes.DEPENDENCY_FAILURE,
            retryable=False,
            metadata=metadata,
        )

    return internal_error(
        "unexpected postgres failure",
        code=codes.UNEXPECTED_EXCEPTION,
        metadata=metadata,
    )

"""Shared Postgres substrate primitives for audit services."""

from resources.substrates.postgres.engine import create_postgres_engine
from resources.substrates.postgres.errors import (
    is_postgres_error,
    normalize_postgres_error,
)
from resources.substrates.postgres.schema_session import (
    ServiceSchemaSessionProvider,
    validate_schema_name,
)
from resources.substrates.postgres.session import (
    create_session_factory,
    transactional_session,
)

__all__ = [
    "create_postgres_engine",
    "create_session_factory",
    "transactional_session",
    "ServiceSchemaSessionProvider",
    "is_postgres_error",
    "normalize_postgres_error",
    "validate_schema_name",
]

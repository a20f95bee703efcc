"""Schema-scoped session helpers for service-owned Postgres schemas."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import text
from sqlalchemy.orm import Session, sessionmaker

from resources.substrates.postgres.session import transactional_session


def validate_schema_name(schema: str) -> str:
    """Return ``schema`` when it is safe to splice into DDL and search_path."""
    if not schema:
        raise ValueError("postgres schema is required")
    if not schema.replace("_", "").isalnum():
        raise ValueError("postgres schema must be alphanumeric/underscore")
    return schema


class ServiceSchemaSessionProvider:
    """Provide transactional sessions pinned to one service-owned schema."""

    def __init__(self, *, session_factory: sessionmaker[Session], schema: str) -> None:
        self._session_factory = session_factory
        self._schema = validate_schema_name(schema)

    @property
    def schema(self) -> str:
        return self._schema

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a transaction-scoped session with local search_path set."""
        with transactional_session(self._session_factory) as db:
            db.execute(text(f"SET LOCAL search_path TO {self._schema}, public"))
            yield db

"""Service-owned Postgres runtime wiring."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from packages.audit_shared.config import AuditSettings
from resources.substrates.postgres import (
    ServiceSchemaSessionProvider,
    create_postgres_engine,
    create_session_factory,
)
from services.state.system_log_authority.config import (
    resolve_system_log_authority_settings,
)


@dataclass(frozen=True)
class SystemLogPostgresRuntime:
    """Engine, session factory and schema-scoped sessions for the log table."""

    engine: Engine
    session_factory: sessionmaker[Session]
    schema_sessions: ServiceSchemaSessionProvider

    @classmethod
    def from_settings(cls, settings: AuditSettings) -> "SystemLogPostgresRuntime":
        """Build the runtime from typed application settings."""
        service_settings = resolve_system_log_authority_settings(settings)
        engine = create_postgres_engine(settings.postgres)
        session_factory = create_session_factory(engine)
        return cls(
            engine=engine,
            session_factory=session_factory,
            schema_sessions=ServiceSchemaSessionProvider(
                session_factory=session_factory,
                schema=service_settings.schema_name,
            ),
        )

    @property
    def schema(self) -> str:
        return self.schema_sessions.schema

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

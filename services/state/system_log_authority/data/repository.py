"""Read-only Postgres repository for the system log table."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError
from sqlalchemy import DateTime, Integer, bindparam, select, text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.sql.elements import BindParameter

from resources.substrates.postgres.schema_session import ServiceSchemaSessionProvider
from services.state.system_log_authority.domain import LogEntry
from services.state.system_log_authority.interfaces import (
    LogEntryDecodeError,
    SystemLogRepository,
)
from services.state.system_log_authority.query import (
    LogQuery,
    ParameterType,
    QueryParameter,
)

from .schema import system_log_table


class PostgresSystemLogRepository(SystemLogRepository):
    """SQL repository over the service-owned ``system_log_table``."""

    def __init__(self, sessions: ServiceSchemaSessionProvider) -> None:
        self._sessions = sessions

    def fetch_entries(self, *, query: LogQuery) -> list[LogEntry]:
        """Run one filtered select and decode every returned row."""
        stmt = select(system_log_table)
        if query.has_predicate:
            stmt = stmt.where(
                text(query.predicate).bindparams(*(_bind(p) for p in query.params))
            )
        with self._sessions.session() as session:
            rows = session.execute(stmt).mappings().all()
            return [_to_entry(row) for row in rows]

    def probe(self) -> None:
        """Touch the owned table with a one-row read."""
        with self._sessions.session() as session:
            session.execute(select(system_log_table.c.log_id).limit(1)).all()


def _bind(param: QueryParameter) -> BindParameter[Any]:
    """Attach the driver type matching one parameter's tag."""
    if param.data_type is ParameterType.INT_ARRAY:
        return bindparam(param.name, list(param.value), type_=ARRAY(Integer))
    return bindparam(param.name, param.value, type_=DateTime(timezone=False))


def _to_entry(row: Mapping[str, Any]) -> LogEntry:
    """Map one SQL row to a strict ``LogEntry``."""
    try:
        return LogEntry(
            log_id=row["log_id"],
            timestamp=row["timestamp"],
            user_id=row["user_id"],
            action=row["action"],
            details=row["details"],
        )
    except KeyError as exc:
        raise LogEntryDecodeError(
            f"system log row is missing column {exc.args[0]}",
            log_id=row.get("log_id"),
        ) from exc
    except ValidationError as exc:
        first = exc.errors()[0]
        column = ".".join(str(part) for part in first.get("loc", ())) or "row"
        raise LogEntryDecodeError(
            f"system log row has invalid {column}",
            log_id=row.get("log_id"),
        ) from exc

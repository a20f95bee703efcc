"""Transport-neutral protocol interfaces used by System Log Authority Service."""

from __future__ import annotations

from typing import Protocol

from services.state.system_log_authority.domain import LogEntry
from services.state.system_log_authority.query import LogQuery


class LogEntryDecodeError(ValueError):
    """A stored row does not match the ``LogEntry`` column contract."""

    def __init__(self, message: str, *, log_id: object = None) -> None:
        super().__init__(message)
        self.log_id = log_id


class SystemLogRepository(Protocol):
    """Protocol for read-only system log persistence operations."""

    def fetch_entries(self, *, query: LogQuery) -> list[LogEntry]:
        """Return every row matching ``query``; raise ``LogEntryDecodeError`` on drift."""

    def probe(self) -> None:
        """Run a trivial read against the owned table; raise when unavailable."""

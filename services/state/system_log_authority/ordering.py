"""Chronological ordering of fetched log entries."""

from __future__ import annotations

from collections.abc import Iterable
from operator import attrgetter

from services.state.system_log_authority.domain import LogEntry


def order_by_timestamp(entries: Iterable[LogEntry]) -> list[LogEntry]:
    """Return entries earliest first; equal timestamps keep retrieval order."""
    return sorted(entries, key=attrgetter("timestamp"))

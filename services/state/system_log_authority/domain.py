"""Domain contracts for System Log Authority Service payloads."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, field_validator


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class LogEntry(BaseModel):
    """One persisted system log row; immutable and read-only here."""

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    log_id: int
    timestamp: datetime
    user_id: int
    action: str
    details: str | None = None

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return _as_utc(value)


class QueryFilter(BaseModel):
    """Request-scoped filter; every bound is inclusive and optional."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    from_timestamp: datetime | None = None
    to_timestamp: datetime | None = None
    user_ids: frozenset[int] | None = None

    @field_validator("from_timestamp", "to_timestamp")
    @classmethod
    def _normalize_bounds(cls, value: datetime | None) -> datetime | None:
        return None if value is None else _as_utc(value)

    @field_validator("user_ids")
    @classmethod
    def _empty_ids_mean_no_filter(
        cls, value: frozenset[int] | None
    ) -> frozenset[int] | None:
        """An empty id set participates in no predicate."""
        if value is not None and len(value) == 0:
            return None
        return value


class AuthorizationContext(BaseModel):
    """Account resolved from the admin token; never persisted or cached."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    user_id: int
    role: str


class HealthStatus(BaseModel):
    """Service and owned storage readiness payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    service_ready: bool
    storage_ready: bool
    detail: str

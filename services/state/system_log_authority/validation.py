"""Pydantic request-validation models for System Log Authority Service API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, StrictInt

from services.state.system_log_authority.domain import QueryFilter


class QueryLogsRequest(BaseModel):
    """Validated filter portion of a ``query_logs`` request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    from_timestamp: datetime | None = None
    to_timestamp: datetime | None = None
    user_ids: frozenset[StrictInt] | None = None

    def to_filter(self) -> QueryFilter:
        return QueryFilter(
            from_timestamp=self.from_timestamp,
            to_timestamp=self.to_timestamp,
            user_ids=self.user_ids,
        )

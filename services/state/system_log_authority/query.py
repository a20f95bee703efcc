"""Parameterized filter construction for system log reads.

``build_log_query`` is a pure function from ``QueryFilter`` to a predicate
string made only of column names and placeholders, plus the ordered bound
parameters. Filter values never appear in the predicate text.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from itertools import accumulate, chain

from services.state.system_log_authority.domain import QueryFilter

ParameterValue = datetime | tuple[int, ...]


class ParameterType(str, Enum):
    """Type tags used when binding parameters to the driver."""

    TIMESTAMP = "timestamp"
    INT_ARRAY = "int_array"


@dataclass(frozen=True)
class QueryParameter:
    """One positional bound parameter."""

    name: str
    data_type: ParameterType
    value: ParameterValue


@dataclass(frozen=True)
class LogQuery:
    """Predicate text and parameters in placeholder order."""

    predicate: str
    params: tuple[QueryParameter, ...]

    @property
    def has_predicate(self) -> bool:
        return self.predicate != ""


@dataclass(frozen=True)
class _Clause:
    """Clause template with one ``{}`` slot per bound value."""

    template: str
    values: tuple[tuple[ParameterType, ParameterValue], ...]

    def render(self, offset: int) -> str:
        return self.template.format(
            *(f":p{offset + index}" for index in range(1, len(self.values) + 1))
        )


def build_log_query(query_filter: QueryFilter) -> LogQuery:
    """Translate a filter into a predicate and its ordered parameters."""
    clauses = (*_time_clauses(query_filter), *_user_clauses(query_filter))
    offsets = accumulate((len(clause.values) for clause in clauses), initial=0)
    predicate = " AND ".join(
        clause.render(offset) for clause, offset in zip(clauses, offsets)
    )
    params = tuple(
        QueryParameter(name=f"p{index}", data_type=data_type, value=value)
        for index, (data_type, value) in enumerate(
            chain.from_iterable(clause.values for clause in clauses), start=1
        )
    )
    return LogQuery(predicate=predicate, params=params)


def _time_clauses(query_filter: QueryFilter) -> tuple[_Clause, ...]:
    lower = query_filter.from_timestamp
    upper = query_filter.to_timestamp
    if lower is not None and upper is not None:
        return (
            _Clause(
                "(timestamp >= {} AND timestamp <= {})",
                (
                    (ParameterType.TIMESTAMP, _storage_timestamp(lower)),
                    (ParameterType.TIMESTAMP, _storage_timestamp(upper)),
                ),
            ),
        )
    if lower is not None:
        return (
            _Clause(
                "timestamp >= {}",
                ((ParameterType.TIMESTAMP, _storage_timestamp(lower)),),
            ),
        )
    if upper is not None:
        return (
            _Clause(
                "timestamp <= {}",
                ((ParameterType.TIMESTAMP, _storage_timestamp(upper)),),
            ),
        )
    return ()


def _user_clauses(query_filter: QueryFilter) -> tuple[_Clause, ...]:
    if not query_filter.user_ids:
        return ()
    ids = tuple(sorted(query_filter.user_ids))
    return (_Clause("user_id = ANY({})", ((ParameterType.INT_ARRAY, ids),)),)


def _storage_timestamp(value: datetime) -> datetime:
    """Convert to the naive-UTC form stored in ``timestamp`` columns."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)

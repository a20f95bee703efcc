"""Request metadata threaded explicitly through every pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4


class EnvelopeKind(str, Enum):
    """Intent of the request carrying the metadata."""

    UNSPECIFIED = "unspecified"
    QUERY = "query"


@dataclass(frozen=True)
class EnvelopeMeta:
    """Correlation and identity fields for one request.

    ``trace_id`` is forwarded to collaborators and bound into log context;
    ``principal`` names the caller for audit logging, not for authorization.
    """

    envelope_id: str
    trace_id: str
    parent_id: str
    timestamp: datetime
    kind: EnvelopeKind
    source: str
    principal: str


def new_meta(
    *,
    source: str,
    principal: str,
    kind: EnvelopeKind = EnvelopeKind.QUERY,
    trace_id: str | None = None,
    parent_id: str = "",
    envelope_id: str | None = None,
    timestamp: datetime | None = None,
) -> EnvelopeMeta:
    """Build metadata, generating ids and stamping the current UTC time."""
    if timestamp is None:
        stamped = datetime.now(UTC)
    elif timestamp.tzinfo is None:
        stamped = timestamp.replace(tzinfo=UTC)
    else:
        stamped = timestamp.astimezone(UTC)
    return EnvelopeMeta(
        envelope_id=envelope_id or uuid4().hex,
        trace_id=trace_id or uuid4().hex,
        parent_id=parent_id,
        timestamp=stamped,
        kind=kind,
        source=source,
        principal=principal,
    )

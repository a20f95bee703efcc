"""Envelope result type returned across every pipeline stage.

A stage either succeeds with a ``Payload`` and no errors, or fails with at
least one ``ErrorDetail`` and no payload. The builders below are the only
supported way to produce one.
"""

from __future__ import annotations

from typing import Generic, Iterable, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from packages.audit_shared.errors import ErrorDetail

from .meta import EnvelopeMeta

T = TypeVar("T")


class Payload(BaseModel, Generic[T]):
    """Value produced by a successful stage."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: T


class Envelope(BaseModel, Generic[T]):
    """Request metadata plus either a payload or the errors that stopped it."""

    model_config = ConfigDict(frozen=True)

    metadata: EnvelopeMeta
    payload: Payload[T] | None
    errors: list[ErrorDetail] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def has_payload(self) -> bool:
        return self.payload is not None


def success(*, meta: EnvelopeMeta, payload: T) -> Envelope[T]:
    """Wrap ``payload`` as a successful result."""
    return Envelope[T](metadata=meta, payload=Payload[T](value=payload))


def failure(*, meta: EnvelopeMeta, errors: Iterable[ErrorDetail]) -> Envelope[T]:
    """Build a failed result; failures never carry a payload."""
    collected = list(errors)
    if not collected:
        raise ValueError("failure envelope requires at least one error")
    return Envelope[T](metadata=meta, payload=None, errors=collected)


def empty(*, meta: EnvelopeMeta) -> Envelope[None]:
    """Successful result for stages that only gate the pipeline."""
    return Envelope[None](metadata=meta, payload=None)

"""Unit tests for public API logging and tracing concerns."""

from __future__ import annotations

import logging

import pytest

from packages.audit_shared.envelope import (
    EnvelopeKind,
    EnvelopeMeta,
    failure,
    new_meta,
    success,
)
from packages.audit_shared.errors import validation_error
from packages.audit_shared.logging import (
    CompletionContext,
    InvocationContext,
    PublicApiTracingConcern,
    public_api_instrumented,
)


class _FakeSpan:
    def __init__(self) -> None:
        self.attributes: dict[str, object] = {}
        self.statuses: list[object] = []

    def set_attribute(self, key: str, value: object) -> None:
        self.attributes[key] = value

    def set_status(self, status: object) -> None:
        self.statuses.append(status)


class _FakeSpanManager:
    def __init__(self, span: _FakeSpan) -> None:
        self._span = span
        self.exited = False

    def __enter__(self) -> _FakeSpan:
        return self._span

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.exited = True


class _FakeTracer:
    def __init__(self) -> None:
        self.names: list[str] = []
        self.managers: list[_FakeSpanManager] = []

    def start_as_current_span(self, name: str) -> _FakeSpanManager:
        self.names.append(name)
        manager = _FakeSpanManager(_FakeSpan())
        self.managers.append(manager)
        return manager


class _RecordingConcern:
    def __init__(self) -> None:
        self.invocations: list[InvocationContext] = []
        self.completions: list[CompletionContext] = []

    def on_invocation(self, context: InvocationContext) -> None:
        self.invocations.append(context)

    def on_completion(self, context: CompletionContext) -> None:
        self.completions.append(context)


class _BrokenConcern:
    def on_invocation(self, context: InvocationContext) -> None:
        raise RuntimeError("concern exploded")

    def on_completion(self, context: CompletionContext) -> None:
        raise RuntimeError("concern exploded")


def _meta() -> EnvelopeMeta:
    return new_meta(
        kind=EnvelopeKind.QUERY,
        source="test",
        principal="operator",
        trace_id="trace-1",
    )


def _invocation() -> InvocationContext:
    return InvocationContext(
        component_id="service_system_log_authority",
        api_name="query_logs",
        trace_id="trace-1",
        envelope_id="env-1",
        principal="operator",
        references={"user_id": "5"},
    )


def test_tracing_concern_sets_attributes_and_closes_span() -> None:
    tracer = _FakeTracer()
    concern = PublicApiTracingConcern(tracer=tracer)  # type: ignore[arg-type]

    concern.on_invocation(_invocation())
    concern.on_completion(
        CompletionContext(
            invocation=_invocation(), success=True, duration_ms=1.5, errors=[]
        )
    )

    assert tracer.names == ["public_api.service_system_log_authority.query_logs"]
    manager = tracer.managers[0]
    span = manager._span
    assert manager.exited is True
    assert span.attributes["trace_id"] == "trace-1"
    assert span.attributes["reference.user_id"] == "5"
    assert span.attributes["outcome"] == "success"
    assert span.statuses == []


def test_tracing_concern_marks_failures_with_error_status() -> None:
    tracer = _FakeTracer()
    concern = PublicApiTracingConcern(tracer=tracer)  # type: ignore[arg-type]

    concern.on_invocation(_invocation())
    concern.on_completion(
        CompletionContext(
            invocation=_invocation(),
            success=False,
            duration_ms=2.0,
            errors=["INVALID_ARGUMENT: bad"],
        )
    )

    span = tracer.managers[0]._span
    assert span.attributes["outcome"] == "failure"
    assert len(span.statuses) == 1


def test_decorator_reports_envelope_outcome_to_concerns() -> None:
    recorder = _RecordingConcern()

    class _Service:
        @public_api_instrumented(
            component_id="service_example", id_fields=("item_id",), concerns=[recorder]
        )
        def lookup(self, *, meta: EnvelopeMeta, item_id: str):
            if item_id == "missing":
                return failure(meta=meta, errors=[validation_error("no such item")])
            return success(meta=meta, payload=item_id)

    service = _Service()
    service.lookup(meta=_meta(), item_id="a")
    service.lookup(meta=_meta(), item_id="missing")

    assert [c.api_name for c in recorder.invocations] == ["lookup", "lookup"]
    assert recorder.invocations[0].references == {"item_id": "a"}
    assert recorder.invocations[0].trace_id == "trace-1"
    assert [c.success for c in recorder.completions] == [True, False]
    assert recorder.completions[1].errors == ["VALIDATION_ERROR: no such item"]


def test_decorator_reports_exceptions_and_reraises() -> None:
    recorder = _RecordingConcern()

    @public_api_instrumented(component_id="service_example", concerns=[recorder])
    def explode(*, meta: EnvelopeMeta) -> None:
        raise KeyError("gone")

    with pytest.raises(KeyError):
        explode(meta=_meta())

    assert recorder.completions[0].success is False
    assert recorder.completions[0].errors[0].startswith("KeyError")


def test_failing_concern_never_breaks_the_call(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("audit.test.instrumentation")

    @public_api_instrumented(
        component_id="service_example", concerns=[_BrokenConcern()], logger=logger
    )
    def ping(*, meta: EnvelopeMeta):
        return success(meta=meta, payload="pong")

    with caplog.at_level(logging.INFO, logger="audit.test.instrumentation"):
        result = ping(meta=_meta())

    assert result.ok is True
    assert "Public API instrumentation concern failed" in caplog.text


def test_interrupted_call_still_closes_its_span() -> None:
    tracer = _FakeTracer()
    concern = PublicApiTracingConcern(tracer=tracer)  # type: ignore[arg-type]

    @public_api_instrumented(component_id="service_example", concerns=[concern])
    def interrupted(*, meta: EnvelopeMeta) -> None:
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        interrupted(meta=_meta())

    manager = tracer.managers[0]
    assert manager.exited is True
    assert manager._span.attributes["outcome"] == "failure"
    assert concern._active_scopes.get() == ()

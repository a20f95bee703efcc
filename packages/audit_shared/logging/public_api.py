"""Composable instrumentation helpers for public API methods.

``public_api_instrumented`` wraps one service method and dispatches
invocation/completion events to a list of concerns. Two concerns ship here:
structured logging and OpenTelemetry tracing.
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass
from functools import lru_cache, wraps
from time import perf_counter
from typing import Any, Callable, Mapping, Protocol, Sequence

from opentelemetry import trace as otel_trace
from opentelemetry.trace import Span, Status, StatusCode

from . import fields
from .context import log_context

_TRACER_NAME = "audit.public_api"


@dataclass(frozen=True)
class InvocationContext:
    """Structured metadata describing one public API invocation."""

    component_id: str
    api_name: str
    trace_id: str | None
    envelope_id: str | None
    principal: str | None
    references: Mapping[str, str]


@dataclass(frozen=True)
class CompletionContext:
    """Structured metadata describing one completed public API invocation."""

    invocation: InvocationContext
    success: bool
    duration_ms: float
    errors: list[str]


class PublicApiInstrumentationConcern(Protocol):
    """Hook contract for one public API instrumentation concern."""

    def on_invocation(self, context: InvocationContext) -> None:
        """Handle invocation-start event for one method call."""

    def on_completion(self, context: CompletionContext) -> None:
        """Handle completion event for one method call."""


class PublicApiLoggingConcern:
    """Logging concern implementation for invocation/completion events."""

    def __init__(self, *, logger: Any) -> None:
        self._logger = logger

    def on_invocation(self, context: InvocationContext) -> None:
        with log_context(_invocation_log_context(context)):
            self._logger.info("Public API invocation")

    def on_completion(self, context: CompletionContext) -> None:
        payload = _invocation_log_context(context.invocation)
        payload.update(
            {
                fields.EVENT: fields.PUBLIC_API_COMPLETION_EVENT,
                fields.SUCCESS: context.success,
                fields.DURATION_MS: context.duration_ms,
                fields.ERRORS: context.errors,
            }
        )
        with log_context(payload):
            if context.success:
                self._logger.info("Public API completion")
            else:
                self._logger.warning("Public API completion")


@dataclass(frozen=True)
class _TraceScope:
    manager: Any
    span: Span


class PublicApiTracingConcern:
    """Open one span per invocation and close it on completion."""

    def __init__(self, *, tracer: otel_trace.Tracer) -> None:
        self._tracer = tracer
        self._active_scopes: ContextVar[tuple[_TraceScope, ...]] = ContextVar(
            "public_api_tracing_scopes", default=()
        )

    def on_invocation(self, context: InvocationContext) -> None:
        manager = self._tracer.start_as_current_span(
            f"public_api.{context.component_id}.{context.api_name}"
        )
        span = manager.__enter__()
        span.set_attribute(fields.COMPONENT_ID, context.component_id)
        span.set_attribute(fields.API_NAME, context.api_name)
        if context.trace_id is not None:
            span.set_attribute(fields.TRACE_ID, context.trace_id)
        if context.principal is not None:
            span.set_attribute(fields.PRINCIPAL, context.principal)
        for key, value in context.references.items():
            span.set_attribute(f"reference.{key}", value)
        self._active_scopes.set(
            (*self._active_scopes.get(), _TraceScope(manager=manager, span=span))
        )

    def on_completion(self, context: CompletionContext) -> None:
        current = self._active_scopes.get()
        if not current:
            return
        scope = current[-1]
        self._active_scopes.set(current[:-1])

        scope.span.set_attribute(fields.DURATION_MS, context.duration_ms)
        scope.span.set_attribute(
            fields.OUTCOME, "success" if context.success else "failure"
        )
        if not context.success:
            scope.span.set_status(Status(StatusCode.ERROR, "; ".join(context.errors[:3])))
        scope.manager.__exit__(None, None, None)


def public_api_instrumented(
    *,
    component_id: str,
    api_name: str | None = None,
    id_fields: tuple[str, ...] = (),
    concerns: Sequence[PublicApiInstrumentationConcern] | None = None,
    logger: Any | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorate one public API method with composable instrumentation concerns.

    The wrapped method must take ``meta`` as a keyword argument. Keyword
    arguments named in ``id_fields`` are attached as references. Completion is
    dispatched for every exit, cancellation included, before re-raising.
    """
    resolved: tuple[PublicApiInstrumentationConcern, ...] = (
        *(concerns or ()),
        _default_tracing_concern(),
    )
    if logger is not None:
        resolved = (PublicApiLoggingConcern(logger=logger), *resolved)

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        method_name = api_name or func.__name__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            meta = kwargs.get("meta")
            invocation = InvocationContext(
                component_id=component_id,
                api_name=method_name,
                trace_id=_attr_or_none(meta, "trace_id"),
                envelope_id=_attr_or_none(meta, "envelope_id"),
                principal=_attr_or_none(meta, "principal"),
                references={
                    name: str(kwargs[name])
                    for name in id_fields
                    if kwargs.get(name) not in (None, "")
                },
            )
            _dispatch(resolved, "invocation", invocation, logger, invocation)

            started = perf_counter()
            try:
                result = func(*args, **kwargs)
            except BaseException as exc:
                completion = CompletionContext(
                    invocation=invocation,
                    success=False,
                    duration_ms=_elapsed_ms(started),
                    errors=[f"{type(exc).__name__}: {exc}"],
                )
                _dispatch(resolved, "completion", completion, logger, invocation)
                raise

            success, errors = _result_summary(result)
            completion = CompletionContext(
                invocation=invocation,
                success=success,
                duration_ms=_elapsed_ms(started),
                errors=errors,
            )
            _dispatch(resolved, "completion", completion, logger, invocation)
            return result

        return wrapper

    return decorator


def _dispatch(
    concerns: Sequence[PublicApiInstrumentationConcern],
    stage: str,
    context: InvocationContext | CompletionContext,
    logger: Any | None,
    invocation: InvocationContext,
) -> None:
    """Send one event to every concern; a failing concern never breaks the call."""
    for concern in concerns:
        hook = concern.on_invocation if stage == "invocation" else concern.on_completion
        try:
            hook(context)  # type: ignore[arg-type]
        except Exception as exc:  # noqa: BLE001
            if logger is None:
                continue
            with log_context(
                {
                    fields.EVENT: fields.PUBLIC_API_INSTRUMENTATION_FAILURE_EVENT,
                    fields.COMPONENT_ID: invocation.component_id,
                    fields.API_NAME: invocation.api_name,
                    fields.STAGE: stage,
                    fields.CONCERN: type(concern).__name__,
                    fields.ERRORS: [f"{type(exc).__name__}: {exc}"],
                }
            ):
                logger.warning("Public API instrumentation concern failed")


def _elapsed_ms(started: float) -> float:
    return round((perf_counter() - started) * 1000.0, 3)


def _attr_or_none(obj: object | None, name: str) -> str | None:
    """Return string attribute value from object when present."""
    if obj is None:
        return None
    value = getattr(obj, name, None)
    if value in (None, ""):
        return None
    return str(value)


def _result_summary(result: object) -> tuple[bool, list[str]]:
    """Infer success and one-line error summaries from an envelope-like result."""
    errors_obj = getattr(result, "errors", [])
    summaries: list[str] = []
    if isinstance(errors_obj, list):
        for item in errors_obj:
            code = getattr(item, "code", None)
            message = getattr(item, "message", None)
            if message in (None, ""):
                continue
            summaries.append(str(message) if not code else f"{code}: {message}")
    ok_value = getattr(result, "ok", None)
    if isinstance(ok_value, bool):
        return ok_value, summaries
    return len(summaries) == 0, summaries


def _invocation_log_context(context: InvocationContext) -> dict[str, object]:
    """Build common structured fields for one invocation event."""
    return {
        fields.EVENT: fields.PUBLIC_API_INVOCATION_EVENT,
        fields.COMPONENT_ID: context.component_id,
        fields.API_NAME: context.api_name,
        fields.TRACE_ID: context.trace_id,
        fields.ENVELOPE_ID: context.envelope_id,
        fields.PRINCIPAL: context.principal,
        **context.references,
    }


@lru_cache(maxsize=1)
def _default_tracing_concern() -> PublicApiTracingConcern:
    """Build the process-wide OTel tracing concern."""
    return PublicApiTracingConcern(tracer=otel_trace.get_tracer(_TRACER_NAME))

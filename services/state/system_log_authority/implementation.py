"""Concrete System Log Authority Service implementation."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from packages.audit_shared.envelope import (
    Envelope,
    EnvelopeMeta,
    failure,
    success,
    validate_meta,
)
from packages.audit_shared.errors import (
    ErrorDetail,
    codes,
    exception_to_error,
    internal_error,
    validation_error,
)
from packages.audit_shared.logging import (
    fields,
    get_logger,
    log_context,
    public_api_instrumented,
    request_log_context,
)
from resources.adapters.user_auth import UserAuthAdapter
from resources.substrates.postgres import is_postgres_error, normalize_postgres_error
from services.state.system_log_authority.authorization import AdminAuthorizer
from services.state.system_log_authority.config import (
    SERVICE_COMPONENT_ID,
    SystemLogAuthoritySettings,
)
from services.state.system_log_authority.domain import (
    HealthStatus,
    LogEntry,
    QueryFilter,
)
from services.state.system_log_authority.interfaces import (
    LogEntryDecodeError,
    SystemLogRepository,
)
from services.state.system_log_authority.ordering import order_by_timestamp
from services.state.system_log_authority.query import build_log_query
from services.state.system_log_authority.service import SystemLogAuthorityService
from services.state.system_log_authority.validation import QueryLogsRequest

_LOGGER = get_logger(__name__)


class DefaultSystemLogAuthorityService(SystemLogAuthorityService):
    """Admin-gated log reads over the Postgres log table."""

    def __init__(
        self,
        *,
        settings: SystemLogAuthoritySettings,
        adapter: UserAuthAdapter,
        repository: SystemLogRepository,
    ) -> None:
        self._settings = settings
        self._repository = repository
        self._authorizer = AdminAuthorizer(
            adapter=adapter, admin_role=settings.admin_role
        )

    @public_api_instrumented(logger=_LOGGER, component_id=SERVICE_COMPONENT_ID)
    def query_logs(
        self,
        *,
        meta: EnvelopeMeta,
        admin_token: str,
        from_timestamp: datetime | None = None,
        to_timestamp: datetime | None = None,
        user_ids: Iterable[int] | None = None,
    ) -> Envelope[list[LogEntry]]:
        """Authorize the caller, then fetch and order matching entries.

        Stages run in order and the first failure is returned unchanged:
        identity, role, request shape, user-id references, fetch.
        """
        meta_errors = validate_meta(meta)
        if meta_errors:
            return failure(meta=meta, errors=meta_errors)

        with request_log_context(meta):
            identity = self._authorizer.verify_identity(meta=meta, token=admin_token)
            if not identity.ok:
                return failure(meta=meta, errors=identity.errors)

            authorization = self._authorizer.authorize_role(meta=meta, token=admin_token)
            if not authorization.ok:
                return failure(meta=meta, errors=authorization.errors)

            query_filter, request_error = self._validate_filter(
                from_timestamp=from_timestamp,
                to_timestamp=to_timestamp,
                user_ids=user_ids,
            )
            if request_error is not None:
                return self._rejected(meta=meta, error=request_error)
            assert query_filter is not None

            if query_filter.user_ids is not None:
                references = self._authorizer.validate_user_ids(
                    meta=meta, user_ids=query_filter.user_ids
                )
                if not references.ok:
                    return failure(meta=meta, errors=references.errors)
            else:
                _LOGGER.info("No user_id filter; skipping reference validation")

            query = build_log_query(query_filter)
            with log_context({fields.PIPELINE_STAGE: "query_built"}):
                _LOGGER.info(
                    "Log query built: clauses=%s params=%d",
                    query.has_predicate,
                    len(query.params),
                )

            try:
                entries = self._repository.fetch_entries(query=query)
            except LogEntryDecodeError as exc:
                return self._decode_failure(meta=meta, exc=exc)
            except Exception as exc:  # noqa: BLE001
                return self._storage_failure(meta=meta, operation="query_logs", exc=exc)

            ordered = order_by_timestamp(entries)
            with log_context({fields.PIPELINE_STAGE: "sorted"}):
                _LOGGER.info("Returning %d log entries", len(ordered))
            return success(meta=meta, payload=ordered)

    @public_api_instrumented(logger=_LOGGER, component_id=SERVICE_COMPONENT_ID)
    def health(self, *, meta: EnvelopeMeta) -> Envelope[HealthStatus]:
        """Report readiness based on one trivial read of the owned table."""
        meta_errors = validate_meta(meta)
        if meta_errors:
            return failure(meta=meta, errors=meta_errors)
        try:
            self._repository.probe()
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="health", exc=exc)
        return success(
            meta=meta,
            payload=HealthStatus(service_ready=True, storage_ready=True, detail="ok"),
        )

    def _validate_filter(
        self,
        *,
        from_timestamp: datetime | None,
        to_timestamp: datetime | None,
        user_ids: Iterable[int] | None,
    ) -> tuple[QueryFilter | None, ErrorDetail | None]:
        """Check request shape; return the filter or the first problem found."""
        try:
            request = QueryLogsRequest.model_validate(
                {
                    "from_timestamp": from_timestamp,
                    "to_timestamp": to_timestamp,
                    "user_ids": user_ids,
                }
            )
        except ValidationError as exc:
            err = exc.errors()[0]
            return None, validation_error(
                f"request validation failed: {err['msg']}",
                code=codes.INVALID_ARGUMENT,
                metadata={"field": ".".join(str(p) for p in err["loc"])},
            )

        query_filter = request.to_filter()
        if (
            query_filter.user_ids is not None
            and len(query_filter.user_ids) > self._settings.max_user_ids
        ):
            return None, validation_error(
                f"user_ids exceeds max_user_ids ({self._settings.max_user_ids})",
                code=codes.INVALID_ARGUMENT,
                metadata={"field": "user_ids"},
            )

        if (
            query_filter.from_timestamp is not None
            and query_filter.to_timestamp is not None
            and query_filter.from_timestamp > query_filter.to_timestamp
        ):
            return None, validation_error(
                "from_timestamp must not be after to_timestamp",
                code=codes.INVALID_TIME_RANGE,
            )
        return query_filter, None

    def _rejected(self, *, meta: EnvelopeMeta, error: ErrorDetail) -> Envelope[Any]:
        with log_context({fields.ERROR_CODE: error.code}):
            _LOGGER.warning("Request rejected: %s", error.message)
        return failure(meta=meta, errors=[error])

    def _decode_failure(
        self, *, meta: EnvelopeMeta, exc: LogEntryDecodeError
    ) -> Envelope[Any]:
        """Report a stored row that no longer matches the entry contract."""
        _LOGGER.error(
            "Stored log row failed to decode: log_id=%s", exc.log_id, exc_info=exc
        )
        metadata = {} if exc.log_id is None else {"log_id": str(exc.log_id)}
        return failure(
            meta=meta,
            errors=[
                internal_error(
                    str(exc), code=codes.ROW_DECODE_FAILED, metadata=metadata
                )
            ],
        )

    def _storage_failure(
        self,
        *,
        meta: EnvelopeMeta,
        operation: str,
        exc: Exception,
    ) -> Envelope[Any]:
        """Map one storage exception into a structured envelope error."""
        _LOGGER.warning(
            "%s failed due to storage error: exception_type=%s",
            operation,
            type(exc).__name__,
            exc_info=exc,
        )
        if is_postgres_error(exc):
            return failure(meta=meta, errors=[normalize_postgres_error(exc)])
        return failure(meta=meta, errors=[exception_to_error(exc)])

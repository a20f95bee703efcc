"""System Log Authority Service native package exports."""

from packages.audit_shared.envelope import Envelope, EnvelopeKind, EnvelopeMeta
from packages.audit_shared.errors import ErrorCategory, ErrorDetail
from services.state.system_log_authority.config import (
    SERVICE_COMPONENT_ID,
    SystemLogAuthoritySettings,
)
from services.state.system_log_authority.domain import (
    AuthorizationContext,
    HealthStatus,
    LogEntry,
    QueryFilter,
)
from services.state.system_log_authority.implementation import (
    DefaultSystemLogAuthorityService,
)
from services.state.system_log_authority.query import LogQuery, build_log_query
from services.state.system_log_authority.service import (
    SystemLogAuthorityService,
    build_system_log_authority_service,
)

__all__ = [
    "SERVICE_COMPONENT_ID",
    "SystemLogAuthorityService",
    "SystemLogAuthoritySettings",
    "DefaultSystemLogAuthorityService",
    "build_system_log_authority_service",
    "AuthorizationContext",
    "HealthStatus",
    "LogEntry",
    "LogQuery",
    "QueryFilter",
    "build_log_query",
    "Envelope",
    "EnvelopeKind",
    "EnvelopeMeta",
    "ErrorCategory",
    "ErrorDetail",
]

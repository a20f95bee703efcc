"""Authoritative in-process Python API for System Log Authority Service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime

from packages.audit_shared.config import AuditSettings
from packages.audit_shared.envelope import Envelope, EnvelopeMeta
from resources.adapters.user_auth import UserAuthAdapter
from services.state.system_log_authority.domain import HealthStatus, LogEntry


class SystemLogAuthorityService(ABC):
    """Public API for administrative system log reads."""

    @abstractmethod
    def query_logs(
        self,
        *,
        meta: EnvelopeMeta,
        admin_token: str,
        from_timestamp: datetime | None = None,
        to_timestamp: datetime | None = None,
        user_ids: Iterable[int] | None = None,
    ) -> Envelope[list[LogEntry]]:
        """Return matching log entries, earliest first, for a top-tier admin."""

    @abstractmethod
    def health(self, *, meta: EnvelopeMeta) -> Envelope[HealthStatus]:
        """Return service and owned storage readiness."""


def build_system_log_authority_service(
    *,
    settings: AuditSettings,
    adapter: UserAuthAdapter | None = None,
) -> SystemLogAuthorityService:
    """Build the default implementation from typed settings."""
    from resources.adapters.user_auth import (
        HttpUserAuthAdapter,
        resolve_user_auth_adapter_settings,
    )
    from services.state.system_log_authority.config import (
        resolve_system_log_authority_settings,
    )
    from services.state.system_log_authority.data import (
        PostgresSystemLogRepository,
        SystemLogPostgresRuntime,
    )
    from services.state.system_log_authority.implementation import (
        DefaultSystemLogAuthorityService,
    )

    runtime = SystemLogPostgresRuntime.from_settings(settings)
    return DefaultSystemLogAuthorityService(
        settings=resolve_system_log_authority_settings(settings),
        adapter=adapter
        or HttpUserAuthAdapter(settings=resolve_user_auth_adapter_settings(settings)),
        repository=PostgresSystemLogRepository(runtime.schema_sessions),
    )

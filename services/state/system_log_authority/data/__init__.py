"""Data-layer exports for System Log Authority Service."""

from services.state.system_log_authority.data.bootstrap import (
    bootstrap_system_log_schema,
)
from services.state.system_log_authority.data.repository import (
    PostgresSystemLogRepository,
)
from services.state.system_log_authority.data.runtime import SystemLogPostgresRuntime
from services.state.system_log_authority.data.schema import metadata, system_log_table

__all__ = [
    "PostgresSystemLogRepository",
    "SystemLogPostgresRuntime",
    "bootstrap_system_log_schema",
    "metadata",
    "system_log_table",
]

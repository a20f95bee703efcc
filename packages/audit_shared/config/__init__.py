"""Public API for shared audit configuration utilities."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    AuditSettings,
    ComponentsSettings,
    LoggingSettings,
    PostgresSettings,
    resolve_component_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AuditSettings",
    "ComponentsSettings",
    "LoggingSettings",
    "PostgresSettings",
    "resolve_component_settings",
    "load_settings",
]

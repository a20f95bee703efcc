"""User auth/directory adapter resource exports."""

from resources.adapters.user_auth.adapter import (
    AccountInfo,
    UserAuthAdapter,
    UserAuthAdapterDependencyError,
    UserAuthAdapterError,
    UserAuthAdapterInternalError,
)
from resources.adapters.user_auth.config import (
    RESOURCE_COMPONENT_ID,
    UserAuthAdapterSettings,
    resolve_user_auth_adapter_settings,
)
from resources.adapters.user_auth.http_adapter import HttpUserAuthAdapter

__all__ = [
    "AccountInfo",
    "HttpUserAuthAdapter",
    "RESOURCE_COMPONENT_ID",
    "UserAuthAdapter",
    "UserAuthAdapterDependencyError",
    "UserAuthAdapterError",
    "UserAuthAdapterInternalError",
    "UserAuthAdapterSettings",
    "resolve_user_auth_adapter_settings",
]

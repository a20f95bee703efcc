"""Pydantic settings for the user auth adapter resource."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.audit_shared.config import AuditSettings, resolve_component_settings

RESOURCE_COMPONENT_ID = "adapter_user_auth"


class UserAuthAdapterSettings(BaseModel):
    """Runtime settings for calls to the user auth/directory service."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: str = "http://user-account:8080"
    timeout_seconds: float = Field(default=5.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, value: str) -> str:
        """Require an absolute http(s) base URL without trailing slash."""
        normalized = value.strip().rstrip("/")
        if not normalized.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return normalized


def resolve_user_auth_adapter_settings(
    settings: AuditSettings,
) -> UserAuthAdapterSettings:
    """Resolve adapter settings from ``components.adapter.user_auth``."""
    return resolve_component_settings(
        settings=settings,
        component_id=RESOURCE_COMPONENT_ID,
        model=UserAuthAdapterSettings,
    )

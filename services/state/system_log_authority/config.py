"""Pydantic settings for System Log Authority Service behavior."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.audit_shared.config import AuditSettings, resolve_component_settings
from resources.substrates.postgres import validate_schema_name

SERVICE_COMPONENT_ID = "service_system_log_authority"


class SystemLogAuthoritySettings(BaseModel):
    """System Log Authority runtime behavior settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    admin_role: str = "SuperAdmin"
    schema_name: str = "system_log_authority"
    max_user_ids: int = Field(default=1000, gt=0)

    @field_validator("admin_role")
    @classmethod
    def _validate_admin_role(cls, value: str) -> str:
        """Require a non-empty top-tier role name."""
        normalized = value.strip()
        if normalized == "":
            raise ValueError("admin_role is required")
        return normalized

    @field_validator("schema_name")
    @classmethod
    def _validate_schema_name(cls, value: str) -> str:
        return validate_schema_name(value.strip())


def resolve_system_log_authority_settings(
    settings: AuditSettings,
) -> SystemLogAuthoritySettings:
    """Resolve settings from ``components.service.system_log_authority``."""
    return resolve_component_settings(
        settings=settings,
        component_id=SERVICE_COMPONENT_ID,
        model=SystemLogAuthoritySettings,
    )

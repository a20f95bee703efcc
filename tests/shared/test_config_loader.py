"""Tests for pydantic-settings-backed shared configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import BaseModel, ValidationError

from packages.audit_shared.config import (
    AuditSettings,
    PostgresSettings,
    load_settings,
    resolve_component_settings,
)


class _ExampleSettings(BaseModel):
    limit: int = 10


def _write(path: Path, *lines: str) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_load_settings_precedence_is_init_then_env_then_yaml(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_file = _write(
        tmp_path / "audit.yaml",
        "logging:",
        "  level: WARNING",
        "  service: from-yaml",
        "postgres:",
        "  pool_size: 7",
        "  max_overflow: 3",
    )
    monkeypatch.setenv("AUDIT_LOGGING__LEVEL", "ERROR")
    monkeypatch.setenv("AUDIT_POSTGRES__POOL_SIZE", "9")

    settings = load_settings(
        config_path=config_file, logging={"level": "DEBUG"}
    )

    assert settings.logging.level == "DEBUG"
    assert settings.postgres.pool_size == 9
    assert settings.postgres.max_overflow == 3


def test_load_settings_uses_defaults_when_yaml_is_missing(tmp_path: Path) -> None:
    settings = load_settings(config_path=tmp_path / "missing.yaml")

    assert settings.logging.level == "INFO"
    assert settings.logging.service == "audit"
    assert settings.postgres.pool_size == 5


def test_resolve_component_settings_reads_grouped_namespace(tmp_path: Path) -> None:
    config_file = _write(
        tmp_path / "audit.yaml",
        "components:",
        "  adapter:",
        "    example:",
        "      limit: 25",
    )
    settings = load_settings(config_path=config_file)

    resolved = resolve_component_settings(
        settings=settings, component_id="adapter_example", model=_ExampleSettings
    )
    defaulted = resolve_component_settings(
        settings=settings, component_id="service_example", model=_ExampleSettings
    )

    assert resolved.limit == 25
    assert defaulted.limit == 10


def test_resolve_component_settings_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError, match="unsupported component id"):
        resolve_component_settings(
            settings=AuditSettings(),
            component_id="substrate_example",
            model=_ExampleSettings,
        )


def test_flat_component_keys_are_rejected() -> None:
    with pytest.raises(ValidationError, match="components.service.example"):
        AuditSettings(components={"service_example": {"limit": 1}})


def test_postgres_settings_reject_unknown_sslmode() -> None:
    with pytest.raises(ValidationError, match="postgres.sslmode must be one of"):
        PostgresSettings(sslmode="sometimes")

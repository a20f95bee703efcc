"""Settings loading entry point.

Precedence is always:
1) explicit keyword overrides
2) environment variables (``AUDIT_`` prefix, ``__`` nesting)
3) YAML config file (``~/.config/audit/audit.yaml`` unless overridden)
4) model defaults

Example: ``AUDIT_LOGGING__LEVEL=DEBUG`` sets ``logging.level``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic_settings import SettingsConfigDict

from .models import AuditSettings


def load_settings(
    *, config_path: str | Path | None = None, **overrides: Any
) -> AuditSettings:
    """Load typed settings, optionally from a non-default YAML file."""
    if config_path is None:
        return AuditSettings(**overrides)

    class _FileBoundSettings(AuditSettings):
        model_config = SettingsConfigDict(yaml_file=Path(config_path))

    return _FileBoundSettings(**overrides)

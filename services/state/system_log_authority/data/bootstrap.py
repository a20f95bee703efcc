"""Idempotent creation of the service schema and system log table."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from sqlalchemy import Engine, text

from packages.audit_shared.config import AuditSettings, load_settings
from packages.audit_shared.logging import configure_logging, get_logger
from resources.substrates.postgres import create_postgres_engine, validate_schema_name
from services.state.system_log_authority.config import (
    resolve_system_log_authority_settings,
)

from .schema import metadata

_LOGGER = get_logger(__name__)


def bootstrap_system_log_schema(
    settings: AuditSettings, *, engine: Engine | None = None
) -> str:
    """Create the owned schema and ``system_log_table`` when absent.

    Returns the schema name. Existing objects are left untouched.
    """
    schema = validate_schema_name(
        resolve_system_log_authority_settings(settings).schema_name
    )
    owned_engine = engine is None
    engine = engine or create_postgres_engine(settings.postgres)
    try:
        with engine.begin() as conn:
            conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {schema}"))
            metadata.create_all(
                conn.execution_options(schema_translate_map={None: schema}),
                checkfirst=True,
            )
    finally:
        if owned_engine:
            engine.dispose()
    _LOGGER.info("System log schema ready: schema=%s", schema)
    return schema


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create the system log schema and table if they are missing."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML settings file (defaults to ~/.config/audit/audit.yaml)",
    )
    return parser.parse_args()


def main() -> int:
    """Bootstrap storage using settings from YAML and ``AUDIT_`` env vars."""
    args = _parse_args()
    settings = load_settings(config_path=args.config)
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=settings.logging.service,
        environment=settings.logging.environment,
    )
    try:
        bootstrap_system_log_schema(settings)
    except Exception as exc:  # noqa: BLE001
        _LOGGER.error("System log schema bootstrap failed", exc_info=exc)
        print(f"Failed to bootstrap system log schema: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Tests for schema-pinned transactional sessions."""

from __future__ import annotations

import pytest

from resources.substrates.postgres.schema_session import ServiceSchemaSessionProvider


class _FakeSession:
    def __init__(self) -> None:
        self.statements: list[str] = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def execute(self, statement, params=None) -> None:
        del params
        self.statements.append(str(statement))

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rolled_back = True

    def close(self) -> None:
        self.closed = True


def test_session_sets_local_search_path_and_commits() -> None:
    session = _FakeSession()
    provider = ServiceSchemaSessionProvider(
        session_factory=lambda: session, schema="system_log_authority"
    )

    with provider.session() as db:
        assert db is session

    assert session.statements == [
        "SET LOCAL search_path TO system_log_authority, public"
    ]
    assert session.committed is True
    assert session.closed is True


def test_session_rolls_back_and_reraises_on_failure() -> None:
    session = _FakeSession()
    provider = ServiceSchemaSessionProvider(
        session_factory=lambda: session, schema="audit"
    )

    with pytest.raises(RuntimeError, match="boom"):
        with provider.session():
            raise RuntimeError("boom")

    assert session.rolled_back is True
    assert session.committed is False
    assert session.closed is True


@pytest.mark.parametrize("schema", ["", "audit; DROP TABLE x", "audit-log"])
def test_provider_rejects_unsafe_schema_names(schema: str) -> None:
    with pytest.raises(ValueError):
        ServiceSchemaSessionProvider(session_factory=lambda: None, schema=schema)

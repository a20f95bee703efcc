"""Transport-agnostic user auth/directory adapter protocol and DTOs."""

from __future__ import annotations

from collections.abc import Set
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from packages.audit_shared.envelope import EnvelopeMeta


class UserAuthAdapterError(Exception):
    """Base exception for user auth adapter failures."""


class UserAuthAdapterDependencyError(UserAuthAdapterError):
    """Upstream unreachable or answered with a failure status."""


class UserAuthAdapterInternalError(UserAuthAdapterError):
    """Upstream answered with a payload that does not match the contract."""


class AccountInfo(BaseModel):
    """Directory view of one account."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    user_id: int
    role: str


@runtime_checkable
class UserAuthAdapter(Protocol):
    """Protocol for token verification and account directory lookups."""

    def verify_token(self, *, meta: EnvelopeMeta, token: str) -> bool:
        """Return whether ``token`` is currently valid."""

    def lookup_account_by_token(
        self, *, meta: EnvelopeMeta, token: str
    ) -> AccountInfo | None:
        """Resolve the account owning ``token``, or ``None``."""

    def lookup_accounts_by_ids(
        self, *, meta: EnvelopeMeta, user_ids: Set[int]
    ) -> list[AccountInfo]:
        """Return the subset of ``user_ids`` that resolve to accounts."""

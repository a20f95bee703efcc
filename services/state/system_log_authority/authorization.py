"""Admin authorization chain for system log reads.

Each stage returns an ``Envelope`` so the caller can stop at the first
failure without relying on exceptions for control flow. Collaborator
failures are reported as dependency errors, never as access denials.
"""

from __future__ import annotations

from collections.abc import Callable, Set
from typing import Any, TypeVar

from packages.audit_shared.envelope import Envelope, EnvelopeMeta, empty, failure, success
from packages.audit_shared.errors import (
    ErrorDetail,
    authentication_error,
    codes,
    dependency_error,
    exception_to_error,
    policy_error,
    validation_error,
)
from packages.audit_shared.logging import fields, get_logger, log_context
from resources.adapters.user_auth import (
    UserAuthAdapter,
    UserAuthAdapterDependencyError,
    UserAuthAdapterInternalError,
)
from services.state.system_log_authority.domain import AuthorizationContext

_LOGGER = get_logger(__name__)
_ROLE_REJECTION_MESSAGE = "admin role verification failed"

T = TypeVar("T")


class AdminAuthorizer:
    """Identity verification, role gate and user-id reference checks."""

    def __init__(self, *, adapter: UserAuthAdapter, admin_role: str) -> None:
        self._adapter = adapter
        self._admin_role = admin_role

    def verify_identity(self, *, meta: EnvelopeMeta, token: str) -> Envelope[bool]:
        """Confirm ``token`` is currently valid."""
        if token.strip() == "":
            return self._reject(meta, authentication_error("admin token is required"))

        outcome = self._call(
            "verify_token",
            lambda: self._adapter.verify_token(meta=meta, token=token),
        )
        if isinstance(outcome, ErrorDetail):
            return failure(meta=meta, errors=[outcome])
        if not outcome:
            return self._reject(meta, authentication_error("admin token verification failed"))

        _LOGGER.info("Admin token verified")
        return success(meta=meta, payload=True)

    def authorize_role(
        self, *, meta: EnvelopeMeta, token: str
    ) -> Envelope[AuthorizationContext]:
        """Resolve the token's account and require the top administrative role.

        A missing account and a lower role share one message and category;
        only the code tells them apart.
        """
        outcome = self._call(
            "lookup_account_by_token",
            lambda: self._adapter.lookup_account_by_token(meta=meta, token=token),
        )
        if isinstance(outcome, ErrorDetail):
            return failure(meta=meta, errors=[outcome])
        if outcome is None:
            return self._reject(
                meta,
                policy_error(_ROLE_REJECTION_MESSAGE, code=codes.ACCOUNT_NOT_FOUND),
            )
        if outcome.role != self._admin_role:
            return self._reject(
                meta,
                policy_error(
                    _ROLE_REJECTION_MESSAGE,
                    code=codes.ROLE_NOT_PERMITTED,
                    metadata={"user_id": str(outcome.user_id)},
                ),
            )

        _LOGGER.info("Admin role verified: user_id=%s", outcome.user_id)
        return success(
            meta=meta,
            payload=AuthorizationContext(user_id=outcome.user_id, role=outcome.role),
        )

    def validate_user_ids(
        self, *, meta: EnvelopeMeta, user_ids: Set[int]
    ) -> Envelope[None]:
        """Require every requested id to resolve to an existing account."""
        outcome = self._call(
            "lookup_accounts_by_ids",
            lambda: self._adapter.lookup_accounts_by_ids(meta=meta, user_ids=user_ids),
        )
        if isinstance(outcome, ErrorDetail):
            return failure(meta=meta, errors=[outcome])

        missing = sorted(set(user_ids) - {account.user_id for account in outcome})
        if missing:
            listed = ", ".join(str(user_id) for user_id in missing)
            return self._reject(
                meta,
                validation_error(
                    f"invalid user_ids: {listed}",
                    code=codes.INVALID_REFERENCE,
                    metadata={"user_ids": listed},
                ),
            )

        _LOGGER.info("All %d requested user_ids resolved", len(user_ids))
        return empty(meta=meta)

    def _call(self, operation: str, call: Callable[[], T]) -> T | ErrorDetail:
        """Run one adapter call, turning collaborator failures into errors."""
        try:
            return call()
        except UserAuthAdapterDependencyError as exc:
            return self._dependency_failure(operation, exc, retryable=True)
        except UserAuthAdapterInternalError as exc:
            return self._dependency_failure(operation, exc, retryable=False)
        except Exception as exc:  # noqa: BLE001
            _LOGGER.warning(
                "%s failed unexpectedly: exception_type=%s",
                operation,
                type(exc).__name__,
                exc_info=exc,
            )
            return exception_to_error(exc)

    def _dependency_failure(
        self, operation: str, exc: Exception, *, retryable: bool
    ) -> ErrorDetail:
        _LOGGER.warning(
            "%s failed due to dependency error: exception_type=%s",
            operation,
            type(exc).__name__,
            exc_info=exc,
        )
        return dependency_error(
            f"{operation} failed",
            code=codes.DEPENDENCY_FAILURE,
            retryable=retryable,
            metadata={"exception_type": type(exc).__name__},
        )

    def _reject(self, meta: EnvelopeMeta, error: ErrorDetail) -> Envelope[Any]:
        """Log one access or reference rejection and wrap it in an envelope."""
        with log_context({fields.ERROR_CODE: error.code}):
            _LOGGER.warning("Request rejected: %s", error.message)
        return failure(meta=meta, errors=[error])

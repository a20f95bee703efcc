"""User auth/directory adapter implementation over HTTP."""

from __future__ import annotations

from collections.abc import Set
from typing import Any

from pydantic import ValidationError

from packages.audit_shared.envelope import EnvelopeMeta
from packages.audit_shared.http import (
    HttpClient,
    HttpJsonDecodeError,
    HttpRequestError,
    HttpStatusError,
)
from packages.audit_shared.logging import get_logger, public_api_instrumented
from resources.adapters.user_auth.adapter import (
    AccountInfo,
    UserAuthAdapter,
    UserAuthAdapterDependencyError,
    UserAuthAdapterInternalError,
)
from resources.adapters.user_auth.config import (
    RESOURCE_COMPONENT_ID,
    UserAuthAdapterSettings,
)

_LOGGER = get_logger(__name__)
_HEADER_TRACE_ID = "X-Trace-Id"


class HttpUserAuthAdapter(UserAuthAdapter):
    """User auth adapter backed by the user account service JSON API."""

    def __init__(
        self,
        *,
        settings: UserAuthAdapterSettings,
        client: HttpClient | None = None,
    ) -> None:
        self._settings = settings
        self._client = client or HttpClient(
            base_url=settings.base_url,
            timeout_seconds=settings.timeout_seconds,
            headers={"Content-Type": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    @public_api_instrumented(logger=_LOGGER, component_id=RESOURCE_COMPONENT_ID)
    def verify_token(self, *, meta: EnvelopeMeta, token: str) -> bool:
        """Ask the auth service whether ``token`` is currently valid."""
        body = self._post(meta=meta, path="/v1/tokens/verify", payload={"token": token})
        valid = body.get("valid")
        if not isinstance(valid, bool):
            raise UserAuthAdapterInternalError("verify response missing boolean 'valid'")
        return valid

    @public_api_instrumented(logger=_LOGGER, component_id=RESOURCE_COMPONENT_ID)
    def lookup_account_by_token(
        self, *, meta: EnvelopeMeta, token: str
    ) -> AccountInfo | None:
        """Resolve the account that owns ``token``."""
        body = self._post(meta=meta, path="/v1/accounts/by-token", payload={"token": token})
        account = body.get("account")
        if account is None:
            return None
        return _to_account(account)

    @public_api_instrumented(logger=_LOGGER, component_id=RESOURCE_COMPONENT_ID)
    def lookup_accounts_by_ids(
        self, *, meta: EnvelopeMeta, user_ids: Set[int]
    ) -> list[AccountInfo]:
        """Bulk-resolve ``user_ids``; unknown ids are simply absent."""
        body = self._post(
            meta=meta,
            path="/v1/accounts/by-ids",
            payload={"user_ids": sorted(user_ids)},
        )
        accounts = body.get("accounts")
        if not isinstance(accounts, list):
            raise UserAuthAdapterInternalError("lookup response missing list 'accounts'")
        return [_to_account(item) for item in accounts]

    def _post(
        self, *, meta: EnvelopeMeta, path: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """POST one JSON request and require a JSON object response."""
        try:
            body = self._client.post_json(
                path,
                json=payload,
                headers={_HEADER_TRACE_ID: meta.trace_id},
            )
        except (HttpRequestError, HttpStatusError) as exc:
            raise UserAuthAdapterDependencyError(str(exc)) from exc
        except HttpJsonDecodeError as exc:
            raise UserAuthAdapterInternalError(str(exc)) from exc
        if not isinstance(body, dict):
            raise UserAuthAdapterInternalError(f"{path} returned non-object JSON")
        return body


def _to_account(raw: object) -> AccountInfo:
    """Map one upstream account object to ``AccountInfo``."""
    try:
        return AccountInfo.model_validate(raw)
    except ValidationError as exc:
        raise UserAuthAdapterInternalError(f"malformed account payload: {exc}") from exc

"""Synchronous HTTP client wrapper over httpx."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from .errors import HttpJsonDecodeError, HttpRequestError, HttpStatusError


def _response_text(response: httpx.Response) -> str:
    """Return response text without raising secondary decode errors."""
    try:
        return response.text
    except Exception:  # noqa: BLE001
        return ""


class HttpClient:
    """Thin wrapper over ``httpx.Client`` that raises typed errors."""

    def __init__(
        self,
        *,
        base_url: str = "",
        timeout_seconds: float = 10.0,
        headers: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            headers=dict(headers or {}),
            transport=transport,
        )

    def close(self) -> None:
        """Release pooled connections."""
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Issue one request; map transport and status failures to typed errors."""
        try:
            response = self._client.request(method=method, url=url, **kwargs)
        except httpx.RequestError as exc:
            request_url = str(exc.request.url) if exc.request is not None else url
            raise HttpRequestError(
                message=f"HTTP request failed for {method.upper()} {request_url}",
                method=method.upper(),
                url=request_url,
                retryable=True,
                cause=exc,
            ) from exc

        if response.is_error:
            status_code = response.status_code
            raise HttpStatusError(
                message=f"HTTP {status_code} for {response.request.method} {response.request.url}",
                method=response.request.method,
                url=str(response.request.url),
                retryable=status_code >= 500 or status_code == 429,
                status_code=status_code,
                response_body=_response_text(response),
            )
        return response

    def post_json(self, url: str, *, json: Any, **kwargs: Any) -> Any:
        """POST a JSON body and decode the JSON response."""
        response = self.request("POST", url, json=json, **kwargs)
        try:
            return response.json()
        except ValueError as exc:
            raise HttpJsonDecodeError(
                message=f"Invalid JSON response for {response.request.method} {response.request.url}",
                method=response.request.method,
                url=str(response.request.url),
                status_code=response.status_code,
                response_body=_response_text(response),
                cause=exc,
            ) from exc

"""Typed errors raised by the shared HTTP client."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HttpClientError(Exception):
    """Base error for outbound HTTP call failures."""

    message: str
    method: str
    url: str
    retryable: bool = False

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class HttpRequestError(HttpClientError):
    """Transport-level failure: connect, read, timeout."""

    cause: Exception | None = None


@dataclass(frozen=True)
class HttpStatusError(HttpClientError):
    """Upstream answered with a non-success status code."""

    status_code: int = 0
    response_body: str = ""


@dataclass(frozen=True)
class HttpJsonDecodeError(HttpClientError):
    """Upstream answered successfully but the body is not JSON."""

    status_code: int = 0
    response_body: str = ""
    cause: Exception | None = None

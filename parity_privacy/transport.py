"""
Transport protocols for Parity JSON-RPC and Secret Store HTTP calls.

Defines the seams where concrete HTTP implementations plug in. The
facades depend on these protocols, not on httpx directly, so a caller can
inject a pooled client, a web3-style provider wrapper or a test fake
without changing classification logic.

Concrete implementations:
    - HttpxRpcTransport (default JSON-RPC transport, httpx.AsyncClient)
    - HttpxHttpTransport (default Secret Store session transport)
    - Fake transports (tests, canned responses)

Transport contract:
    Exceptions raised by a transport are transport failures. The facades
    re-raise them unchanged; they are never wrapped or retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import httpx

DEFAULT_TIMEOUT_S = 30.0


# =========================================================================
# Request / response records
# =========================================================================


@dataclass(frozen=True)
class RequestDescriptor:
    """What a session call sent, kept for diagnosing failed responses.

    Attributes:
        method: HTTP method ("GET" or "POST").
        url: Fully built URL, including path segments.
        body: Request body as text, or None when no body was sent.
    """

    method: str
    url: str
    body: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"method": self.method, "url": self.url, "body": self.body}


@dataclass(frozen=True)
class HttpResponse:
    """Minimal view of an HTTP response, as returned by an HttpTransport."""

    status_code: int
    reason_phrase: str
    text: str


@dataclass(frozen=True)
class SessionResponse:
    """A failed Secret Store session response plus the request behind it.

    Attributes:
        status_code: HTTP status code (anything but 200).
        status_message: HTTP reason phrase.
        body: Raw response body. The Secret Store puts its error
            description here (expired signature, threshold unreachable, ...).
        request: The request that produced this response.
    """

    status_code: int
    status_message: str
    body: str
    request: RequestDescriptor

    @classmethod
    def from_http(cls, response: HttpResponse, request: RequestDescriptor) -> SessionResponse:
        return cls(
            status_code=response.status_code,
            status_message=response.reason_phrase,
            body=response.text,
            request=request,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "status_code": self.status_code,
            "status_message": self.status_message,
            "body": self.body,
            "request": self.request.to_dict(),
        }


# =========================================================================
# Protocols
# =========================================================================


@runtime_checkable
class JsonRpcTransport(Protocol):
    """Async transport for JSON-RPC envelopes."""

    async def send(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Send a JSON-RPC envelope and return the decoded response.

        Args:
            payload: The envelope (jsonrpc, method, params, id).

        Returns:
            Decoded JSON response, either ``{"result": ...}`` or
            ``{"error": {"code": ..., "message": ...}}``.

        Raises:
            Exception: On transport-level failures (connection refused,
                timeout, TLS error, non-2xx HTTP status, ...).
        """
        ...


@runtime_checkable
class HttpTransport(Protocol):
    """Async transport for plain HTTP requests to a Secret Store node."""

    async def request(
        self,
        method: str,
        url: str,
        content: bytes | None = None,
    ) -> HttpResponse:
        """Issue one HTTP request.

        Must return the response for every status code; only transport
        failures raise.
        """
        ...


# =========================================================================
# httpx implementations
# =========================================================================


class HttpxRpcTransport:
    """Default JSON-RPC transport using httpx.AsyncClient.

    Args:
        url: The node's JSON-RPC endpoint (e.g. "http://localhost:8545").
        timeout_s: Request timeout in seconds.
        headers: Additional HTTP headers to include in requests.
    """

    def __init__(
        self,
        url: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._url = url
        self._timeout_s = timeout_s
        self._headers = headers or {}

    @property
    def url(self) -> str:
        """The JSON-RPC endpoint URL."""
        return self._url

    async def send(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST the envelope and decode the JSON response."""
        async with httpx.AsyncClient(timeout=self._timeout_s) as client:
            response = await client.post(
                self._url,
                json=payload,
                headers={"Content-Type": "application/json", **self._headers},
            )
            response.raise_for_status()
            result: dict[str, Any] = response.json()
            return result


class HttpxHttpTransport:
    """Default Secret Store session transport using httpx.AsyncClient.

    Args:
        timeout_s: Request timeout in seconds.
        headers: Additional HTTP headers to include in requests.
    """

    def __init__(
        self,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._timeout_s = timeout_s
        self._headers = headers or {}

    async def request(
        self,
        method: str,
        url: str,
        content: bytes | None = None,
    ) -> HttpResponse:
        """Send the request; status codes are left to the caller."""
        headers = dict(self._headers)
        if content is not None:
            headers.setdefault("Content-Type", "application/json")

        async with httpx.AsyncClient(timeout=self._timeout_s) as client:
            response = await client.request(method, url, content=content, headers=headers)
            return HttpResponse(
                status_code=response.status_code,
                reason_phrase=response.reason_phrase,
                text=response.text,
            )

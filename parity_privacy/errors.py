"""
Error taxonomy for Parity Secret Store / private transaction calls.

Exactly four kinds, never more:
    - TRANSPORT: the request never completed (DNS, refused connection,
      transport-level timeout). The transport's own exception is propagated
      untouched, so it is never a ``ClientError`` instance.
    - RPC: the JSON-RPC envelope carried an ``error`` object.
    - HTTP_SESSION: a Secret Store session answered with a non-200 status.
    - PROTOCOL: the remote answered 200 / ``result`` but the body did not
      match the shape declared for that endpoint.

Nothing here is retried. Callers that need policy (retry on an expired
signature, fall back to another node, ...) dispatch on ``classify_error``
rather than on exception classes.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from parity_privacy.transport import SessionResponse


class ErrorKind(StrEnum):
    """Closed set of failure categories."""

    TRANSPORT = "TRANSPORT"
    RPC = "RPC"
    HTTP_SESSION = "HTTP_SESSION"
    PROTOCOL = "PROTOCOL"


class ClientError(Exception):
    """A remote-reported or protocol-level failure.

    Attributes:
        kind: One of RPC, HTTP_SESSION, PROTOCOL.
        message: Human-readable message. For RPC errors this is the
            ``message`` field sent by the node, unchanged.
        code: JSON-RPC error code (RPC kind only).
        data: Optional ``data`` member of the JSON-RPC error (RPC kind only).
        response: Full failed session response, including the request
            that produced it (HTTP_SESSION kind only).
        details: Extra structured context for diagnostics.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        code: int | None = None,
        data: Any = None,
        response: SessionResponse | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code
        self.data = data
        self.response = response
        self.details = details or {}

    def __repr__(self) -> str:
        return f"ClientError(kind={self.kind!s}, message={self.message!r}, code={self.code!r})"

    @classmethod
    def from_rpc_error(cls, error: Any) -> ClientError:
        """Build an RPC-kind error from a JSON-RPC ``error`` member.

        Parity always sends ``{"code": int, "message": str}``; anything
        else is kept verbatim in ``details`` so nothing is lost.
        """
        if isinstance(error, dict):
            return cls(
                ErrorKind.RPC,
                str(error.get("message", "")),
                code=error.get("code"),
                data=error.get("data"),
                details={"error": error},
            )
        return cls(ErrorKind.RPC, str(error), details={"error": error})

    @classmethod
    def from_session_response(cls, response: SessionResponse) -> ClientError:
        return cls(
            ErrorKind.HTTP_SESSION,
            "Request failed.",
            response=response,
            details={
                "url": response.request.url,
                "status_code": response.status_code,
            },
        )

    @classmethod
    def protocol(cls, message: str, **details: Any) -> ClientError:
        return cls(ErrorKind.PROTOCOL, message, details=details)


def classify_error(exc: BaseException) -> ErrorKind:
    """Map any exception raised by a facade call to its ErrorKind.

    Anything that is not a ``ClientError`` came out of the transport.
    """
    if isinstance(exc, ClientError):
        return exc.kind
    return ErrorKind.TRANSPORT

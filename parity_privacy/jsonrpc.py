"""
JSON-RPC call/classify logic shared by the Secret Store and private
transaction facades.

One envelope out, one response in. Classification:
    - transport raised       -> re-raised unchanged
    - response has "error"   -> ClientError(kind=RPC), code/message kept
    - response has "result"  -> result returned verbatim
    - anything else          -> ClientError(kind=PROTOCOL)

An ``"error": null`` member counts as no error: ``{"error": null,
"result": x}`` resolves to ``x``. A ``"result": null`` is a valid result.

Diagnostics go through ``emit``; a failing sink never replaces the
outcome above.

No retry loops. No interpretation of ``result`` beyond its existence.
"""

from __future__ import annotations

from typing import Any

from parity_privacy.diagnostics import DiagnosticSink, emit, resolve_sink
from parity_privacy.errors import ClientError
from parity_privacy.transport import JsonRpcTransport

JSONRPC_VERSION = "2.0"

# Calls are never multiplexed on one envelope stream, so the id is fixed.
REQUEST_ID = 1


def build_envelope(method: str, params: list[Any]) -> dict[str, Any]:
    """Build the JSON-RPC request envelope for ``method``."""
    return {
        "jsonrpc": JSONRPC_VERSION,
        "method": method,
        "params": params,
        "id": REQUEST_ID,
    }


async def call(
    transport: JsonRpcTransport,
    method: str,
    params: list[Any],
    verbose: bool = True,
    *,
    sink: DiagnosticSink | None = None,
) -> Any:
    """Send one JSON-RPC request and unwrap its result.

    Args:
        transport: Connection to the Parity node.
        method: RPC method name (e.g. "secretstore_encrypt").
        params: Positional params, already normalized.
        verbose: Whether to emit diagnostics on failure.
        sink: Diagnostic sink; defaults to loguru when verbose.

    Returns:
        The ``result`` member of the response, verbatim.

    Raises:
        ClientError: RPC kind if the node reported an error, PROTOCOL kind
            if the response is neither a result nor an error.
        Exception: Whatever the transport raised, unchanged.
    """
    diagnostics = resolve_sink(verbose, sink)
    payload = build_envelope(method, params)

    try:
        response = await transport.send(payload)
    except Exception as e:
        emit(diagnostics.error, e)
        raise

    return _unwrap_response(method, response, diagnostics)


def _unwrap_response(method: str, response: Any, diagnostics: DiagnosticSink) -> Any:
    if not isinstance(response, dict):
        error = ClientError.protocol(
            "JSON-RPC response was not an object",
            method=method,
            type=type(response).__name__,
        )
        emit(diagnostics.error, error)
        raise error

    if response.get("error") is not None:
        emit(diagnostics.error, response["error"])
        raise ClientError.from_rpc_error(response["error"])

    if "result" not in response:
        error = ClientError.protocol(
            "JSON-RPC response has neither result nor error",
            method=method,
            keys=sorted(response),
        )
        emit(diagnostics.error, error)
        raise error

    return response["result"]

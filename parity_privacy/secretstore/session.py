"""
Secret Store HTTP sessions.

Each function talks to one Secret Store node over its HTTP API. The node
coordinates the multi-party session with the rest of the cluster and
answers once the session completes.

Outcome of a single call:
    pending -> resolved (endpoint's declared shape)
            -> raised transport exception (unchanged)
            -> raised ClientError(HTTP_SESSION), non-200 status
            -> raised ClientError(PROTOCOL), 200 with a malformed body

A non-200 status usually needs caller intervention (expired signature,
threshold unreachable, node down). Nothing is retried here.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import jsonschema

from parity_privacy.diagnostics import DiagnosticSink, emit, resolve_sink
from parity_privacy.encoding import is_quoted_string, json_body, unwrap_quoted_string
from parity_privacy.errors import ClientError
from parity_privacy.models import (
    SHADOW_RETRIEVAL_SCHEMA,
    DocumentKeyShadow,
    DocumentKeyStoreRequest,
    NodesSetChangeRequest,
    ServerKeyRequest,
    SessionAuth,
    SigningRequest,
)
from parity_privacy.transport import (
    HttpTransport,
    HttpxHttpTransport,
    RequestDescriptor,
    SessionResponse,
)

GET = "GET"
POST = "POST"


# =====================================================================
# Body parsers (pure, no I/O)
# =====================================================================


def _quoted_string(body: str, url: str) -> str:
    if not is_quoted_string(body):
        raise ClientError.protocol(
            "Expected a quoted string body",
            url=url,
            body_preview=body[:200],
        )
    return unwrap_quoted_string(body)


def _raw_body(body: str, url: str) -> str:
    return body


def _opaque_string(body: str, url: str) -> str:
    # Response shape of servers_set_change is undocumented; keep it opaque.
    return unwrap_quoted_string(body)


def _document_key_shadow(body: str, url: str) -> DocumentKeyShadow:
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise ClientError.protocol(
            "Response was not valid JSON",
            url=url,
            body_preview=body[:200],
        ) from e

    try:
        jsonschema.validate(instance=data, schema=SHADOW_RETRIEVAL_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ClientError.protocol(
            f"Unexpected shadow retrieval response: {e.message}",
            url=url,
            body_preview=body[:200],
        ) from e

    return DocumentKeyShadow.from_dict(data)


# =====================================================================
# Request execution
# =====================================================================


async def _perform(
    url: str,
    method: str,
    path: str,
    parse: Callable[[str, str], Any],
    *,
    body: Any = None,
    verbose: bool,
    transport: HttpTransport | None,
    sink: DiagnosticSink | None,
) -> Any:
    diagnostics = resolve_sink(verbose, sink)
    http = transport or HttpxHttpTransport()

    content = json_body(body) if body is not None else None
    request = RequestDescriptor(
        method=method,
        url=url.rstrip("/") + path,
        body=content.decode("utf-8") if content is not None else None,
    )

    try:
        response = await http.request(request.method, request.url, content)
    except Exception as e:
        emit(diagnostics.error, e)
        raise

    if response.status_code != 200:
        failed = SessionResponse.from_http(response, request)
        emit(diagnostics.failed_response, failed)
        raise ClientError.from_session_response(failed)

    try:
        return parse(response.text, request.url)
    except ClientError as e:
        emit(diagnostics.error, e)
        raise


# =====================================================================
# Sessions
# =====================================================================


async def generate_server_key(
    url: str,
    server_key_id: str,
    signed_server_key_id: str,
    threshold: int,
    verbose: bool = True,
    *,
    transport: HttpTransport | None = None,
    sink: DiagnosticSink | None = None,
) -> str:
    """Run a server key generation session.

    Args:
        url: Where the Secret Store node listens for HTTP requests.
        server_key_id: The server key ID.
        signed_server_key_id: The server key ID signed by the requester.
        threshold: Key threshold; threshold + 1 nodes are needed to use
            the key afterwards.
        verbose: Whether to emit diagnostics on failure.
        transport: HTTP transport; defaults to httpx.
        sink: Diagnostic sink; defaults to loguru when verbose.

    Returns:
        The hex-encoded public portion of the server key.
    """
    request = ServerKeyRequest(SessionAuth(server_key_id, signed_server_key_id), threshold)
    result: str = await _perform(
        url,
        POST,
        "/shadow" + request.path(),
        _quoted_string,
        verbose=verbose,
        transport=transport,
        sink=sink,
    )
    return result


async def generate_server_and_document_key(
    url: str,
    server_key_id: str,
    signed_server_key_id: str,
    threshold: int,
    verbose: bool = True,
    *,
    transport: HttpTransport | None = None,
    sink: DiagnosticSink | None = None,
) -> str:
    """Generate a server key and a document key bound to it in one session.

    Returns:
        The hex-encoded document key, encrypted with the requester's
        public key (ECIES).
    """
    request = ServerKeyRequest(SessionAuth(server_key_id, signed_server_key_id), threshold)
    result: str = await _perform(
        url,
        POST,
        request.path(),
        _quoted_string,
        verbose=verbose,
        transport=transport,
        sink=sink,
    )
    return result


async def store_document_key(
    url: str,
    server_key_id: str,
    signed_server_key_id: str,
    common_point: str,
    encrypted_point: str,
    verbose: bool = True,
    *,
    transport: HttpTransport | None = None,
    sink: DiagnosticSink | None = None,
) -> str:
    """Store an externally generated document key under a server key.

    ``server_key_id`` and ``signed_server_key_id`` must be the pair used
    in the server key generation session, signed by the same author.

    Returns:
        The raw response body, empty when everything went fine.
    """
    request = DocumentKeyStoreRequest(
        SessionAuth(server_key_id, signed_server_key_id),
        common_point,
        encrypted_point,
    )
    result: str = await _perform(
        url,
        POST,
        "/shadow" + request.path(),
        _raw_body,
        verbose=verbose,
        transport=transport,
        sink=sink,
    )
    return result


async def shadow_retrieve_document_key(
    url: str,
    server_key_id: str,
    signed_server_key_id: str,
    verbose: bool = True,
    *,
    transport: HttpTransport | None = None,
    sink: DiagnosticSink | None = None,
) -> DocumentKeyShadow:
    """Retrieve a document key without reconstructing it on any node.

    Returns:
        The decrypted_secret, common_point and decrypt_shadows parts, ready
        for ``secretstore.shadow_decrypt``.
    """
    auth = SessionAuth(server_key_id, signed_server_key_id)
    result: DocumentKeyShadow = await _perform(
        url,
        GET,
        "/shadow" + auth.path(),
        _document_key_shadow,
        verbose=verbose,
        transport=transport,
        sink=sink,
    )
    return result


async def retrieve_document_key(
    url: str,
    server_key_id: str,
    signed_server_key_id: str,
    verbose: bool = True,
    *,
    transport: HttpTransport | None = None,
    sink: DiagnosticSink | None = None,
) -> str:
    """Retrieve a document key.

    Returns:
        The hex-encoded document key, encrypted with the requester's
        public key (ECIES).
    """
    auth = SessionAuth(server_key_id, signed_server_key_id)
    result: str = await _perform(
        url,
        GET,
        auth.path(),
        _quoted_string,
        verbose=verbose,
        transport=transport,
        sink=sink,
    )
    return result


async def sign_schnorr(
    url: str,
    server_key_id: str,
    signed_server_key_id: str,
    message_hash: str,
    verbose: bool = True,
    *,
    transport: HttpTransport | None = None,
    sink: DiagnosticSink | None = None,
) -> str:
    """Run a Schnorr signing session over ``message_hash``.

    Returns:
        The hex-encoded Schnorr signature (serialized as c || s), encrypted
        with the requester's public key.
    """
    request = SigningRequest(SessionAuth(server_key_id, signed_server_key_id), message_hash)
    result: str = await _perform(
        url,
        GET,
        "/schnorr" + request.path(),
        _quoted_string,
        verbose=verbose,
        transport=transport,
        sink=sink,
    )
    return result


async def sign_ecdsa(
    url: str,
    server_key_id: str,
    signed_server_key_id: str,
    message_hash: str,
    verbose: bool = True,
    *,
    transport: HttpTransport | None = None,
    sink: DiagnosticSink | None = None,
) -> str:
    """Run an ECDSA signing session over ``message_hash``.

    Returns:
        The hex-encoded ECDSA signature (serialized as r || s || v),
        encrypted with the requester's public key.
    """
    request = SigningRequest(SessionAuth(server_key_id, signed_server_key_id), message_hash)
    result: str = await _perform(
        url,
        GET,
        "/ecdsa" + request.path(),
        _quoted_string,
        verbose=verbose,
        transport=transport,
        sink=sink,
    )
    return result


async def nodes_set_change(
    url: str,
    node_ids_new_set: list[str],
    signature_old_set: str,
    signature_new_set: str,
    verbose: bool = True,
    *,
    transport: HttpTransport | None = None,
    sink: DiagnosticSink | None = None,
) -> str:
    """Start an administrative servers-set change session.

    Args:
        url: Where the Secret Store node listens for HTTP requests.
        node_ids_new_set: Node IDs of the new set, sent as a JSON list.
        signature_old_set: Signature of all online node IDs,
            keccak(ordered_list(staying + added + removing)).
        signature_new_set: Signature of the node IDs staying after the
            session, keccak(ordered_list(staying + added)).

    Returns:
        The response body, unwrapped if quoted. Its shape is not
        documented, so no structure is assumed.
    """
    request = NodesSetChangeRequest(node_ids_new_set, signature_old_set, signature_new_set)
    result: str = await _perform(
        url,
        POST,
        request.path(),
        _opaque_string,
        body=request.body(),
        verbose=verbose,
        transport=transport,
        sink=sink,
    )
    return result

"""
Secret Store calls executed by the local Parity node.

These go through the node's ``secretstore_*`` JSON-RPC namespace: the
node unlocks ``account`` with ``password`` and performs the signing or
ECIES work itself. Nothing cryptographic happens in this process.
"""

from __future__ import annotations

from typing import Any

from parity_privacy import jsonrpc
from parity_privacy.diagnostics import DiagnosticSink
from parity_privacy.models import (
    DecryptRequest,
    EncryptRequest,
    GenerateDocumentKeyRequest,
    RawHashRequest,
    RpcCredentials,
    ServersSetHashRequest,
    ShadowDecryptRequest,
)
from parity_privacy.transport import JsonRpcTransport


async def sign_raw_hash(
    transport: JsonRpcTransport,
    account: str,
    password: str,
    hash: str,
    verbose: bool = True,
    *,
    sink: DiagnosticSink | None = None,
) -> str:
    """Compute the recoverable ECDSA signature used across the Secret Store.

    Used for server key IDs and nodes set hashes.

    Args:
        transport: Connection to the Parity node.
        account: Account of the Secret Store user.
        password: Password of the Secret Store user.
        hash: 256-bit hash to sign, with or without ``0x``.
        verbose: Whether to emit diagnostics on failure.

    Returns:
        The signed hash.
    """
    request = RawHashRequest(RpcCredentials(account, password), hash)
    result: str = await jsonrpc.call(
        transport, "secretstore_signRawHash", request.params(), verbose, sink=sink
    )
    return result


async def generate_document_key(
    transport: JsonRpcTransport,
    account: str,
    password: str,
    server_key: str,
    verbose: bool = True,
    *,
    sink: DiagnosticSink | None = None,
) -> Any:
    """Generate a document key bound to ``server_key`` on the local node.

    The result carries ``common_point`` and ``encrypted_point`` (for
    ``store_document_key``) plus the key encrypted for the requester.
    """
    request = GenerateDocumentKeyRequest(RpcCredentials(account, password), server_key)
    return await jsonrpc.call(
        transport,
        "secretstore_generateDocumentKey",
        request.params(),
        verbose,
        sink=sink,
    )


async def encrypt(
    transport: JsonRpcTransport,
    account: str,
    password: str,
    encrypted_key: str,
    hex_document: str,
    verbose: bool = True,
    *,
    sink: DiagnosticSink | None = None,
) -> str:
    """Encrypt ``hex_document`` with a document key encrypted for ``account``."""
    request = EncryptRequest(RpcCredentials(account, password), encrypted_key, hex_document)
    result: str = await jsonrpc.call(
        transport,
        "secretstore_encrypt",
        request.params(),
        verbose,
        sink=sink,
    )
    return result


async def decrypt(
    transport: JsonRpcTransport,
    account: str,
    password: str,
    encrypted_key: str,
    encrypted_document: str,
    verbose: bool = True,
    *,
    sink: DiagnosticSink | None = None,
) -> str:
    """Decrypt a document produced by ``encrypt``; returns hex document data."""
    request = DecryptRequest(
        RpcCredentials(account, password), encrypted_key, encrypted_document
    )
    result: str = await jsonrpc.call(
        transport,
        "secretstore_decrypt",
        request.params(),
        verbose,
        sink=sink,
    )
    return result


async def shadow_decrypt(
    transport: JsonRpcTransport,
    account: str,
    password: str,
    decrypted_secret: str,
    common_point: str,
    decrypt_shadows: list[str],
    encrypted_document: str,
    verbose: bool = True,
    *,
    sink: DiagnosticSink | None = None,
) -> str:
    """Decrypt a document from the parts of a shadow retrieval session.

    Args:
        decrypted_secret: ``decrypted_secret`` of the shadow retrieval result.
        common_point: ``common_point`` of the shadow retrieval result.
        decrypt_shadows: ``decrypt_shadows`` of the shadow retrieval result.
        encrypted_document: Output of ``encrypt``.

    Returns:
        Decrypted hex document data.
    """
    request = ShadowDecryptRequest(
        credentials=RpcCredentials(account, password),
        decrypted_secret=decrypted_secret,
        common_point=common_point,
        decrypt_shadows=decrypt_shadows,
        encrypted_document=encrypted_document,
    )
    result: str = await jsonrpc.call(
        transport, "secretstore_shadowDecrypt", request.params(), verbose, sink=sink
    )
    return result


async def servers_set_hash(
    transport: JsonRpcTransport,
    node_ids: list[str],
    verbose: bool = True,
    *,
    sink: DiagnosticSink | None = None,
) -> str:
    """Hash of an ordered set of node IDs, to be signed for a servers-set change."""
    request = ServersSetHashRequest(node_ids)
    result: str = await jsonrpc.call(
        transport, "secretstore_serversSetHash", request.params(), verbose, sink=sink
    )
    return result

"""
Parity Secret Store.

    Node-executed calls (JSON-RPC, ``secretstore_*``):
        - ``sign_raw_hash``, ``generate_document_key``, ``encrypt``,
          ``decrypt``, ``shadow_decrypt``, ``servers_set_hash``.

    Cluster sessions (HTTP, ``secretstore.session``):
        - server/document key generation, storage and retrieval,
          Schnorr/ECDSA signing, servers-set change.
"""

from parity_privacy.secretstore import session
from parity_privacy.secretstore.rpc import (
    decrypt,
    encrypt,
    generate_document_key,
    servers_set_hash,
    shadow_decrypt,
    sign_raw_hash,
)

__all__ = [
    "decrypt",
    "encrypt",
    "generate_document_key",
    "servers_set_hash",
    "session",
    "shadow_decrypt",
    "sign_raw_hash",
]

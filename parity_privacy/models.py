"""
Typed request structs and response schemas.

Every facade operation turns its arguments into one of these frozen
dataclasses before any I/O. ``__post_init__`` validates at the boundary
and raises ``ValueError``; the struct then renders its own URL path
(session calls) or JSON-RPC params (RPC calls).

Only shapes are checked here. Whether a key ID is a valid 256-bit hash,
or a transaction is well-formed, is for the remote node to decide.

Response schemas:
    - Quoted-string session endpoints: body must be one ``"..."`` string.
    - Shadow retrieval: JSON object matching SHADOW_RETRIEVAL_SCHEMA.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from parity_privacy.encoding import ensure_hex_prefix, strip_hex_prefix

# Block tag Parity expects for private state reads and deployments.
LATEST_BLOCK = "latest"
DEFAULT_GAS_PRICE = "0x0"

SHADOW_RETRIEVAL_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["decrypted_secret", "common_point", "decrypt_shadows"],
    "properties": {
        "decrypted_secret": {"type": "string"},
        "common_point": {"type": "string"},
        "decrypt_shadows": {"type": "array", "items": {"type": "string"}},
    },
}


# =========================================================================
# Validation helpers
# =========================================================================


def _require_text(name: str, value: Any) -> None:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string, got: {value!r}")


def _require_text_list(name: str, value: Any) -> None:
    if not isinstance(value, (list, tuple)) or not value:
        raise ValueError(f"{name} must be a non-empty list, got: {value!r}")
    for item in value:
        _require_text(f"{name} item", item)


def _segments(*parts: Any) -> str:
    return "/" + "/".join(strip_hex_prefix(p) for p in parts)


# =========================================================================
# Secret Store session requests
# =========================================================================


@dataclass(frozen=True)
class SessionAuth:
    """A server key ID and the same ID signed by the requester.

    Every session call is authorized by this pair.
    """

    server_key_id: str
    signed_server_key_id: str

    def __post_init__(self) -> None:
        _require_text("server_key_id", self.server_key_id)
        _require_text("signed_server_key_id", self.signed_server_key_id)

    def path(self) -> str:
        return _segments(self.server_key_id, self.signed_server_key_id)


@dataclass(frozen=True)
class ServerKeyRequest:
    """Server key (or server + document key) generation.

    Attributes:
        auth: Key ID and its signature.
        threshold: Key threshold. threshold + 1 nodes must cooperate to
            use the key later. Appended to the path unmodified.
    """

    auth: SessionAuth
    threshold: int

    def __post_init__(self) -> None:
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, int):
            raise ValueError(f"threshold must be an int, got: {self.threshold!r}")
        if self.threshold < 0:
            raise ValueError(f"threshold must be >= 0, got: {self.threshold}")

    def path(self) -> str:
        return f"{self.auth.path()}/{self.threshold}"


@dataclass(frozen=True)
class DocumentKeyStoreRequest:
    """Binds an externally generated document key to a server key."""

    auth: SessionAuth
    common_point: str
    encrypted_point: str

    def __post_init__(self) -> None:
        _require_text("common_point", self.common_point)
        _require_text("encrypted_point", self.encrypted_point)

    def path(self) -> str:
        return self.auth.path() + _segments(self.common_point, self.encrypted_point)


@dataclass(frozen=True)
class SigningRequest:
    """Schnorr or ECDSA signing session over a 256-bit message hash."""

    auth: SessionAuth
    message_hash: str

    def __post_init__(self) -> None:
        _require_text("message_hash", self.message_hash)

    def path(self) -> str:
        return self.auth.path() + _segments(self.message_hash)


@dataclass(frozen=True)
class NodesSetChangeRequest:
    """Administrative servers-set change.

    Attributes:
        node_ids_new_set: Node IDs that should form the cluster once the
            session ends. Sent as the JSON body, order preserved.
        signature_old_set: Signature of keccak(ordered_list(staying +
            added + removing)).
        signature_new_set: Signature of keccak(ordered_list(staying +
            added)).
    """

    node_ids_new_set: list[str]
    signature_old_set: str
    signature_new_set: str

    def __post_init__(self) -> None:
        _require_text_list("node_ids_new_set", self.node_ids_new_set)
        _require_text("signature_old_set", self.signature_old_set)
        _require_text("signature_new_set", self.signature_new_set)

    def path(self) -> str:
        return "/admin/servers_set_change" + _segments(
            self.signature_old_set, self.signature_new_set
        )

    def body(self) -> list[str]:
        return list(self.node_ids_new_set)


# =========================================================================
# JSON-RPC requests
# =========================================================================


@dataclass(frozen=True)
class RpcCredentials:
    """Account unlocked on the local node for one ``secretstore_*`` call."""

    account: str
    password: str

    def __post_init__(self) -> None:
        _require_text("account", self.account)
        if not isinstance(self.password, str):
            raise ValueError("password must be a string")

    def params(self, *rest: Any) -> list[Any]:
        return [self.account, self.password, *rest]


@dataclass(frozen=True)
class RawHashRequest:
    credentials: RpcCredentials
    hash: str

    def __post_init__(self) -> None:
        _require_text("hash", self.hash)

    def params(self) -> list[Any]:
        return self.credentials.params(ensure_hex_prefix(self.hash))


@dataclass(frozen=True)
class GenerateDocumentKeyRequest:
    """Inputs of ``secretstore_generateDocumentKey``.

    Attributes:
        server_key: Server key returned by a server key generation session.
    """

    credentials: RpcCredentials
    server_key: str

    def __post_init__(self) -> None:
        _require_text("server_key", self.server_key)

    def params(self) -> list[Any]:
        return self.credentials.params(self.server_key)


@dataclass(frozen=True)
class EncryptRequest:
    """Inputs of ``secretstore_encrypt``.

    Attributes:
        encrypted_key: Document key encrypted with the requester's public key.
        hex_document: Hex-encoded document data.
    """

    credentials: RpcCredentials
    encrypted_key: str
    hex_document: str

    def __post_init__(self) -> None:
        _require_text("encrypted_key", self.encrypted_key)
        _require_text("hex_document", self.hex_document)

    def params(self) -> list[Any]:
        return self.credentials.params(self.encrypted_key, self.hex_document)


@dataclass(frozen=True)
class DecryptRequest:
    """Inputs of ``secretstore_decrypt``; ``encrypted_document`` comes from encrypt."""

    credentials: RpcCredentials
    encrypted_key: str
    encrypted_document: str

    def __post_init__(self) -> None:
        _require_text("encrypted_key", self.encrypted_key)
        _require_text("encrypted_document", self.encrypted_document)

    def params(self) -> list[Any]:
        return self.credentials.params(self.encrypted_key, self.encrypted_document)


@dataclass(frozen=True)
class ServersSetHashRequest:
    """Ordered node IDs whose hash is signed for a servers-set change."""

    node_ids: list[str]

    def __post_init__(self) -> None:
        _require_text_list("node_ids", self.node_ids)

    def params(self) -> list[Any]:
        return [list(self.node_ids)]


@dataclass(frozen=True)
class ShadowDecryptRequest:
    """Inputs of ``secretstore_shadowDecrypt``.

    decrypted_secret, common_point and decrypt_shadows come straight from
    a shadow retrieval session (see DocumentKeyShadow).
    """

    credentials: RpcCredentials
    decrypted_secret: str
    common_point: str
    decrypt_shadows: list[str]
    encrypted_document: str

    def __post_init__(self) -> None:
        _require_text("decrypted_secret", self.decrypted_secret)
        _require_text("common_point", self.common_point)
        _require_text_list("decrypt_shadows", self.decrypt_shadows)
        _require_text("encrypted_document", self.encrypted_document)

    def params(self) -> list[Any]:
        return self.credentials.params(
            self.decrypted_secret,
            self.common_point,
            list(self.decrypt_shadows),
            self.encrypted_document,
        )


@dataclass(frozen=True)
class DeploymentRequest:
    """Inputs of ``private_composeDeploymentTransaction``.

    Attributes:
        raw_data: Signed raw deployment transaction (hex).
        validators: Addresses allowed to validate the private contract.
        gas_price: Gas price of the public wrapping transaction.
    """

    raw_data: str
    validators: list[str]
    gas_price: str = DEFAULT_GAS_PRICE

    def __post_init__(self) -> None:
        _require_text("raw_data", self.raw_data)
        if not isinstance(self.validators, (list, tuple)):
            raise ValueError(f"validators must be a list, got: {self.validators!r}")
        _require_text("gas_price", self.gas_price)

    def params(self) -> list[Any]:
        return [LATEST_BLOCK, self.raw_data, list(self.validators), self.gas_price]


# =========================================================================
# Responses
# =========================================================================


@dataclass(frozen=True)
class DocumentKeyShadow:
    """Result of a document key shadow retrieval session.

    The document key is never reconstructed on a single node; these three
    parts feed ``secretstore_shadowDecrypt``.
    """

    decrypted_secret: str
    common_point: str
    decrypt_shadows: tuple[str, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocumentKeyShadow:
        return cls(
            decrypted_secret=data["decrypted_secret"],
            common_point=data["common_point"],
            decrypt_shadows=tuple(data["decrypt_shadows"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "decrypted_secret": self.decrypted_secret,
            "common_point": self.common_point,
            "decrypt_shadows": list(self.decrypt_shadows),
        }

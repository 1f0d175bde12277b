"""
Client configuration.

Configuration is read from environment variables, validated against
CONFIG_SCHEMA, and turned into the default collaborators (transports and
diagnostic sink). Facade functions never read configuration themselves;
callers pass the collaborators built here.

Environment variables:
    PARITY_RPC_URL          JSON-RPC endpoint of the local Parity node
    PARITY_SECRETSTORE_URL  HTTP endpoint of a Secret Store node
    PARITY_TIMEOUT_S        request timeout in seconds (default 30)
    PARITY_VERBOSE          "0"/"false"/"no"/"off" silences diagnostics
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping

import jsonschema

from parity_privacy.diagnostics import DiagnosticSink, resolve_sink
from parity_privacy.transport import DEFAULT_TIMEOUT_S, HttpxHttpTransport, HttpxRpcTransport

ENV_RPC_URL = "PARITY_RPC_URL"
ENV_SECRETSTORE_URL = "PARITY_SECRETSTORE_URL"
ENV_TIMEOUT_S = "PARITY_TIMEOUT_S"
ENV_VERBOSE = "PARITY_VERBOSE"

_FALSE_VALUES = {"0", "false", "no", "off"}

CONFIG_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["rpc_url", "secretstore_url"],
    "properties": {
        "rpc_url": {
            "type": "string",
            "minLength": 1,
            "description": "JSON-RPC endpoint of the Parity node",
        },
        "secretstore_url": {
            "type": "string",
            "minLength": 1,
            "description": "HTTP endpoint of a Secret Store node",
        },
        "timeout_s": {
            "type": "number",
            "exclusiveMinimum": 0,
            "default": DEFAULT_TIMEOUT_S,
            "description": "Request timeout in seconds",
        },
        "headers": {
            "type": "object",
            "additionalProperties": {"type": "string"},
            "description": "Additional HTTP headers to include in requests",
        },
        "verbose": {
            "type": "boolean",
            "default": True,
            "description": "Emit diagnostics for failed calls",
        },
    },
}


@dataclass(frozen=True)
class ClientConfig:
    """Endpoints and transport settings shared by all facade calls."""

    rpc_url: str
    secretstore_url: str
    timeout_s: float = DEFAULT_TIMEOUT_S
    headers: dict[str, str] = field(default_factory=dict)
    verbose: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientConfig:
        """Validate ``data`` against CONFIG_SCHEMA and build a config.

        Raises:
            jsonschema.ValidationError: If data doesn't match the schema.
        """
        jsonschema.validate(instance=dict(data), schema=CONFIG_SCHEMA)
        return cls(
            rpc_url=data["rpc_url"],
            secretstore_url=data["secretstore_url"],
            timeout_s=float(data.get("timeout_s", DEFAULT_TIMEOUT_S)),
            headers=dict(data.get("headers", {})),
            verbose=bool(data.get("verbose", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "rpc_url": self.rpc_url,
            "secretstore_url": self.secretstore_url,
            "timeout_s": self.timeout_s,
            "headers": dict(self.headers),
            "verbose": self.verbose,
        }

    def rpc_transport(self) -> HttpxRpcTransport:
        return HttpxRpcTransport(self.rpc_url, timeout_s=self.timeout_s, headers=self.headers)

    def session_transport(self) -> HttpxHttpTransport:
        return HttpxHttpTransport(timeout_s=self.timeout_s, headers=self.headers)

    def sink(self, sink: DiagnosticSink | None = None) -> DiagnosticSink:
        return resolve_sink(self.verbose, sink)


def load_config(env: Mapping[str, str] | None = None) -> ClientConfig:
    """Build a ClientConfig from environment variables.

    Args:
        env: Mapping to read from. Defaults to ``os.environ``.

    Raises:
        jsonschema.ValidationError: If a required URL is missing or the
            timeout is not positive.
        ValueError: If PARITY_TIMEOUT_S is not a number.
    """
    source = os.environ if env is None else env

    data: dict[str, Any] = {}
    if ENV_RPC_URL in source:
        data["rpc_url"] = source[ENV_RPC_URL]
    if ENV_SECRETSTORE_URL in source:
        data["secretstore_url"] = source[ENV_SECRETSTORE_URL]
    if ENV_TIMEOUT_S in source:
        data["timeout_s"] = float(source[ENV_TIMEOUT_S])
    if ENV_VERBOSE in source:
        data["verbose"] = source[ENV_VERBOSE].strip().lower() not in _FALSE_VALUES

    return ClientConfig.from_dict(data)

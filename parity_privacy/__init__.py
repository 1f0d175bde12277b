"""
parity-privacy: async client for Parity's Secret Store and private
transaction APIs.

Public API:

    Facades (one network call each):
        - ``secretstore``: node-executed ``secretstore_*`` RPC calls.
        - ``secretstore.session``: Secret Store cluster HTTP sessions.
        - ``private``: private transaction RPC calls.

    Transports (for dependency injection):
        - ``JsonRpcTransport`` / ``HttpxRpcTransport``
        - ``HttpTransport`` / ``HttpxHttpTransport``

    Errors:
        - ``ClientError``, ``ErrorKind``, ``classify_error()``.

    Diagnostics:
        - ``DiagnosticSink``, ``LoguruSink``, ``NullSink``.

    Configuration:
        - ``ClientConfig``, ``load_config()``.

    Helpers:
        - ``strip_hex_prefix``, ``ensure_hex_prefix``, ``unwrap_quoted_string``.
"""

from parity_privacy import private, secretstore
from parity_privacy.config import ClientConfig, load_config
from parity_privacy.diagnostics import DiagnosticSink, LoguruSink, NullSink
from parity_privacy.encoding import ensure_hex_prefix, strip_hex_prefix, unwrap_quoted_string
from parity_privacy.errors import ClientError, ErrorKind, classify_error
from parity_privacy.models import DocumentKeyShadow
from parity_privacy.transport import (
    HttpResponse,
    HttpTransport,
    HttpxHttpTransport,
    HttpxRpcTransport,
    JsonRpcTransport,
    RequestDescriptor,
    SessionResponse,
)

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "ClientError",
    "DiagnosticSink",
    "DocumentKeyShadow",
    "ErrorKind",
    "HttpResponse",
    "HttpTransport",
    "HttpxHttpTransport",
    "HttpxRpcTransport",
    "JsonRpcTransport",
    "LoguruSink",
    "NullSink",
    "RequestDescriptor",
    "SessionResponse",
    "classify_error",
    "ensure_hex_prefix",
    "load_config",
    "private",
    "secretstore",
    "strip_hex_prefix",
    "unwrap_quoted_string",
]

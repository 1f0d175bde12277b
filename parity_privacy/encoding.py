"""
Request/response normalization helpers.

Pure functions, no I/O:
    - Hex prefix handling for RPC params and URL path segments.
    - Quote stripping for Secret Store plain-text bodies, which come back
      as JSON-serialized strings (``"0xabc..."``).
    - Compact JSON bodies (no whitespace, UTF-8), byte-for-byte what a
      browser ``JSON.stringify`` would send.
"""

from __future__ import annotations

import json
import re
from typing import Any

HEX_PREFIX = "0x"

# Anchored on both ends, greedy, single pass. "." does not cross newlines.
_QUOTED_RE = re.compile(r'^"(.*)"$')


def strip_hex_prefix(value: Any) -> str:
    """Coerce ``value`` to text and drop a leading ``0x``.

    ``None`` yields an empty string.
    """
    if value is None:
        return ""
    text = str(value)
    if text.startswith(HEX_PREFIX):
        return text[len(HEX_PREFIX):]
    return text


def ensure_hex_prefix(value: str) -> str:
    """Prepend ``0x`` unless it is already there."""
    if not value.startswith(HEX_PREFIX):
        return HEX_PREFIX + value
    return value


def unwrap_quoted_string(body: str) -> str:
    """Remove one enclosing pair of double quotes, if present.

    Not recursive: ``'""x""'`` becomes ``'"x"'``.
    """
    match = _QUOTED_RE.fullmatch(body)
    if match is None:
        return body
    return match.group(1)


def is_quoted_string(body: str) -> bool:
    return _QUOTED_RE.fullmatch(body) is not None


def json_text(obj: Any) -> str:
    """Serialize to compact JSON text.

    Rules:
    - No whitespace between tokens
    - UTF-8 (no ASCII escapes for non-ASCII chars)
    - Key order preserved (node ID lists are order-sensitive)
    """
    return json.dumps(
        obj,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def json_body(obj: Any) -> bytes:
    """Serialize to compact JSON as UTF-8 bytes."""
    return json_text(obj).encode("utf-8")

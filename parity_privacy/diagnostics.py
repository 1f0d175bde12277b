"""
Diagnostic sinks for failed calls.

Logging is a side effect only: a sink never decides which branch a call
takes, and whatever it does the caller sees the same result or exception.

    - LoguruSink: default, writes through loguru.
    - NullSink: discards everything (``verbose=False``).
    - Anything implementing DiagnosticSink (tests, structured collectors).
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

from loguru import logger

from parity_privacy.encoding import json_text
from parity_privacy.transport import SessionResponse


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receives diagnostics about failed calls."""

    def failed_response(self, response: SessionResponse) -> None:
        """A Secret Store session answered with a non-200 status."""
        ...

    def error(self, error: object) -> None:
        """A transport exception or a JSON-RPC error object."""
        ...


class NullSink:
    def failed_response(self, response: SessionResponse) -> None:
        pass

    def error(self, error: object) -> None:
        pass


class LoguruSink:
    """Write diagnostics through loguru, bound to this package's component."""

    def __init__(self, component: str = "parity_privacy") -> None:
        self._log = logger.bind(component=component)

    def failed_response(self, response: SessionResponse) -> None:
        self._log.warning(
            f"Request failed\n"
            f"StatusCode: {response.status_code}\n"
            f"StatusMessage: {response.status_message}\n"
            f"Body: {response.body}\n"
            f"Request options: {json_text(response.request.to_dict())}"
        )

    def error(self, error: object) -> None:
        self._log.error(f"Error: {error!r}")


def emit(callback: Callable[[Any], None], payload: Any) -> None:
    """Hand ``payload`` to a sink method.

    A sink that raises is reported through loguru and otherwise ignored,
    so the caller still gets the call's own result or exception.
    """
    try:
        callback(payload)
    except Exception:
        logger.exception(f"Diagnostic sink {callback!r} failed")


def resolve_sink(verbose: bool, sink: DiagnosticSink | None = None) -> DiagnosticSink:
    """Pick the sink for one call.

    ``verbose=False`` always wins, so a call can be silenced even when a
    sink was configured globally.
    """
    if not verbose:
        return NullSink()
    if sink is not None:
        return sink
    return LoguruSink()

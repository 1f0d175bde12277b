"""
Parity private transactions.

Private contract state is encrypted and visible only to its validators;
execution is proven by an ordinary public transaction wrapping it. These
functions only compose, read and broadcast such transactions through the
node's JSON-RPC API. Transaction fields are not validated locally: a
malformed transaction is rejected by the node, as an RPC error.
"""

from __future__ import annotations

from typing import Any

from parity_privacy import jsonrpc
from parity_privacy.diagnostics import DiagnosticSink
from parity_privacy.models import DEFAULT_GAS_PRICE, LATEST_BLOCK, DeploymentRequest
from parity_privacy.transport import JsonRpcTransport


async def compose_public_tx(
    transport: JsonRpcTransport,
    tx: dict[str, Any],
    verbose: bool = True,
    *,
    sink: DiagnosticSink | None = None,
) -> dict[str, Any]:
    """Let the node fill in the missing fields of a public transaction.

    Args:
        transport: Connection to the Parity node.
        tx: Partial transaction (from, to, data, ...).
        verbose: Whether to emit diagnostics on failure.

    Returns:
        The completed transaction object (nonce, gas, gasPrice, ...).
    """
    result: dict[str, Any] = await jsonrpc.call(
        transport, "parity_composeTransaction", [tx], verbose, sink=sink
    )
    return result


async def compose_deployment_tx(
    transport: JsonRpcTransport,
    raw_data: str,
    validators: list[str],
    gas_price: str = DEFAULT_GAS_PRICE,
    verbose: bool = True,
    *,
    sink: DiagnosticSink | None = None,
) -> dict[str, Any]:
    """Wrap a signed private deployment into a public transaction.

    Args:
        raw_data: Signed raw transaction deploying the private contract.
        validators: Addresses of the private contract's validators.
        gas_price: Gas price of the public transaction.

    Returns:
        ``{"receipt": ..., "transaction": ...}``. The receipt already
        carries the address the contract will get once the public
        transaction is mined.
    """
    request = DeploymentRequest(raw_data, validators, gas_price)
    result: dict[str, Any] = await jsonrpc.call(
        transport,
        "private_composeDeploymentTransaction",
        request.params(),
        verbose,
        sink=sink,
    )
    return result


async def call(
    transport: JsonRpcTransport,
    tx: dict[str, Any],
    verbose: bool = True,
    *,
    sink: DiagnosticSink | None = None,
) -> Any:
    """Execute a private contract call off-chain, against the latest block."""
    return await jsonrpc.call(transport, "private_call", [LATEST_BLOCK, tx], verbose, sink=sink)


async def send(
    transport: JsonRpcTransport,
    signed_tx: str,
    verbose: bool = True,
    *,
    sink: DiagnosticSink | None = None,
) -> dict[str, Any]:
    """Broadcast a signed private transaction.

    Returns:
        ``{"contractAddress": ..., "status": ..., "hash": ...}``.
    """
    result: dict[str, Any] = await jsonrpc.call(
        transport, "private_sendTransaction", [signed_tx], verbose, sink=sink
    )
    return result


async def contract_key(
    transport: JsonRpcTransport,
    address: str,
    verbose: bool = True,
    *,
    sink: DiagnosticSink | None = None,
) -> str:
    """Document key ID the private contract at ``address`` is encrypted with."""
    result: str = await jsonrpc.call(
        transport, "private_contractKey", [address], verbose, sink=sink
    )
    return result

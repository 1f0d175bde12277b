"""
Tests for private transaction calls.

Test plan:
- compose_public_tx / call / send / contract_key send the right method
  and params, return the result verbatim
- compose_deployment_tx: "latest" block tag, default gas price "0x0",
  receipt/transaction returned unchanged
- No local validation of transaction fields
- RPC and transport failures classified like every other RPC call
"""

from typing import Any

import pytest

from parity_privacy import private
from parity_privacy.errors import ClientError, ErrorKind, classify_error

SIGNED_TX = "0xf8a5808083"
VALIDATORS = ["0x7ffbe3512782069be388f41be4d8eb350672d3a5"]


class FakeTransport:
    def __init__(self, response: dict[str, Any]) -> None:
        self._response = response
        self.calls: list[dict[str, Any]] = []

    async def send(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(payload)
        return self._response


class ErrorTransport:
    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    async def send(self, payload: dict[str, Any]) -> dict[str, Any]:
        raise self._exc


def ok(result: Any) -> FakeTransport:
    return FakeTransport({"jsonrpc": "2.0", "id": 1, "result": result})


class TestComposeDeploymentTx:
    @pytest.mark.asyncio
    async def test_result_unchanged(self) -> None:
        result = {"receipt": {"contractAddress": "0xCC"}, "transaction": "0xDEAD"}
        transport = ok(result)

        composed = await private.compose_deployment_tx(transport, SIGNED_TX, VALIDATORS)

        assert composed["receipt"]["contractAddress"] == "0xCC"
        assert composed["transaction"] == "0xDEAD"
        assert composed == result

    @pytest.mark.asyncio
    async def test_default_gas_price(self) -> None:
        transport = ok({})

        await private.compose_deployment_tx(transport, SIGNED_TX, VALIDATORS)

        envelope = transport.calls[0]
        assert envelope["method"] == "private_composeDeploymentTransaction"
        assert envelope["params"] == ["latest", SIGNED_TX, VALIDATORS, "0x0"]

    @pytest.mark.asyncio
    async def test_custom_gas_price(self) -> None:
        transport = ok({})
        await private.compose_deployment_tx(transport, SIGNED_TX, VALIDATORS, "0x3b9aca00")
        assert transport.calls[0]["params"][3] == "0x3b9aca00"

    @pytest.mark.asyncio
    async def test_empty_validator_list_allowed(self) -> None:
        transport = ok({})
        await private.compose_deployment_tx(transport, SIGNED_TX, [])
        assert transport.calls[0]["params"][2] == []

    @pytest.mark.asyncio
    async def test_validators_must_be_a_list(self) -> None:
        transport = ok({})
        with pytest.raises(ValueError):
            await private.compose_deployment_tx(transport, SIGNED_TX, "0xnot-a-list")  # type: ignore[arg-type]
        assert transport.calls == []


class TestOtherCalls:
    @pytest.mark.asyncio
    async def test_compose_public_tx(self) -> None:
        tx = {"from": "0xaa", "to": "0xbb", "data": "0x01"}
        completed = {**tx, "nonce": "0x0", "gas": "0x5208", "gasPrice": "0x0"}
        transport = ok(completed)

        assert await private.compose_public_tx(transport, tx) == completed
        assert transport.calls[0]["method"] == "parity_composeTransaction"
        assert transport.calls[0]["params"] == [tx]

    @pytest.mark.asyncio
    async def test_call_uses_latest_block(self) -> None:
        tx = {"from": "0xaa", "to": "0xcontract", "data": "0x6d4ce63c"}
        transport = ok("0x000000000000000000000000000000000000000000000000000000000000002a")

        state = await private.call(transport, tx)

        assert state.endswith("2a")
        assert transport.calls[0]["method"] == "private_call"
        assert transport.calls[0]["params"] == ["latest", tx]

    @pytest.mark.asyncio
    async def test_malformed_tx_sent_as_is(self) -> None:
        transport = ok(None)
        await private.call(transport, {"nonsense": True})
        assert transport.calls[0]["params"] == ["latest", {"nonsense": True}]

    @pytest.mark.asyncio
    async def test_send(self) -> None:
        receipt = {"contractAddress": "0xCC", "status": 0, "hash": "0xh"}
        transport = ok(receipt)

        assert await private.send(transport, SIGNED_TX) == receipt
        assert transport.calls[0]["method"] == "private_sendTransaction"
        assert transport.calls[0]["params"] == [SIGNED_TX]

    @pytest.mark.asyncio
    async def test_contract_key(self) -> None:
        transport = ok("0xkeyid")

        assert await private.contract_key(transport, "0xCC") == "0xkeyid"
        assert transport.calls[0]["method"] == "private_contractKey"
        assert transport.calls[0]["params"] == ["0xCC"]


class TestFailures:
    @pytest.mark.asyncio
    async def test_rpc_error(self) -> None:
        transport = FakeTransport({"error": {"code": -32000, "message": "x"}})

        with pytest.raises(ClientError) as exc_info:
            await private.send(transport, SIGNED_TX, verbose=False)

        assert classify_error(exc_info.value) == ErrorKind.RPC
        assert exc_info.value.code == -32000
        assert exc_info.value.message == "x"

    @pytest.mark.asyncio
    async def test_transport_error_same_object(self) -> None:
        exc = ConnectionResetError("reset by peer")

        with pytest.raises(ConnectionResetError) as exc_info:
            await private.contract_key(ErrorTransport(exc), "0xCC", verbose=False)

        assert exc_info.value is exc
        assert classify_error(exc_info.value) == ErrorKind.TRANSPORT

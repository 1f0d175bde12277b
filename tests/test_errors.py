"""Tests for ClientError construction and error classification."""

import httpx

from parity_privacy.errors import ClientError, ErrorKind, classify_error
from parity_privacy.transport import RequestDescriptor, SessionResponse


def _session_response(status_code: int = 500) -> SessionResponse:
    return SessionResponse(
        status_code=status_code,
        status_message="Internal Server Error",
        body='"Session expired"',
        request=RequestDescriptor(method="GET", url="http://ss:8082/aa/bb"),
    )


class TestClientError:
    def test_from_rpc_error_keeps_code_and_message(self) -> None:
        err = ClientError.from_rpc_error({"code": -32000, "message": "x", "data": "d"})
        assert err.kind == ErrorKind.RPC
        assert err.code == -32000
        assert err.message == "x"
        assert err.data == "d"
        assert str(err) == "x"

    def test_from_rpc_error_non_dict(self) -> None:
        err = ClientError.from_rpc_error("boom")
        assert err.kind == ErrorKind.RPC
        assert err.code is None
        assert err.message == "boom"
        assert err.details["error"] == "boom"

    def test_from_session_response(self) -> None:
        response = _session_response(403)
        err = ClientError.from_session_response(response)
        assert err.kind == ErrorKind.HTTP_SESSION
        assert err.response is response
        assert err.response.status_code == 403
        assert err.details == {"url": "http://ss:8082/aa/bb", "status_code": 403}

    def test_protocol(self) -> None:
        err = ClientError.protocol("bad body", url="http://ss")
        assert err.kind == ErrorKind.PROTOCOL
        assert err.details == {"url": "http://ss"}
        assert err.response is None

    def test_repr_mentions_kind(self) -> None:
        assert "RPC" in repr(ClientError.from_rpc_error({"code": 1, "message": "m"}))


class TestClassifyError:
    def test_client_errors_keep_their_kind(self) -> None:
        assert classify_error(ClientError.protocol("x")) == ErrorKind.PROTOCOL
        assert classify_error(ClientError.from_session_response(_session_response())) == (
            ErrorKind.HTTP_SESSION
        )

    def test_anything_else_is_transport(self) -> None:
        assert classify_error(httpx.ConnectError("refused")) == ErrorKind.TRANSPORT
        assert classify_error(TimeoutError()) == ErrorKind.TRANSPORT

    def test_kind_is_string_enum(self) -> None:
        assert ErrorKind.HTTP_SESSION == "HTTP_SESSION"
        assert set(ErrorKind) == {
            ErrorKind.TRANSPORT,
            ErrorKind.RPC,
            ErrorKind.HTTP_SESSION,
            ErrorKind.PROTOCOL,
        }

"""Tests for the HTTP JSON-RPC connection."""

import base64
import json

import httpx
import pytest

from btcjson_mcp.models.results import InfoResult
from btcjson_mcp.protocol.errors import (
    InvalidRequest,
    ReadError,
    RemoteError,
    ReplyDecodeError,
    TooManyArguments,
    TransportError,
)
from btcjson_mcp.protocol.framing import create_message
from btcjson_mcp.transport.http_connection import RPCConnection


def _make_conn(handler, **kwargs) -> tuple[RPCConnection, list[httpx.Request]]:
    """Build a connection whose HTTP traffic goes to ``handler``."""
    seen: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = httpx.Client(transport=httpx.MockTransport(recording))
    return RPCConnection(client=client, **kwargs), seen


def _echo_result(result):
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(
            200, json={"result": result, "error": None, "id": body["id"]}
        )

    return handler


def test_rpc_command_posts_json_with_basic_auth():
    conn, seen = _make_conn(_echo_result("00000000hash"), user="alice", password="pw")
    reply = conn.rpc_command("getblockhash", 1)

    assert reply.ok
    assert reply.result == "00000000hash"
    request = seen[0]
    assert request.method == "POST"
    assert request.headers["content-type"] == "application/json"
    expected = base64.b64encode(b"alice:pw").decode()
    assert request.headers["authorization"] == f"Basic {expected}"
    body = json.loads(request.content)
    assert body["method"] == "getblockhash"
    assert body["params"] == [1]
    assert reply.id == body["id"]


def test_no_auth_header_without_credentials():
    conn, seen = _make_conn(_echo_result(1))
    conn.rpc_command("getblockcount")
    assert "authorization" not in seen[0].headers


def test_call_returns_typed_result():
    conn, _ = _make_conn(_echo_result({"version": 80300, "blocks": 12}))
    info = conn.call("getinfo")
    assert isinstance(info, InfoResult)
    assert info.blocks == 12


def test_error_envelope_on_http_500():
    def handler(request):
        return httpx.Response(
            500,
            json={"result": None, "error": {"code": -8, "message": "out of range"}, "id": "x"},
        )

    conn, _ = _make_conn(handler)
    reply = conn.rpc_command("getblockhash", 99999999)
    assert reply.error.code == -8

    with pytest.raises(RemoteError):
        conn.call("getblockhash", 99999999)


def test_validation_happens_before_sending():
    conn, seen = _make_conn(_echo_result(None))
    with pytest.raises(TooManyArguments):
        conn.rpc_command("getinfo", 1)
    assert seen == []


def test_empty_method_rejected_before_sending():
    conn, seen = _make_conn(_echo_result(None))
    bad = b'{"jsonrpc":"1.0","id":"btcd","method":""}'
    with pytest.raises(InvalidRequest):
        conn.send(bad)
    assert seen == []


def test_raw_command_sends_unregistered_method():
    conn, seen = _make_conn(_echo_result("pong"))
    reply = conn.rpc_raw_command(b'{"jsonrpc":"1.0","id":"1","method":"ping","params":[]}')
    assert reply.result == "pong"
    assert len(seen) == 1


def test_auth_rejection_is_transport_error():
    conn, _ = _make_conn(lambda request: httpx.Response(401))
    with pytest.raises(TransportError) as exc:
        conn.send(create_message("getinfo"))
    assert "401" in str(exc.value)


def test_empty_error_body_is_transport_error():
    conn, _ = _make_conn(lambda request: httpx.Response(503))
    with pytest.raises(TransportError):
        conn.send(create_message("getinfo"))


def test_connect_failure_is_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    conn, _ = _make_conn(handler)
    with pytest.raises(TransportError) as exc:
        conn.send(create_message("getinfo"))
    assert isinstance(exc.value.__cause__, httpx.ConnectError)


def test_unreachable_server():
    conn = RPCConnection(host="127.0.0.1", port=1, user="u", password="p", timeout=2.0)
    try:
        with pytest.raises(TransportError):
            conn.send(create_message("getinfo"))
    finally:
        conn.close()


def test_truncated_body_is_read_error():
    class BrokenBody(httpx.SyncByteStream):
        def __iter__(self):
            yield b'{"result":'
            raise httpx.ReadError("unexpected EOF")

    conn, _ = _make_conn(lambda request: httpx.Response(200, stream=BrokenBody()))
    with pytest.raises(ReadError):
        conn.send(create_message("getinfo"))


def test_garbage_body_is_decode_error():
    conn, _ = _make_conn(lambda request: httpx.Response(200, content=b"<html>"))
    with pytest.raises(ReplyDecodeError):
        conn.rpc_command("getinfo")


def test_supplied_client_is_not_closed():
    client = httpx.Client(transport=httpx.MockTransport(_echo_result(1)))
    conn = RPCConnection(client=client)
    assert conn.connected
    conn.close()
    assert not conn.connected
    assert not client.is_closed
    client.close()


def test_context_manager_opens_and_closes():
    with RPCConnection(host="node.local", port=18332) as conn:
        assert conn.connected
        assert conn.url == "http://node.local:18332/"
    assert not conn.connected


def test_tls_url():
    conn = RPCConnection(host="node.local", use_tls=True)
    assert conn.url == "https://node.local:8332/"
    assert not conn.connected

"""JSON-RPC client tests using httpx.MockTransport (no network)."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from stylus_mint.chain.rpc import RpcClient
from stylus_mint.errors import ConnectivityError, RpcError, TransactionError

URL = "https://rpc.invalid"


def _client(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> RpcClient:
    return RpcClient(URL, transport=httpx.MockTransport(handler), **kwargs)


def _result(value: Any) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": value})

    return handler


class TestRequest:
    """Envelope handling and error classification."""

    def test_payload_shape(self) -> None:
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x1"})

        with _client(handler) as rpc:
            rpc.request("eth_chainId", [])
            rpc.request("eth_chainId", [])

        assert seen[0] == {"jsonrpc": "2.0", "method": "eth_chainId", "params": [], "id": 1}
        assert seen[1]["id"] == 2

    def test_rpc_error_object(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "jsonrpc": "2.0",
                    "id": 1,
                    "error": {"code": 3, "message": "execution reverted", "data": "0xdeadbeef"},
                },
            )

        with _client(handler) as rpc:
            with pytest.raises(RpcError) as excinfo:
                rpc.request("eth_call", [])

        assert excinfo.value.code == 3
        assert excinfo.value.rpc_message == "execution reverted"
        assert excinfo.value.data == "0xdeadbeef"

    def test_rpc_error_with_non_numeric_code(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": 1, "error": {"code": "oops", "message": "bad"}},
            )

        with _client(handler) as rpc:
            with pytest.raises(RpcError) as excinfo:
                rpc.request("eth_call", [])

        assert excinfo.value.code == 0
        assert excinfo.value.rpc_message == "bad"

    def test_connection_refused(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with _client(handler) as rpc:
            with pytest.raises(ConnectivityError, match="Cannot reach"):
                rpc.chain_id()

    def test_http_status(self) -> None:
        with _client(lambda request: httpx.Response(502, text="bad gateway")) as rpc:
            with pytest.raises(ConnectivityError, match="502"):
                rpc.chain_id()

    def test_non_json_body(self) -> None:
        with _client(lambda request: httpx.Response(200, text="<html>")) as rpc:
            with pytest.raises(ConnectivityError, match="non-JSON"):
                rpc.chain_id()


class TestHelpers:
    """Hex quantities are decoded to int."""

    def test_chain_id(self) -> None:
        with _client(_result(hex(23011913))) as rpc:
            assert rpc.chain_id() == 23011913

    def test_balance(self) -> None:
        with _client(_result("0xde0b6b3a7640000")) as rpc:
            assert rpc.get_balance("0x" + "a" * 40) == 10**18

    def test_nonce_uses_pending(self) -> None:
        params: list[list] = []

        def handler(request: httpx.Request) -> httpx.Response:
            params.append(json.loads(request.content)["params"])
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x5"})

        with _client(handler) as rpc:
            assert rpc.get_nonce("0x" + "a" * 40) == 5
        assert params[0][1] == "pending"


class TestWaitForReceipt:
    """Receipt polling."""

    def test_returns_once_available(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("stylus_mint.chain.rpc.time.sleep", lambda _: None)
        answers = [None, None, {"status": "0x1"}]

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": answers.pop(0)})

        with _client(handler) as rpc:
            assert rpc.wait_for_receipt("0xabc") == {"status": "0x1"}
        assert answers == []

    def test_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("stylus_mint.chain.rpc.time.sleep", lambda _: None)
        with _client(_result(None)) as rpc:
            with pytest.raises(TransactionError, match="not confirmed") as excinfo:
                rpc.wait_for_receipt("0xabc", timeout=0)
        assert excinfo.value.tx_hash == "0xabc"

"""
JSON-RPC client for the Stylus testnet.

Lightweight alternative to web3.py: httpx for HTTP, one session per run.
Transport failures surface as ``ConnectivityError``; JSON-RPC error
objects surface as ``RpcError`` for the caller to classify.  Nothing is
retried.
"""

from __future__ import annotations

import itertools
import logging
import time
from typing import Any, Optional

import httpx

from ..errors import ConnectivityError, RpcError, TransactionError

logger = logging.getLogger(__name__)


def _error_code(code: Any) -> int:
    try:
        return int(code)
    except (TypeError, ValueError):
        return 0


class RpcClient:
    """
    A single JSON-RPC session against one endpoint.

    Args:
        url: Endpoint URL
        timeout: Per-request timeout in seconds (None: no timeout)
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._ids = itertools.count(1)
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def __enter__(self) -> "RpcClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def request(self, method: str, params: list) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "eth_call")
            params: RPC parameters

        Returns:
            Result field from the RPC response

        Raises:
            ConnectivityError: Endpoint unreachable, HTTP error, or bad body
            RpcError: The node answered with a JSON-RPC error object
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": next(self._ids),
        }
        logger.debug("-> %s %s", method, params)

        try:
            response = self._client.post(self.url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise ConnectivityError(
                f"{self.url} answered {exc.response.status_code} to {method}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ConnectivityError(f"Cannot reach {self.url}: {exc}") from exc
        except ValueError as exc:
            raise ConnectivityError(f"{self.url} returned a non-JSON body to {method}") from exc

        if not isinstance(data, dict):
            raise ConnectivityError(f"{self.url} returned a malformed response to {method}")

        if data.get("error"):
            error = data["error"]
            logger.debug("<- %s error %s", method, error)
            if isinstance(error, dict):
                raise RpcError(
                    _error_code(error.get("code")),
                    str(error.get("message", "")),
                    error.get("data"),
                )
            raise RpcError(0, str(error))

        result = data.get("result")
        logger.debug("<- %s %s", method, result)
        return result

    # ------------------------------------------------------------------
    # eth_* helpers
    # ------------------------------------------------------------------

    def chain_id(self) -> int:
        return int(self.request("eth_chainId", []), 16)

    def get_balance(self, address: str) -> int:
        """Balance in wei."""
        return int(self.request("eth_getBalance", [address, "latest"]), 16)

    def get_nonce(self, address: str) -> int:
        """Next nonce for ``address``, counting pending transactions."""
        return int(self.request("eth_getTransactionCount", [address, "pending"]), 16)

    def gas_price(self) -> int:
        return int(self.request("eth_gasPrice", []), 16)

    def estimate_gas(self, tx: dict) -> int:
        return int(self.request("eth_estimateGas", [tx]), 16)

    def eth_call(self, to: str, data: str) -> str:
        return self.request("eth_call", [{"to": to, "data": data}, "latest"])

    def send_raw_transaction(self, raw_tx: str) -> str:
        """
        Send a signed raw transaction.

        Returns:
            Transaction hash (0x-prefixed hex)
        """
        return self.request("eth_sendRawTransaction", [raw_tx])

    def get_receipt(self, tx_hash: str) -> Optional[dict]:
        return self.request("eth_getTransactionReceipt", [tx_hash])

    def wait_for_receipt(
        self,
        tx_hash: str,
        timeout: Optional[float] = None,
        poll_interval: float = 1.0,
    ) -> dict:
        """
        Wait for a transaction receipt.

        Args:
            tx_hash: Transaction hash
            timeout: Maximum wait time in seconds (None: wait indefinitely)
            poll_interval: Polling interval in seconds

        Returns:
            Transaction receipt dict

        Raises:
            TransactionError: If receipt not found within timeout
        """
        start = time.monotonic()
        while True:
            receipt = self.get_receipt(tx_hash)
            if receipt is not None:
                return receipt
            if timeout is not None and time.monotonic() - start >= timeout:
                raise TransactionError(
                    f"Transaction {tx_hash} not confirmed within {timeout}s",
                    tx_hash=tx_hash,
                )
            time.sleep(poll_interval)

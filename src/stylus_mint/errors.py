"""
Error taxonomy for the mint workflow.

Every error is fatal: nothing here is caught and retried.  The CLI
boundary turns a ``MintError`` into a diagnostic and exits with the
class-level ``exit_code``.
"""

from __future__ import annotations

from typing import Any, Optional


class MintError(RuntimeError):
    exit_code: int = 1


class ConfigurationError(MintError):
    """Required environment value missing or malformed."""

    exit_code = 2


class ConnectivityError(MintError):
    """RPC endpoint unreachable or returned a transport-level failure."""

    exit_code = 3


class ContractCallError(MintError):
    """A read call reverted or targeted a nonexistent token/function."""

    exit_code = 4


class TransactionError(MintError):
    """The mint transaction was rejected or reverted on-chain."""

    exit_code = 5

    def __init__(self, message: str, tx_hash: Optional[str] = None) -> None:
        super().__init__(message)
        self.tx_hash = tx_hash


class RpcError(MintError):
    """JSON-RPC ``error`` object returned by the node.

    The chain layer translates this into ``ContractCallError`` or
    ``TransactionError`` depending on which call produced it.
    """

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.rpc_message = message
        self.data = data

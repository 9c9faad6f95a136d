"""
Ledger - the network boundary of the mint workflow.

``Ledger`` is the interface the workflow talks to; ``RpcLedger`` is the
JSON-RPC implementation.  Tests substitute their own ledger with the
same four methods.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence

from eth_account.signers.local import LocalAccount

from ..errors import ContractCallError, RpcError, TransactionError
from .abi import AbiFunction, decode_revert
from .rpc import RpcClient
from .tx import TxResult, build_contract_tx, sign_and_send

logger = logging.getLogger(__name__)


def _describe(fn: AbiFunction, args: Sequence[Any]) -> str:
    return f"{fn.name}({', '.join(str(a) for a in args)})"


class Ledger(Protocol):
    def connect(self) -> int:
        """Open the session; returns the chain id."""
        ...

    def read(self, address: str, fn: AbiFunction, args: Sequence[Any]) -> Any:
        """Issue a view call and return the decoded result."""
        ...

    def transact(
        self,
        signer: LocalAccount,
        address: str,
        fn: AbiFunction,
        args: Sequence[Any],
    ) -> TxResult:
        """Sign and submit a state-changing call; block until confirmed."""
        ...

    def close(self) -> None:
        ...


class RpcLedger:
    def __init__(self, rpc: RpcClient, receipt_timeout: Optional[float] = None) -> None:
        self.rpc = rpc
        self.receipt_timeout = receipt_timeout
        self._chain_id: Optional[int] = None

    @classmethod
    def open(cls, rpc_url: str, timeout: Optional[float] = None) -> "RpcLedger":
        return cls(RpcClient(rpc_url, timeout=timeout), receipt_timeout=timeout)

    def connect(self) -> int:
        if self._chain_id is None:
            self._chain_id = self.rpc.chain_id()
            logger.info("connected to %s (chain id %d)", self.rpc.url, self._chain_id)
        return self._chain_id

    def read(self, address: str, fn: AbiFunction, args: Sequence[Any]) -> Any:
        calldata = fn.encode_call(args)
        try:
            result = self.rpc.eth_call(address, calldata)
        except RpcError as exc:
            reason = decode_revert(exc.data)
            detail = f"{exc.rpc_message} ({reason})" if reason else exc.rpc_message
            raise ContractCallError(f"{_describe(fn, args)} failed: {detail}") from exc

        if result is None:
            raise ContractCallError(f"{_describe(fn, args)} returned nothing")
        return fn.decode_result(result)

    def transact(
        self,
        signer: LocalAccount,
        address: str,
        fn: AbiFunction,
        args: Sequence[Any],
    ) -> TxResult:
        calldata = fn.encode_call(args)
        tx = build_contract_tx(
            self.rpc,
            sender=signer.address,
            to=address,
            data=calldata,
            chain_id=self.connect(),
        )
        try:
            return sign_and_send(self.rpc, signer, tx, timeout=self.receipt_timeout)
        except RpcError as exc:
            raise TransactionError(f"{fn.name} failed while waiting for receipt: {exc}") from exc

    def close(self) -> None:
        self.rpc.close()

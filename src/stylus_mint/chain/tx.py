"""
Transaction Builder - Build, sign, and send contract transactions.

Uses eth-account for signing and the httpx JSON-RPC session for sending.
Nonce, gas and gas price come straight from the node; there is no gas
strategy and no resubmission.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from eth_account.signers.local import LocalAccount

from ..errors import RpcError, TransactionError
from ..utils import to_checksum_address
from .abi import decode_revert
from .rpc import RpcClient


@dataclass(frozen=True)
class TxResult:
    tx_hash: str
    status: int
    receipt: dict[str, Any] = field(default_factory=dict)


def _rejected(stage: str, exc: RpcError, tx_hash: Optional[str] = None) -> TransactionError:
    reason = decode_revert(exc.data) if exc.data else None
    detail = f"{exc.rpc_message} ({reason})" if reason else exc.rpc_message
    return TransactionError(f"Transaction rejected during {stage}: {detail}", tx_hash=tx_hash)


def build_contract_tx(
    rpc: RpcClient,
    sender: str,
    to: str,
    data: str,
    chain_id: int,
    value: int = 0,
) -> dict:
    """
    Build a contract call transaction (unsigned).

    Args:
        rpc: JSON-RPC session
        sender: Address that will sign the transaction
        to: 0x-prefixed contract address
        data: 0x-prefixed calldata
        chain_id: Chain the transaction is bound to
        value: ETH value in wei (default: 0)

    Returns:
        Unsigned legacy transaction dict

    Raises:
        TransactionError: If the node refuses to estimate (revert,
            insufficient funds)
    """
    call = {"from": sender, "to": to, "data": data, "value": hex(value)}
    try:
        nonce = rpc.get_nonce(sender)
        gas = rpc.estimate_gas(call)
        gas_price = rpc.gas_price()
    except RpcError as exc:
        raise _rejected("gas estimation", exc) from exc

    return {
        "to": to_checksum_address(to),
        "data": data,
        "value": value,
        "nonce": nonce,
        "gas": gas,
        "gasPrice": gas_price,
        "chainId": chain_id,
    }


def sign_and_send(
    rpc: RpcClient,
    account: LocalAccount,
    tx: dict,
    timeout: Optional[float] = None,
) -> TxResult:
    """
    Sign a transaction and send it exactly once.

    Args:
        rpc: JSON-RPC session
        account: Signer
        tx: Unsigned transaction dict
        timeout: Receipt wait timeout (None: wait indefinitely)

    Returns:
        TxResult with hash, status and receipt

    Raises:
        TransactionError: If the node rejects the transaction (nonce
            conflict, insufficient funds) or it reverts on-chain
    """
    signed = account.sign_transaction(tx)
    raw_tx = "0x" + bytes(signed.raw_transaction).hex()

    try:
        tx_hash = rpc.send_raw_transaction(raw_tx)
    except RpcError as exc:
        raise _rejected("submission", exc) from exc

    receipt = rpc.wait_for_receipt(tx_hash, timeout=timeout)
    status = int(receipt.get("status", "0x0"), 16)
    if status != 1:
        raise TransactionError(f"Transaction {tx_hash} reverted on-chain", tx_hash=tx_hash)

    return TxResult(tx_hash=tx_hash, status=status, receipt=receipt)

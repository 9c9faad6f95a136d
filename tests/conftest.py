"""Shared fixtures: a deterministic signer and an in-memory NFT ledger."""

from __future__ import annotations

from typing import Any, Optional, Sequence

import pytest
from eth_account import Account
from eth_account.signers.local import LocalAccount

from stylus_mint.chain.abi import TRANSFER_TOPIC, AbiFunction
from stylus_mint.chain.tx import TxResult
from stylus_mint.errors import ConnectivityError, ContractCallError, TransactionError

TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_CONTRACT = "0x" + "c" * 40
OWNER_A = "0x" + "a" * 40
STYLUS_CHAIN_ID = 23011913


def _topic(value: int) -> str:
    return "0x" + format(value, "064x")


class FakeLedger:
    """In-memory ledger that records every call in order.

    ``ownerOf`` answers from ``owners``; ``safeMint`` reassigns the token
    unless ``revert_mint`` is set.
    """

    def __init__(
        self,
        owners: Optional[dict[int, str]] = None,
        revert_mint: bool = False,
        unreachable: bool = False,
        views: Optional[dict[str, Any]] = None,
    ) -> None:
        self.owners = dict(owners or {})
        self.views = dict(views or {})
        self.revert_mint = revert_mint
        self.unreachable = unreachable
        self.calls: list[tuple[Any, ...]] = []
        self.closed = False

    def connect(self) -> int:
        self.calls.append(("connect",))
        if self.unreachable:
            raise ConnectivityError("Cannot reach fake endpoint")
        return STYLUS_CHAIN_ID

    def read(self, address: str, fn: AbiFunction, args: Sequence[Any]) -> Any:
        fn.encode_call(args)
        self.calls.append(("read", fn.name, tuple(args)))
        if fn.name == "ownerOf":
            token_id = args[0]
            if token_id not in self.owners:
                raise ContractCallError(f"ownerOf({token_id}) failed: execution reverted")
            return self.owners[token_id]
        if fn.name in self.views:
            return self.views[fn.name]
        raise ContractCallError(f"{fn.name} not supported by fake ledger")

    def transact(
        self,
        signer: LocalAccount,
        address: str,
        fn: AbiFunction,
        args: Sequence[Any],
    ) -> TxResult:
        fn.encode_call(args)
        self.calls.append(("transact", fn.name, tuple(args), signer.address))
        tx_hash = "0x" + "ab" * 32
        if self.revert_mint:
            raise TransactionError(f"Transaction {tx_hash} reverted on-chain", tx_hash=tx_hash)

        to, token_id = args
        self.owners[token_id] = to
        receipt = {
            "status": "0x1",
            "logs": [
                {
                    "address": address,
                    "topics": [
                        TRANSFER_TOPIC,
                        _topic(0),
                        _topic(int(to, 16)),
                        _topic(token_id),
                    ],
                }
            ],
        }
        return TxResult(tx_hash=tx_hash, status=1, receipt=receipt)

    def close(self) -> None:
        self.calls.append(("close",))
        self.closed = True

    def names(self) -> list[str]:
        return [c[1] if c[0] in ("read", "transact") else c[0] for c in self.calls]


@pytest.fixture()
def signer() -> LocalAccount:
    return Account.from_key(TEST_PRIVATE_KEY)


@pytest.fixture()
def clean_cwd(tmp_path, monkeypatch) -> Any:
    """Run from an empty directory so no stray .env is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path

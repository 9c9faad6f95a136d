"""
Contract binding: a deployed address plus its typed ABI.

The binding is immutable.  It does not check on-chain that the address
actually hosts this interface; a mismatch shows up as a call failure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from eth_account.signers.local import LocalAccount

from ..errors import ContractCallError
from .abi import NFT_ABI, AbiFunction, lookup
from .ledger import Ledger
from .tx import TxResult


@dataclass(frozen=True)
class ContractBinding:
    address: str
    abi: Mapping[str, AbiFunction] = field(default_factory=lambda: NFT_ABI, repr=False)

    def function(self, name: str) -> AbiFunction:
        return lookup(name, self.abi)

    def call(self, ledger: Ledger, name: str, *args: Any) -> Any:
        """Read-only call; no signature, no state change."""
        fn = self.function(name)
        if not fn.is_view:
            raise ContractCallError(
                f"{fn.name} is {fn.state_mutability}; send it as a transaction"
            )
        return ledger.read(self.address, fn, args)

    def transact(self, ledger: Ledger, signer: LocalAccount, name: str, *args: Any) -> TxResult:
        """State-changing call signed by ``signer``; blocks until confirmed."""
        fn = self.function(name)
        if fn.is_view:
            raise ContractCallError(f"{fn.name} is a view function; use call()")
        return ledger.transact(signer, self.address, fn, args)

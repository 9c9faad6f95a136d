"""
Mint Workflow.

One linear sequence of network calls:

1. Connect to the RPC endpoint
2. Load the signer from the private key
3. Bind the contract at CONTRACT_ADDRESS
4. Read ownerOf(TOKEN_ID)
5. safeMint(signer, TOKEN_ID), blocking until confirmed
6. Read ownerOf(TOKEN_ID) again

Each step is a hard prerequisite for the next.  The first failure
propagates; there is no retry and no partial rollback.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import click

from .chain.abi import parse_minted_token_id
from .chain.contract import ContractBinding
from .chain.ledger import Ledger, RpcLedger
from .config import TOKEN_ID, MintConfig
from .wallet import load_signer

LedgerFactory = Callable[[str, Optional[float]], Ledger]


@dataclass(frozen=True)
class MintReport:
    chain_id: int
    signer: str
    contract: str
    token_id: int
    owner_before: str
    owner_after: str
    tx_hash: str
    minted_token_id: Optional[int] = None


def run_mint(
    config: MintConfig,
    ledger_factory: LedgerFactory = RpcLedger.open,
    echo: Callable[[str], None] = click.echo,
) -> MintReport:
    """
    Run the mint workflow against ``config``.

    ``config`` is already validated, so configuration errors have been
    raised before this function opens any connection.

    Args:
        config: Validated runtime configuration
        ledger_factory: Builds the network boundary from (rpc_url, timeout)
        echo: Sink for the human-readable progress lines

    Returns:
        MintReport describing the confirmed mint

    Raises:
        ConnectivityError: Endpoint unreachable
        ContractCallError: ownerOf failed (e.g. unknown token)
        TransactionError: safeMint rejected or reverted
    """
    ledger = ledger_factory(config.rpc_url, config.timeout)
    try:
        chain_id = ledger.connect()

        signer = load_signer(config.private_key)
        contract = ContractBinding(config.contract_address)

        owner_before = contract.call(ledger, "ownerOf", TOKEN_ID)
        echo(f"Owner Address: {owner_before}")

        echo("Minting...")
        result = contract.transact(ledger, signer, "safeMint", signer.address, TOKEN_ID)

        owner_after = contract.call(ledger, "ownerOf", TOKEN_ID)
        echo(f"New Owner Address: {owner_after}")
    finally:
        ledger.close()

    return MintReport(
        chain_id=chain_id,
        signer=signer.address,
        contract=contract.address,
        token_id=TOKEN_ID,
        owner_before=owner_before,
        owner_after=owner_after,
        tx_hash=result.tx_hash,
        minted_token_id=parse_minted_token_id(result.receipt),
    )

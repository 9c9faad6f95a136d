"""
stylus-mint CLI

Mints token 0 of the Stylus NFT contract to the signer and reports the
owner before and after.

Configuration (environment or ./.env):
  PRIVATE_KEY       - hex key of the signing account
  CONTRACT_ADDRESS  - deployed NFT contract

Commands:
  mint    - Read owner, safeMint(signer, 0), read owner again
  owner   - Show the owner of a token
  info    - Show collection name, symbol, token URI and signer balance
  whoami  - Show the signer address
  abi     - Print the contract ABI as JSON
"""

from __future__ import annotations

import json
import logging
import sys
from typing import NoReturn, Optional

import click

from .chain.abi import abi_json
from .chain.contract import ContractBinding
from .chain.ledger import RpcLedger
from .config import DEFAULT_RPC_URL, TOKEN_ID, MintConfig, load_contract_address, load_private_key
from .errors import ContractCallError, MintError, TransactionError
from .utils import same_address
from .wallet import load_signer, signer_address
from .workflow import run_mint


# ============ Constants ============

VERSION = "0.1.0"

_rpc_option = click.option(
    "--rpc-url",
    default=DEFAULT_RPC_URL,
    show_default=True,
    help="JSON-RPC endpoint",
)
_timeout_option = click.option(
    "--timeout",
    type=float,
    default=None,
    help="Seconds to wait per request and for the receipt (default: no limit)",
)


def _fail(exc: MintError) -> NoReturn:
    click.secho(f"ERROR: {exc}", fg="red", err=True)
    if isinstance(exc, TransactionError) and exc.tx_hash:
        click.echo(f"  TX: {exc.tx_hash}", err=True)
    sys.exit(exc.exit_code)


# ============ Main CLI Group ============


@click.group()
@click.version_option(version=VERSION, prog_name="stylus-mint")
@click.option("--verbose", "-v", is_flag=True, help="Log every RPC request")
def cli(verbose: bool) -> None:
    """Mint the Stylus testnet NFT and confirm the owner change."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ============ Mint ============


@cli.command()
@_rpc_option
@_timeout_option
def mint(rpc_url: str, timeout: Optional[float]) -> None:
    """Mint token 0 to the signer and report the owner before and after."""
    try:
        config = MintConfig.from_env(rpc_url=rpc_url, timeout=timeout)
        report = run_mint(config, ledger_factory=RpcLedger.open)
    except MintError as exc:
        _fail(exc)

    click.echo(f"  TX: {report.tx_hash}")
    if report.minted_token_id is not None:
        click.echo(f"  Minted token: #{report.minted_token_id}")
    if not same_address(report.owner_after, report.signer):
        click.secho("  Warning: token owner is not the signer after mint", fg="yellow")


# ============ Reads ============


@cli.command()
@click.option("--token-id", type=int, default=TOKEN_ID, show_default=True, help="Token ID")
@_rpc_option
@_timeout_option
def owner(token_id: int, rpc_url: str, timeout: Optional[float]) -> None:
    """Show the current owner of a token."""
    try:
        contract = ContractBinding(load_contract_address())
        ledger = RpcLedger.open(rpc_url, timeout)
        try:
            ledger.connect()
            holder = contract.call(ledger, "ownerOf", token_id)
        finally:
            ledger.close()
    except MintError as exc:
        _fail(exc)

    click.echo(f"Owner Address: {holder}")


@cli.command()
@_rpc_option
@_timeout_option
def info(rpc_url: str, timeout: Optional[float]) -> None:
    """Show collection metadata and the signer's balance."""
    try:
        contract = ContractBinding(load_contract_address())
    except MintError as exc:
        _fail(exc)

    try:
        signer = load_signer(load_private_key())
    except MintError:
        signer = None

    ledger = RpcLedger.open(rpc_url, timeout)
    try:
        chain_id = ledger.connect()
        name = contract.call(ledger, "name")
        symbol = contract.call(ledger, "symbol")

        click.echo(click.style("  Contract: ", dim=True) + contract.address)
        click.echo(click.style("  Chain ID: ", dim=True) + str(chain_id))
        click.echo(click.style("  Name:     ", dim=True) + name)
        click.echo(click.style("  Symbol:   ", dim=True) + symbol)

        try:
            uri = contract.call(ledger, "tokenUri", TOKEN_ID)
            click.echo(click.style(f"  Token #{TOKEN_ID}: ", dim=True) + uri)
        except ContractCallError as exc:
            click.echo(
                click.style(f"  Token #{TOKEN_ID}: ", dim=True)
                + click.style(f"(unavailable: {exc})", fg="yellow")
            )

        if signer is not None:
            balance = contract.call(ledger, "balanceOf", signer.address)
            click.echo(click.style("  Signer:   ", dim=True) + signer.address)
            click.echo(click.style("  Balance:  ", dim=True) + f"{balance} {symbol}")
    except MintError as exc:
        _fail(exc)
    finally:
        ledger.close()


# ============ Identity ============


@cli.command()
def whoami() -> None:
    """Show the signer address derived from PRIVATE_KEY."""
    try:
        address = signer_address(load_private_key())
    except MintError as exc:
        _fail(exc)
    click.echo(f"Address: {address}")


@cli.command("abi")
def abi_cmd() -> None:
    """Print the contract ABI as JSON."""
    click.echo(json.dumps(abi_json(), indent=2))


# ============ Entry Points ============


def main() -> None:
    """stylus-mint CLI entry point."""
    cli()


if __name__ == "__main__":
    main()

"""
Runtime configuration for the mint workflow.

Exactly two values come from the environment, both required:

- ``PRIVATE_KEY``: hex key of the signing account
- ``CONTRACT_ADDRESS``: address of the deployed NFT contract

A ``.env`` file in the working directory may supply them; the process
environment always wins.  The RPC endpoint and token id are constants.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import dotenv_values, find_dotenv

from .errors import ConfigurationError
from .utils import is_address, to_checksum_address
from .wallet import load_signer, normalize_private_key

# Arbitrum Stylus testnet
DEFAULT_RPC_URL = "https://stylus-testnet.arbitrum.io/rpc"

TOKEN_ID = 0

PRIVATE_KEY_ENV = "PRIVATE_KEY"
CONTRACT_ADDRESS_ENV = "CONTRACT_ADDRESS"


def _environ(env: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    if env is not None:
        return env
    # .env may only supply the two required values; the process environment wins
    file_values = dotenv_values(find_dotenv(usecwd=True))
    merged: dict[str, str] = {}
    for name in (PRIVATE_KEY_ENV, CONTRACT_ADDRESS_ENV):
        value = os.environ.get(name) or file_values.get(name)
        if value:
            merged[name] = value
    return merged


def _require(env: Mapping[str, str], name: str) -> str:
    value = (env.get(name) or "").strip()
    if not value:
        raise ConfigurationError(f"{name} is not set")
    return value


def load_private_key(env: Optional[Mapping[str, str]] = None) -> str:
    """
    Read and normalize the signing key.

    Args:
        env: Mapping to read from (default: os.environ, then .env)

    Returns:
        0x-prefixed hex private key

    Raises:
        ConfigurationError: If PRIVATE_KEY is missing, malformed or not a
            valid secp256k1 key
    """
    env = _environ(env)
    key = normalize_private_key(_require(env, PRIVATE_KEY_ENV))
    load_signer(key)
    return key


def load_contract_address(env: Optional[Mapping[str, str]] = None) -> str:
    """
    Read and checksum the deployed contract address.

    Raises:
        ConfigurationError: If CONTRACT_ADDRESS is missing or malformed
    """
    env = _environ(env)
    address = _require(env, CONTRACT_ADDRESS_ENV)
    if not is_address(address):
        raise ConfigurationError(
            f"{CONTRACT_ADDRESS_ENV} is malformed: {address!r} "
            "(expected 0x followed by 40 hex chars with a valid checksum)"
        )
    return to_checksum_address(address)


@dataclass(frozen=True)
class MintConfig:
    private_key: str
    contract_address: str
    rpc_url: str = DEFAULT_RPC_URL
    timeout: Optional[float] = None

    def __repr__(self) -> str:
        return (
            f"MintConfig(contract_address={self.contract_address!r}, "
            f"rpc_url={self.rpc_url!r}, timeout={self.timeout!r})"
        )

    @classmethod
    def from_env(
        cls,
        rpc_url: str = DEFAULT_RPC_URL,
        timeout: Optional[float] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> "MintConfig":
        """
        Build the configuration, validating both required values.

        The key is checked before the address.  Nothing here touches the
        network.

        Args:
            rpc_url: JSON-RPC endpoint
            timeout: Per-request and receipt-wait timeout in seconds
                     (None: wait indefinitely)
            env: Mapping to read from (default: os.environ, then .env)
        """
        env = _environ(env)
        return cls(
            private_key=load_private_key(env),
            contract_address=load_contract_address(env),
            rpc_url=rpc_url,
            timeout=timeout,
        )

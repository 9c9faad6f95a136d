"""
secp256k1 signer handling.

The signing key comes from ``PRIVATE_KEY`` (hex, with or without the
``0x`` prefix).  It is held in memory for the lifetime of the process
and never written anywhere.

Dependencies: eth-account (no full web3.py needed)
"""

from __future__ import annotations

import re

from eth_account import Account
from eth_account.signers.local import LocalAccount

from .errors import ConfigurationError

_KEY_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")


def normalize_private_key(value: str) -> str:
    """
    Normalize a hex private key to its 0x-prefixed form.

    Args:
        value: Raw key string as found in the environment

    Returns:
        0x-prefixed hex private key (66 chars)

    Raises:
        ConfigurationError: If the key is not 32 bytes of hex
    """
    key = value.strip()
    if not key.startswith(("0x", "0X")):
        key = "0x" + key
    key = "0x" + key[2:]

    if not _KEY_RE.match(key):
        raise ConfigurationError(
            "PRIVATE_KEY is malformed: expected 32 bytes of hex (64 hex chars)"
        )
    return key


def load_signer(private_key: str) -> LocalAccount:
    """
    Derive a signing account from a private key.

    Args:
        private_key: Hex private key, with or without 0x prefix

    Returns:
        LocalAccount used to sign the mint transaction

    Raises:
        ConfigurationError: If the key is malformed or out of curve range
    """
    key = normalize_private_key(private_key)
    try:
        return Account.from_key(key)
    except ValueError as exc:
        raise ConfigurationError(f"PRIVATE_KEY is not a valid secp256k1 key: {exc}") from exc


def signer_address(private_key: str) -> str:
    """Checksummed address of the account behind ``private_key``."""
    return load_signer(private_key).address

from __future__ import annotations

import re

from eth_hash.auto import keccak

ZERO_ADDRESS = "0x" + "0" * 40

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def keccak256(data: bytes) -> bytes:
    # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    return keccak(data)


def hex_to_bytes(value: str) -> bytes:
    return bytes.fromhex(value[2:] if value.startswith(("0x", "0X")) else value)


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format."""
    addr = address.lower().replace("0x", "")
    addr_hash = keccak256(addr.encode("utf-8")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result


def is_address(value: str) -> bool:
    """True for 0x + 40 hex chars whose mixed case, if any, is a valid checksum."""
    if not _ADDRESS_RE.match(value):
        return False
    body = value[2:]
    if body == body.lower() or body == body.upper():
        return True
    return to_checksum_address(value) == value


def same_address(a: str, b: str) -> bool:
    return str(a).lower() == str(b).lower()

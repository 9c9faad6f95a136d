"""
Typed ABI table for the Stylus NFT contract.

The interface is fixed and reproduced verbatim from the deployed
contract's exported ABI.  Each entry knows its own selector, how to
encode a call, and how to decode the return data, so nothing here
depends on parsing JSON at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError

from ..errors import ContractCallError
from ..utils import ZERO_ADDRESS, hex_to_bytes, keccak256, to_checksum_address

VIEW = "view"
NONPAYABLE = "nonpayable"

# keccak256("Transfer(address,address,uint256)")
TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"

# Error(string)
_ERROR_STRING_SELECTOR = bytes.fromhex("08c379a0")


@dataclass(frozen=True)
class AbiParam:
    name: str
    type: str
    internal_type: Optional[str] = None

    def to_json(self) -> dict[str, str]:
        return {
            "internalType": self.internal_type or self.type,
            "name": self.name,
            "type": self.type,
        }


@dataclass(frozen=True)
class AbiFunction:
    name: str
    inputs: tuple[AbiParam, ...]
    outputs: tuple[AbiParam, ...]
    state_mutability: str

    @property
    def input_types(self) -> list[str]:
        return [p.type for p in self.inputs]

    @property
    def output_types(self) -> list[str]:
        return [p.type for p in self.outputs]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        return keccak256(self.signature.encode("utf-8"))[:4]

    @property
    def is_view(self) -> bool:
        return self.state_mutability in (VIEW, "pure")

    def encode_call(self, args: Sequence[Any]) -> str:
        """
        ABI-encode a call to this function.

        Args:
            args: Positional arguments matching ``inputs``

        Returns:
            0x-prefixed hex calldata

        Raises:
            ContractCallError: If the arguments do not fit the input types
        """
        if len(args) != len(self.inputs):
            raise ContractCallError(
                f"{self.signature} takes {len(self.inputs)} argument(s), "
                f"got {len(args)}"
            )
        try:
            encoded_args = encode(self.input_types, list(args)) if args else b""
        except EncodingError as exc:
            raise ContractCallError(f"Cannot encode {self.signature}: {exc}") from exc

        return "0x" + self.selector.hex() + encoded_args.hex()

    def decode_result(self, data: str) -> Any:
        """
        ABI-decode the return data of this function.

        Returns:
            None for functions without outputs, the single value for one
            output, otherwise a tuple
        """
        if not self.outputs:
            return None

        raw = hex_to_bytes(data)
        if not raw:
            raise ContractCallError(
                f"{self.name} returned no data (does the contract implement it?)"
            )
        try:
            decoded = decode(self.output_types, raw)
        except DecodingError as exc:
            raise ContractCallError(f"Cannot decode {self.name} result: {exc}") from exc

        # eth-abi returns lowercase addresses on newer releases
        decoded = tuple(
            to_checksum_address(value) if typ == "address" else value
            for typ, value in zip(self.output_types, decoded)
        )
        if len(decoded) == 1:
            return decoded[0]
        return decoded

    def to_json(self) -> dict[str, Any]:
        return {
            "inputs": [p.to_json() for p in self.inputs],
            "name": self.name,
            "outputs": [p.to_json() for p in self.outputs],
            "stateMutability": self.state_mutability,
            "type": "function",
        }


def _fn(
    name: str,
    inputs: Sequence[tuple[str, str]],
    outputs: Sequence[str],
    mutability: str,
) -> AbiFunction:
    return AbiFunction(
        name=name,
        inputs=tuple(AbiParam(n, t) for n, t in inputs),
        outputs=tuple(AbiParam("", t) for t in outputs),
        state_mutability=mutability,
    )


_FUNCTIONS: tuple[AbiFunction, ...] = (
    _fn("approve", [("to", "address"), ("token_id", "uint256")], [], NONPAYABLE),
    _fn("balanceOf", [("owner", "address")], ["uint256"], VIEW),
    _fn("getApproved", [("token_id", "uint256")], ["address"], VIEW),
    _fn("isApprovedForAll", [("owner", "address"), ("operator", "address")], ["bool"], VIEW),
    _fn("name", [], ["string"], VIEW),
    _fn("ownerOf", [("token_id", "uint256")], ["address"], VIEW),
    _fn("safeMint", [("to", "address"), ("token_id", "uint256")], [], NONPAYABLE),
    _fn(
        "safeTransferFrom",
        [("from", "address"), ("to", "address"), ("token_id", "uint256")],
        [],
        NONPAYABLE,
    ),
    _fn("setApprovalForAll", [("operator", "address"), ("approved", "bool")], [], NONPAYABLE),
    _fn("symbol", [], ["string"], VIEW),
    _fn("tokenUri", [("token_id", "uint256")], ["string"], VIEW),
    _fn(
        "transferFrom",
        [("from", "address"), ("to", "address"), ("token_id", "uint256")],
        [],
        NONPAYABLE,
    ),
)

NFT_ABI: Mapping[str, AbiFunction] = {f.name: f for f in _FUNCTIONS}


def lookup(name: str, abi: Mapping[str, AbiFunction] = NFT_ABI) -> AbiFunction:
    """Find a function by name; unknown names raise ``ContractCallError``."""
    try:
        return abi[name]
    except KeyError:
        raise ContractCallError(f"Function {name} not found in ABI") from None


def abi_json(abi: Mapping[str, AbiFunction] = NFT_ABI) -> list[dict[str, Any]]:
    """Solidity JSON ABI form of ``abi``, in declaration order."""
    return [f.to_json() for f in abi.values()]


def decode_revert(data: Optional[str]) -> Optional[str]:
    """
    Best-effort decoding of revert data for diagnostics.

    ``Error(string)`` payloads become their message; anything else is
    returned as-is (custom errors stay as raw hex).
    """
    if not data or not isinstance(data, str):
        return None
    try:
        raw = hex_to_bytes(data)
    except ValueError:
        # some nodes put a plain-text reason here
        return data
    if raw[:4] == _ERROR_STRING_SELECTOR:
        try:
            (message,) = decode(["string"], raw[4:])
            return message
        except DecodingError:
            return data
    return data


def parse_minted_token_id(receipt: Mapping[str, Any]) -> Optional[int]:
    """Parse the minted token ID from a confirmed mint receipt.

    ERC-721 minting emits Transfer(from, to, tokenId) with the zero
    address as ``from``.  The topic layout is:
        topics[0] = keccak256("Transfer(address,address,uint256)")
        topics[1] = from (zero address for mint)
        topics[2] = to
        topics[3] = tokenId

    Returns the tokenId as int, or None if not found.
    """
    zero_topic = "0x" + "0" * 24 + ZERO_ADDRESS[2:]

    for log in receipt.get("logs", []) or []:
        topics = log.get("topics", [])
        if (
            len(topics) >= 4
            and topics[0].lower() == TRANSFER_TOPIC
            and topics[1].lower() == zero_topic
        ):
            return int(topics[3], 16)

    return None

__all__ = [
    # Configuration
    "MintConfig",
    "DEFAULT_RPC_URL",
    "TOKEN_ID",
    # Workflow
    "MintReport",
    "run_mint",
    # Chain
    "AbiFunction",
    "AbiParam",
    "ContractBinding",
    "Ledger",
    "NFT_ABI",
    "RpcClient",
    "RpcLedger",
    "TxResult",
    # Errors
    "MintError",
    "ConfigurationError",
    "ConnectivityError",
    "ContractCallError",
    "TransactionError",
    "RpcError",
    # Signer
    "load_signer",
    "signer_address",
]

from .config import DEFAULT_RPC_URL, TOKEN_ID, MintConfig
from .errors import (
    ConfigurationError,
    ConnectivityError,
    ContractCallError,
    MintError,
    RpcError,
    TransactionError,
)
from .chain.abi import NFT_ABI, AbiFunction, AbiParam
from .chain.contract import ContractBinding
from .chain.ledger import Ledger, RpcLedger
from .chain.rpc import RpcClient
from .chain.tx import TxResult
from .wallet import load_signer, signer_address
from .workflow import MintReport, run_mint

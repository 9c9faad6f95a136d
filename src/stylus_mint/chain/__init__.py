"""
Chain - On-chain interaction layer for the mint workflow.

Provides the JSON-RPC session, the typed contract ABI, transaction
building/signing and the contract binding.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""

# Area: Chain
"""
Contract-call boundary.

This package contains:
- The abstract ContractGateway used by the rest of the library
- A web3.py implementation for EVM JSON-RPC nodes
- The contract ABI
"""

from .gateway import ContractGateway, RawGameInfo
from .web3_gateway import Web3ContractGateway, rejection_reason
from .abi import RPS_ABI, DEFAULT_CONTRACT_ADDRESS

__all__ = [
    "ContractGateway",
    "RawGameInfo",
    "Web3ContractGateway",
    "rejection_reason",
    "RPS_ABI",
    "DEFAULT_CONTRACT_ADDRESS",
]

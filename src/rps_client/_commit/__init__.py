# Area: Commit
"""
Commitment hashing for the commit-reveal protocol.

This package contains:
- keccak256 commitment hashing in the contract's byte encoding
- Salt generation
- Commitment model construction
"""

from .hash_committer import (
    commit_hash,
    encode_commitment,
    generate_salt,
    verify_commitment,
)
from .commitment import build_commitment

__all__ = [
    "commit_hash",
    "encode_commitment",
    "generate_salt",
    "verify_commitment",
    "build_commitment",
]

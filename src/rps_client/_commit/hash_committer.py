# Area: Commit
"""
rps_client._commit.hash_committer — Move commitment hashing
===========================================================

Produces the commitment hash the contract checks at reveal time.

Encoding (must match the contract bit-for-bit):
    keccak256( uint8(move) || utf8(salt) )

One byte holding the move, followed by the raw UTF-8 bytes of the
salt. No separators, no length prefixes. This is what Solidity's
``keccak256(abi.encodePacked(uint8 move, string salt))`` computes.
"""

from __future__ import annotations

import hmac
import secrets
import time
from typing import Union

from web3 import Web3

from ..enums import Move

# 128 bits of randomness, hex-encoded
SALT_ENTROPY_BYTES = 16


def encode_commitment(move: Union[Move, int], salt: str) -> bytes:
    """
    Build the exact byte string that gets hashed.

    Raises:
        ValueError: If move is not Rock/Paper/Scissors or salt is empty
    """
    value = int(move)
    if value not in (Move.ROCK, Move.PAPER, Move.SCISSORS):
        raise ValueError(f"Move must be 1 (Rock), 2 (Paper) or 3 (Scissors), got {value}")
    if not salt:
        raise ValueError("Salt must be a non-empty string")
    return value.to_bytes(1, "big") + salt.encode("utf-8")


def commit_hash(move: Union[Move, int], salt: str) -> bytes:
    """
    Compute the 32-byte commitment hash for (move, salt).

    Deterministic and side-effect free.
    """
    return bytes(Web3.keccak(encode_commitment(move, salt)))


def generate_salt() -> str:
    """
    Generate a fresh single-use salt.

    Random hex from ``secrets`` joined with the current time in
    milliseconds, so two salts differ even under a weak random source.
    """
    return f"{secrets.token_hex(SALT_ENTROPY_BYTES)}{int(time.time() * 1000)}"


def verify_commitment(expected_hash: bytes, move: Union[Move, int], salt: str) -> bool:
    """Check that (move, salt) reproduces expected_hash."""
    try:
        actual = commit_hash(move, salt)
    except ValueError:
        return False
    return hmac.compare_digest(actual, bytes(expected_hash))

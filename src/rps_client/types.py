"""
rps_client.types — Typed views of contract state and local secrets
==================================================================

Game is a read-only projection of one contract game record.
Commitment is the locally held secret for one (game, account) pair.

Both are immutable pydantic models; the repository builds Games from
raw ``getGameInfo`` tuples and the vault builds Commitments from rows.

    >>> game.status
    <GameStatus.OPEN: 'Open'>
    >>> game.is_owned_by(account)
    True
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from web3 import Web3

from .enums import GameStatus, Move

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def normalize_account(account: Optional[str]) -> Optional[str]:
    """Return the checksummed address, or None for empty/zero addresses."""
    if not account or int(account, 16) == 0:
        return None
    return Web3.to_checksum_address(account)


def same_account(a: Optional[str], b: Optional[str]) -> bool:
    """Case-insensitive address comparison; None never matches."""
    if not a or not b:
        return False
    return a.lower() == b.lower()


# ============================================
# Game
# ============================================

class Game(BaseModel):
    """Snapshot of one game as reported by the contract.

    Fields
    ------
    id : int
        Positive id, assigned by the contract in increasing order.
    player1 : str
        Creator's checksummed address.
    player2 : Optional[str]
        Second player's address; None until someone joins.
    bet_amount_wei : int
        Stake per player, in wei.
    status : GameStatus
        Open, Committed, Revealed or Finished.
    blocks_left : int
        Blocks until the contract may force a resolution.
    move1, move2 : Move
        Revealed moves; Move.NONE until revealed.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    player1: str
    player2: Optional[str] = None
    bet_amount_wei: int = Field(ge=0)
    status: GameStatus
    blocks_left: int = Field(default=0, ge=0)
    move1: Move = Move.NONE
    move2: Move = Move.NONE

    @field_validator("player1", mode="before")
    @classmethod
    def _checksum_player1(cls, value: str) -> str:
        address = normalize_account(value)
        if address is None:
            raise ValueError("player1 is unset; the game does not exist")
        return address

    @field_validator("player2", mode="before")
    @classmethod
    def _checksum_player2(cls, value: Optional[str]) -> Optional[str]:
        # A zero address means nobody has joined yet
        return normalize_account(value)

    @model_validator(mode="after")
    def _check_open_invariant(self) -> "Game":
        if self.status is GameStatus.OPEN:
            if self.player2 is not None:
                raise ValueError("Open game cannot have a second player")
            if self.move1 is not Move.NONE or self.move2 is not Move.NONE:
                raise ValueError("Open game cannot have revealed moves")
        return self

    @property
    def bet(self) -> Decimal:
        """Stake per player in ether."""
        return Decimal(Web3.from_wei(self.bet_amount_wei, "ether"))

    @property
    def has_opponent(self) -> bool:
        return self.player2 is not None

    def is_owned_by(self, account: Optional[str]) -> bool:
        """True if account created this game."""
        return same_account(self.player1, account)

    def involves(self, account: Optional[str]) -> bool:
        """True if account is player1 or player2."""
        return same_account(self.player1, account) or same_account(self.player2, account)

    def slot_of(self, account: Optional[str]) -> Optional[int]:
        """Return 1 or 2 for a participant, None otherwise."""
        if same_account(self.player1, account):
            return 1
        if same_account(self.player2, account):
            return 2
        return None

    def move_of(self, account: Optional[str]) -> Move:
        """Revealed move of account, Move.NONE if not revealed or not playing."""
        slot = self.slot_of(account)
        if slot == 1:
            return self.move1
        if slot == 2:
            return self.move2
        return Move.NONE


# ============================================
# Commitment
# ============================================

class Commitment(BaseModel):
    """A pending secret: the move and salt behind an on-chain hash.

    Fields
    ------
    game_id : int
        Game the commitment was submitted to.
    account : str
        Account that submitted it.
    move : Move
        The real choice (Rock, Paper or Scissors).
    salt : str
        Single-use random text mixed into the hash.
    """

    model_config = ConfigDict(frozen=True)

    game_id: int = Field(gt=0)
    account: str = Field(min_length=1)
    move: Move
    salt: str = Field(min_length=1)

    @field_validator("move")
    @classmethod
    def _playable_move(cls, value: Move) -> Move:
        if value not in Move.playable():
            raise ValueError("Only Rock, Paper or Scissors can be committed")
        return value

    @property
    def hash(self) -> bytes:
        """32-byte keccak256 commitment, as submitted on chain."""
        from ._commit.hash_committer import commit_hash
        return commit_hash(self.move, self.salt)

    @property
    def hash_hex(self) -> str:
        return "0x" + self.hash.hex()

# Area: Shared
"""
rps_client.enums — Move and game status vocabulary
==================================================

Both enums mirror the integer encodings used by the contract, so
values read from chain can be converted without a lookup table.
"""

from enum import Enum, IntEnum


class Move(IntEnum):
    """
    A Rock-Paper-Scissors move.

    NONE is what the contract reports until the move is revealed.
    Only ROCK, PAPER and SCISSORS can be committed.
    """
    NONE = 0
    ROCK = 1
    PAPER = 2
    SCISSORS = 3

    @classmethod
    def playable(cls) -> tuple:
        return (cls.ROCK, cls.PAPER, cls.SCISSORS)


class GameStatus(Enum):
    """
    Lifecycle status of a game as reported by the contract.

    The contract stores it as uint8 in declaration order:
    Open (0) -> Committed (1) -> Revealed (2) -> Finished (3)

    Committed means both players have joined and at least one has not
    committed yet; the name follows the contract's vocabulary.
    """
    OPEN = "Open"
    COMMITTED = "Committed"
    REVEALED = "Revealed"
    FINISHED = "Finished"

    @classmethod
    def from_index(cls, index: int) -> "GameStatus":
        """Convert the contract's uint8 status to a GameStatus."""
        members = list(cls)
        if not 0 <= index < len(members):
            raise ValueError(f"Unknown game status index: {index}")
        return members[index]

    @property
    def rank(self) -> int:
        """Position in the lifecycle; higher is further along."""
        return list(GameStatus).index(self)

    @property
    def is_terminal(self) -> bool:
        return self is GameStatus.FINISHED

# Area: Chain
"""
rps_client._chain.gateway — Contract-call boundary
==================================================

Abstract base class for everything that talks to the RPS contract.
GameRepository reads through it, GameActions submits through it.

State-changing calls return only after the submission is confirmed
and raise SubmissionRejectedError with the boundary's reason text when
it is declined. Read calls raise whatever the transport raises; the
repository decides what to swallow.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple


# (player1, player2, betAmount, status, blocksLeft[, move1, move2])
RawGameInfo = Tuple


class ContractGateway(ABC):
    """
    Boundary to the on-chain Rock-Paper-Scissors contract.

    Implementations are bound to one signing account.
    """

    @property
    @abstractmethod
    def account(self) -> str:
        """Address that signs state-changing submissions."""

    # ── State-changing calls ───────────────────────────────────

    @abstractmethod
    async def create_game(self, value_wei: int) -> Optional[int]:
        """
        Create a game funded with value_wei.

        Returns:
            The new game id, or None if the confirmation did not carry one
        """

    @abstractmethod
    async def join_game(self, game_id: int, value_wei: int) -> None:
        """Join game_id, paying exactly its stake."""

    @abstractmethod
    async def commit_move(self, game_id: int, commitment_hash: bytes) -> None:
        """Submit the 32-byte commitment hash."""

    @abstractmethod
    async def reveal_move(self, game_id: int, move: int, salt: str) -> None:
        """Disclose the move and salt behind the earlier commitment."""

    # ── Read calls ─────────────────────────────────────────────

    @abstractmethod
    async def get_open_games(self) -> Sequence[int]:
        """Ids of games waiting for a second player."""

    @abstractmethod
    async def get_game_info(self, game_id: int) -> RawGameInfo:
        """Raw game record tuple."""

    @abstractmethod
    async def game_counter(self) -> int:
        """Highest assigned game id; upper bound for full scans."""

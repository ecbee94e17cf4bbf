# Area: Games
"""
rps_client._games.actions — State-changing game actions
=======================================================

Orchestrates create, join, commit and reveal:

1. Check local preconditions against the current snapshot
2. Submit through the contract-call boundary
3. Persist or erase the secret (commit / reveal only)
4. Refresh the snapshot

Rejections from the boundary propagate unchanged. Once a submission
has been handed to the boundary it runs to completion even if the
caller stops waiting; its outcome still lands in the vault and the
next reconciliation.

The commit secret is written only after the commit is accepted. A
failed commit leaves the vault untouched and a retry builds a new salt.
"""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Awaitable, Callable, Optional, Set, Tuple, Union

from web3 import Web3

from .._commit.commitment import build_commitment
from ..enums import Move
from ..errors import (
    DuplicateSubmissionError,
    GameNotFoundError,
    MissingSecretError,
    NoMoveSelectedError,
    SubmissionUnconfirmedError,
)
from ..types import Commitment, Game
from .lifecycle import GameAction, check_action
from .poller import LifecyclePoller
from .state import AppState

logger = logging.getLogger("rps_client.actions")

SubmissionKey = Tuple[str, Optional[int]]


def to_wei(bet: Union[Decimal, str, int, float]) -> int:
    """
    Convert an ether amount to wei.

    Raises:
        ValueError: If bet is not a non-negative number
    """
    try:
        amount = Decimal(str(bet))
    except InvalidOperation as e:
        raise ValueError(f"Invalid bet amount: {bet!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid bet amount: {bet!r}")
    if amount < 0:
        raise ValueError(f"Bet amount cannot be negative: {bet!r}")
    return int(Web3.to_wei(amount, "ether"))


def _log_abandoned(task: "asyncio.Task") -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.warning(f"Abandoned submission finished with error: {error}")
    else:
        logger.info("Abandoned submission completed")


class GameActions:
    """
    Write side of the client for one account.

    Args:
        state: Shared application state
        poller: Poller refreshed after every confirmed submission
    """

    def __init__(self, state: AppState, poller: LifecyclePoller):
        self.state = state
        self.poller = poller
        self._in_flight: Set[SubmissionKey] = set()

    @property
    def account(self) -> str:
        return self.state.account

    # ── Actions ────────────────────────────────────────────────

    async def create_game(self, bet: Union[Decimal, str, int, float]) -> Optional[int]:
        """
        Create a game staking bet (in ether).

        Returns:
            New game id if the boundary reported one
        """
        value_wei = to_wei(bet)

        async def work() -> Optional[int]:
            game_id = await self.state.gateway.create_game(value_wei)
            logger.info(f"Game {game_id} created with bet {bet}")
            await self.poller.refresh()
            return game_id

        return await self._submit("create", None, work)

    async def join_game(self, game_id: int) -> None:
        """
        Join game_id with exactly its stake from the current snapshot.

        Raises:
            GameNotFoundError: If the game is not in the snapshot
            ActionNotAllowedError: If the game cannot be joined by this account
        """
        game = self._require_game(game_id)
        check_action(game, self.account, GameAction.JOIN)

        async def work() -> None:
            await self.state.gateway.join_game(game_id, game.bet_amount_wei)
            logger.info(f"Joined game {game_id} with {game.bet} ETH")
            await self.poller.refresh()

        await self._submit(GameAction.JOIN.value, game_id, work)

    async def commit_move(self, game_id: int, move: Optional[Union[Move, int]]) -> Commitment:
        """
        Commit to move for game_id.

        Raises:
            NoMoveSelectedError: If move is None or Move.NONE
            GameNotFoundError: If the game is not in the snapshot
            ActionNotAllowedError: If committing is not legal now
        """
        if move is None or int(move) == Move.NONE:
            raise NoMoveSelectedError(game_id)
        game = self._require_game(game_id)
        check_action(game, self.account, GameAction.COMMIT)
        commitment = build_commitment(game_id, self.account, move)

        async def work() -> Commitment:
            try:
                await self.state.gateway.commit_move(game_id, commitment.hash)
            except SubmissionUnconfirmedError:
                # Broadcast was accepted; keep the secret in case it confirms
                self._store(commitment)
                raise
            self._store(commitment)
            logger.info(f"Committed to game {game_id}: {commitment.hash_hex}")
            await self.poller.refresh()
            return commitment

        return await self._submit(GameAction.COMMIT.value, game_id, work)

    async def reveal_move(self, game_id: int) -> Commitment:
        """
        Reveal the stored move and salt for game_id.

        Raises:
            GameNotFoundError: If the game is not in the snapshot
            ActionNotAllowedError: If revealing is not legal now
            MissingSecretError: If no secret is stored for this game
        """
        game = self._require_game(game_id)
        check_action(game, self.account, GameAction.REVEAL)
        secret = self.state.vault.get(game_id, self.account)
        if secret is None:
            raise MissingSecretError(game_id, self.account)

        async def work() -> Commitment:
            await self.state.gateway.reveal_move(game_id, int(secret.move), secret.salt)
            self.state.vault.remove(game_id, self.account)
            logger.info(f"Revealed {secret.move.name} for game {game_id}")
            await self.poller.refresh()
            return secret

        return await self._submit(GameAction.REVEAL.value, game_id, work)

    # ── Internals ──────────────────────────────────────────────

    def _require_game(self, game_id: int) -> Game:
        game = self.state.snapshot.find(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        return game

    def _store(self, commitment: Commitment) -> None:
        self.state.vault.put(
            commitment.game_id, self.account, commitment.move, commitment.salt
        )

    async def _submit(
        self,
        action: str,
        game_id: Optional[int],
        work: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Run work once per (action, game_id), shielded from caller cancellation."""
        key = (action, game_id)
        if key in self._in_flight:
            raise DuplicateSubmissionError(action, game_id)
        self._in_flight.add(key)
        task = asyncio.ensure_future(self._guarded(key, work))
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            logger.info(f"Stopped waiting for {action} on game {game_id}; submission continues")
            task.add_done_callback(_log_abandoned)
            raise

    async def _guarded(self, key: SubmissionKey, work: Callable[[], Awaitable[Any]]) -> Any:
        try:
            return await work()
        finally:
            self._in_flight.discard(key)

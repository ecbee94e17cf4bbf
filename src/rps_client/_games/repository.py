# Area: Games
"""
rps_client._games.repository — Game Repository
===============================================

Reconciles raw contract records into typed Game snapshots.

Listings are best effort: a record that fails to fetch, is malformed
or does not resolve to a game (zero player1) is dropped and logged,
never raised. Only a failure of the id listing itself propagates.
Results keep the order in which ids were discovered.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional

from .._chain.gateway import ContractGateway, RawGameInfo
from ..enums import GameStatus, Move
from ..types import Game

logger = logging.getLogger("rps_client.repository")

DEFAULT_MAX_CONCURRENT_FETCHES = 8


def parse_game(game_id: int, raw: RawGameInfo) -> Game:
    """
    Build a Game from a getGameInfo tuple.

    Accepts the seven-field record
    (player1, player2, betAmount, status, blocksLeft, move1, move2)
    and the older five-field one without moves.

    Raises:
        ValueError: If the record is malformed or names no game
    """
    if len(raw) not in (5, 7):
        raise ValueError(f"Expected 5 or 7 fields, got {len(raw)}")
    player1, player2, bet_amount, status, blocks_left = raw[:5]
    move1, move2 = (raw[5], raw[6]) if len(raw) == 7 else (Move.NONE, Move.NONE)
    return Game(
        id=game_id,
        player1=player1,
        player2=player2,
        bet_amount_wei=int(bet_amount),
        status=GameStatus.from_index(int(status)),
        blocks_left=int(blocks_left),
        move1=Move(int(move1)),
        move2=Move(int(move2)),
    )


class GameRepository:
    """
    Read side of the contract.

    Args:
        gateway: Contract-call boundary
        max_concurrent_fetches: Upper bound on parallel getGameInfo calls
    """

    def __init__(
        self,
        gateway: ContractGateway,
        max_concurrent_fetches: int = DEFAULT_MAX_CONCURRENT_FETCHES,
    ):
        self.gateway = gateway
        self.max_concurrent_fetches = max(1, max_concurrent_fetches)

    async def get_game(self, game_id: int) -> Optional[Game]:
        """
        Fetch and parse one game.

        Returns:
            Game, or None if the record could not be fetched or parsed
        """
        try:
            raw = await self.gateway.get_game_info(game_id)
        except Exception as e:
            logger.debug(f"Dropping game {game_id}: fetch failed: {e}")
            return None
        try:
            return parse_game(game_id, raw)
        except (ValueError, TypeError) as e:
            logger.debug(f"Dropping game {game_id}: unusable record: {e}")
            return None

    async def get_games(self, game_ids: Iterable[int]) -> List[Game]:
        """Fetch several games concurrently, keeping the given order."""
        ids = list(dict.fromkeys(int(i) for i in game_ids))
        semaphore = asyncio.Semaphore(self.max_concurrent_fetches)

        async def fetch(game_id: int) -> Optional[Game]:
            async with semaphore:
                return await self.get_game(game_id)

        games = await asyncio.gather(*(fetch(game_id) for game_id in ids))
        return [game for game in games if game is not None]

    async def open_game_ids(self) -> List[int]:
        """Ids the contract lists as waiting for a second player."""
        return [int(i) for i in await self.gateway.get_open_games()]

    async def list_open_games(self) -> List[Game]:
        """
        Every game currently waiting for a second player.

        The caller's own open games are included; use
        ``Game.is_owned_by`` to flag them.
        """
        ids = await self.open_game_ids()
        games = await self.get_games(ids)
        open_games = [game for game in games if game.status is GameStatus.OPEN]
        logger.debug(f"Open games: {len(open_games)} of {len(ids)} listed")
        return open_games

    async def list_all_games(self) -> List[Game]:
        """Every resolvable game, ids 1..gameCounter() inclusive."""
        counter = await self.gateway.game_counter()
        return await self.get_games(range(1, counter + 1))

    async def list_my_games(self, account: str) -> List[Game]:
        """
        Every game, any status, where account is player1 or player2.

        Scans ids 1..gameCounter() inclusive.
        """
        games = await self.list_all_games()
        mine = [game for game in games if game.involves(account)]
        logger.debug(f"Games for {account}: {len(mine)} of {len(games)} scanned")
        return mine

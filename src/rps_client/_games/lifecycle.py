# Area: Games
"""
rps_client._games.lifecycle — Game lifecycle gating
===================================================

The contract owns every transition. This module only observes the
reported status and decides which actions are worth submitting.

Open      -> join (non-owner)
Committed -> commit (participant)
Revealed  -> reveal (participant who has not revealed, blocks_left > 0)
Finished  -> nothing

blocks_left == 0 in Committed or Revealed means the contract is about
to force a resolution; submissions are refused locally and the caller
is told why.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from ..enums import GameStatus, Move
from ..errors import ActionNotAllowedError, TimeoutImminentError
from ..types import Game

logger = logging.getLogger("rps_client.lifecycle")


class GameAction(Enum):
    """Per-game actions a player can submit."""
    JOIN = "join"
    COMMIT = "commit"
    REVEAL = "reveal"


# Legal actions per status: {status: {actions}}
LEGAL_ACTIONS: Dict[GameStatus, FrozenSet[GameAction]] = {
    GameStatus.OPEN: frozenset({GameAction.JOIN}),
    GameStatus.COMMITTED: frozenset({GameAction.COMMIT}),
    GameStatus.REVEALED: frozenset({GameAction.REVEAL}),
    GameStatus.FINISHED: frozenset(),
}

# Statuses where blocks_left counts down to a forced resolution
TIMED_STATUSES = frozenset({GameStatus.COMMITTED, GameStatus.REVEALED})


def check_action(game: Game, account: str, action: GameAction) -> None:
    """
    Validate that account may submit action on game right now.

    Args:
        game: Latest known snapshot of the game
        account: Acting account
        action: Action about to be submitted

    Raises:
        ActionNotAllowedError: If the status or the account's role forbids it
        TimeoutImminentError: If no blocks are left before forced resolution
    """
    status = game.status.value
    if action not in LEGAL_ACTIONS[game.status]:
        raise ActionNotAllowedError(game.id, action.value, status)

    if action is GameAction.JOIN:
        if game.is_owned_by(account):
            raise ActionNotAllowedError(
                game.id, action.value, status, detail="you created this game"
            )
        return

    if not game.involves(account):
        raise ActionNotAllowedError(
            game.id, action.value, status, detail="account is not a player in this game"
        )

    if game.status in TIMED_STATUSES and game.blocks_left == 0:
        raise TimeoutImminentError(game.id, action.value, status)

    if action is GameAction.REVEAL and game.move_of(account) is not Move.NONE:
        raise ActionNotAllowedError(
            game.id, action.value, status, detail="move already revealed"
        )


def allowed_actions(game: Game, account: str, has_secret: bool = False) -> Set[GameAction]:
    """
    Actions the presentation layer should offer for game.

    has_secret hides COMMIT once this device already holds a commitment
    for the game.
    """
    allowed = set()
    for action in LEGAL_ACTIONS[game.status]:
        try:
            check_action(game, account, action)
        except ActionNotAllowedError:
            continue
        allowed.add(action)
    if has_secret:
        allowed.discard(GameAction.COMMIT)
    return allowed


@dataclass(frozen=True)
class StatusChange:
    """A forward status change observed between two reconciliations."""

    game_id: int
    previous: Optional[GameStatus]
    current: GameStatus


class LifecycleTracker:
    """
    Remembers the furthest status seen for each game.

    A lagging node can answer with an older status than one already
    observed; such records are replaced with the last known game.
    """

    def __init__(self) -> None:
        self._known: Dict[int, Game] = {}

    def observe(self, game: Game) -> Tuple[Game, Optional[StatusChange]]:
        """
        Record game and return (game to display, change or None).
        """
        known = self._known.get(game.id)
        if known is not None and game.status.rank < known.status.rank:
            logger.warning(
                "Stale record for game %s: %s after %s, keeping last known",
                game.id, game.status.value, known.status.value,
            )
            return known, None

        self._known[game.id] = game
        if known is None or known.status is not game.status:
            previous = known.status if known is not None else None
            return game, StatusChange(game.id, previous, game.status)
        return game, None

    def reconcile(self, games: Iterable[Game]) -> Tuple[List[Game], List[StatusChange]]:
        """Observe a batch, keeping its order."""
        result: List[Game] = []
        changes: List[StatusChange] = []
        for game in games:
            shown, change = self.observe(game)
            result.append(shown)
            if change is not None:
                changes.append(change)
        return result, changes

    def last_known(self, game_id: int) -> Optional[Game]:
        return self._known.get(game_id)

    def reset(self) -> None:
        """Forget everything observed so far."""
        self._known.clear()

# Area: Games
"""
rps_client._games.state — Explicit application state
=====================================================

AppState is passed by reference to every component instead of living
in a global. The poller replaces only ``snapshot``; GameActions only
touches the vault and the gateway.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from .._chain.gateway import ContractGateway
from .._vault.secret_vault import SecretVault
from ..types import Game


@dataclass(frozen=True)
class GameSnapshot:
    """
    Last reconciled view of the contract.

    Attributes:
        open_games: Games waiting for a second player, discovery order
        my_games: Every game the account plays in, by id
        refreshed_at: UTC time of the last successful reconciliation
        refreshing: True while a reconciliation is in flight
        last_error: Message of the last failed reconciliation, if any
    """

    open_games: Tuple[Game, ...] = ()
    my_games: Tuple[Game, ...] = ()
    refreshed_at: Optional[datetime] = None
    refreshing: bool = False
    last_error: Optional[str] = None

    def find(self, game_id: int) -> Optional[Game]:
        """Look a game up in either listing."""
        for game in self.my_games + self.open_games:
            if game.id == game_id:
                return game
        return None


@dataclass
class AppState:
    """Shared state for one connected account."""

    account: str
    gateway: ContractGateway
    vault: SecretVault
    snapshot: GameSnapshot = field(default_factory=GameSnapshot)

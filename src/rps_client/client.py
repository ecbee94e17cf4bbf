# Area: Client
"""
rps_client.client — Client facade
=================================

Wires gateway, vault, repository, poller and actions for one account.
This is the object a presentation layer holds on to.

    client = RPSClient(load_config(".env.json"))
    async with client:
        game_id = await client.create_game("0.001")
        ...
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Set

from ._chain.gateway import ContractGateway
from ._chain.web3_gateway import Web3ContractGateway
from ._config import DEFAULT_CONFIG, load_config, validate_config
from ._games.actions import GameActions
from ._games.lifecycle import GameAction, allowed_actions
from ._games.poller import ChangeListener, LifecyclePoller
from ._games.repository import GameRepository
from ._games.state import AppState, GameSnapshot
from ._shared import setup_logging
from ._vault.secret_vault import SecretVault
from .enums import Move
from .errors import GameNotFoundError
from .types import Commitment, Game

logger = logging.getLogger("rps_client")


class RPSClient:
    """
    Commit-reveal Rock-Paper-Scissors client for one account.

    Args:
        config: Configuration dict (see ``load_config``)
        gateway: Contract boundary; built from config when None
        vault: Secret store; built from ``vault_path`` when None
    """

    def __init__(
        self,
        config: Dict[str, Any],
        gateway: Optional[ContractGateway] = None,
        vault: Optional[SecretVault] = None,
    ):
        self.config = {**DEFAULT_CONFIG, **config}

        if self.config.get("configure_logging", True):
            setup_logging(log_file_path=self.config.get("log_file"))

        if gateway is None:
            validate_config(self.config)
            gateway = Web3ContractGateway(
                rpc_url=self.config["rpc_url"],
                contract_address=self.config["contract_address"],
                private_key=self.config["private_key"],
                chain_id=self.config.get("chain_id"),
                receipt_timeout=self.config["receipt_timeout_seconds"],
            )
        self.gateway = gateway
        self.vault = vault or SecretVault(self.config["vault_path"])

        self.state = AppState(account=gateway.account, gateway=gateway, vault=self.vault)
        self.repository = GameRepository(
            gateway, max_concurrent_fetches=int(self.config["max_concurrent_fetches"])
        )
        self.poller = LifecyclePoller(
            self.state,
            self.repository,
            interval_seconds=float(self.config["poll_interval_seconds"]),
        )
        self.actions = GameActions(self.state, self.poller)

    @classmethod
    def from_config_file(cls, config_path: Optional[str] = None, **kwargs: Any) -> "RPSClient":
        """Build a client from a JSON file plus environment overrides."""
        return cls(load_config(config_path), **kwargs)

    # ── Lifecycle ──────────────────────────────────────────────

    async def start(self) -> GameSnapshot:
        """Run a first reconciliation and start polling."""
        self._log_startup()
        snapshot = await self.poller.refresh()
        self.poller.start()
        return snapshot

    async def stop(self) -> None:
        await self.poller.stop()
        logger.info("RPS client stopped.")

    async def __aenter__(self) -> "RPSClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()

    def _log_startup(self) -> None:
        """Log startup information."""
        logger.info("=" * 60)
        logger.info("  RPS Client — Starting")
        logger.info(f"  Account:  {self.account}")
        logger.info(f"  Contract: {self.config.get('contract_address', 'N/A')}")
        logger.info(f"  Poll:     every {self.poller.interval_seconds}s")
        logger.info("=" * 60)

    # ── Read side ──────────────────────────────────────────────

    @property
    def account(self) -> str:
        return self.state.account

    @property
    def snapshot(self) -> GameSnapshot:
        return self.state.snapshot

    async def refresh(self) -> GameSnapshot:
        return await self.poller.refresh()

    def on_status_change(self, listener: ChangeListener) -> None:
        self.poller.add_listener(listener)

    def pending_reveals(self) -> List[Commitment]:
        """Secrets stored on this device for the current account."""
        return self.vault.list_pending(self.account)

    def allowed_actions(self, game_id: int) -> Set[GameAction]:
        """Actions worth offering for game_id right now."""
        game = self.snapshot.find(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        return allowed_actions(game, self.account, self.vault.has(game_id, self.account))

    # ── Write side ─────────────────────────────────────────────

    async def create_game(self, bet: Any = None) -> Optional[int]:
        return await self.actions.create_game(bet if bet is not None else self.config["default_bet"])

    async def join_game(self, game_id: int) -> None:
        await self.actions.join_game(game_id)

    async def commit_move(self, game_id: int, move: Optional[Move]) -> Commitment:
        return await self.actions.commit_move(game_id, move)

    async def reveal_move(self, game_id: int) -> Commitment:
        return await self.actions.reveal_move(game_id)

    def find_game(self, game_id: int) -> Optional[Game]:
        return self.snapshot.find(game_id)

"""
rps_client — Commit-reveal Rock-Paper-Scissors client
=====================================================

Client-side protocol engine for on-chain Rock-Paper-Scissors: builds
binding move commitments, keeps the reveal secret on disk, polls the
contract into a local snapshot and gates actions by game status.

Quick Start:
    from rps_client import RPSClient, Move, load_config
    client = RPSClient(load_config("config.json"))
    async with client:
        game_id = await client.create_game("0.001")
        ...                                  # wait for an opponent
        await client.commit_move(game_id, Move.ROCK)
        ...                                  # wait for both commits
        await client.reveal_move(game_id)

Payout, winner determination and hash verification belong to the
contract; this package only prepares its inputs and shows its state.
"""

from .client import RPSClient
from ._config import load_config, validate_config
from ._commit import build_commitment, commit_hash, generate_salt, verify_commitment
from ._chain import ContractGateway, Web3ContractGateway
from ._games import (
    AppState,
    GameAction,
    GameActions,
    GameRepository,
    GameSnapshot,
    LifecyclePoller,
    LifecycleTracker,
    StatusChange,
    allowed_actions,
    check_action,
)
from ._shared import setup_logging
from ._vault import SecretVault
from .enums import GameStatus, Move
from .errors import (
    RPSClientError,
    SubmissionRejectedError,
    SubmissionUnconfirmedError,
    MissingSecretError,
    ActionNotAllowedError,
    TimeoutImminentError,
    GameNotFoundError,
    NoMoveSelectedError,
    DuplicateSubmissionError,
)
from .types import Commitment, Game

__all__ = [
    # Main classes
    "RPSClient",
    "load_config",
    "validate_config",
    "setup_logging",
    # Components
    "ContractGateway",
    "Web3ContractGateway",
    "SecretVault",
    "GameRepository",
    "LifecyclePoller",
    "LifecycleTracker",
    "GameActions",
    "AppState",
    "GameSnapshot",
    "StatusChange",
    "GameAction",
    "allowed_actions",
    "check_action",
    # Commitments
    "commit_hash",
    "generate_salt",
    "build_commitment",
    "verify_commitment",
    # Types
    "Game",
    "Commitment",
    "GameStatus",
    "Move",
    # Errors
    "RPSClientError",
    "SubmissionRejectedError",
    "SubmissionUnconfirmedError",
    "MissingSecretError",
    "ActionNotAllowedError",
    "TimeoutImminentError",
    "GameNotFoundError",
    "NoMoveSelectedError",
    "DuplicateSubmissionError",
]
__version__ = "1.0.0"

# Area: Games
"""
Game lifecycle tracking and actions.

This package contains:
- GameRepository: reconciles contract records into Game snapshots
- Lifecycle gating and status tracking
- LifecyclePoller: periodic, non-overlapping reconciliation
- GameActions: create / join / commit / reveal
"""

from .state import AppState, GameSnapshot
from .lifecycle import (
    GameAction,
    LEGAL_ACTIONS,
    LifecycleTracker,
    StatusChange,
    allowed_actions,
    check_action,
)
from .repository import GameRepository, parse_game
from .poller import LifecyclePoller
from .actions import GameActions, to_wei

__all__ = [
    "AppState",
    "GameSnapshot",
    "GameAction",
    "LEGAL_ACTIONS",
    "LifecycleTracker",
    "StatusChange",
    "allowed_actions",
    "check_action",
    "GameRepository",
    "parse_game",
    "LifecyclePoller",
    "GameActions",
    "to_wei",
]

# Area: Shared
"""
rps_client.errors — Custom exception classes
============================================

Defines the exception hierarchy surfaced to the presentation layer.
Each exception stores its context so the UI can render it or log it
without parsing the message text.
"""

from __future__ import annotations
from typing import Any, Dict, Optional


class RPSClientError(Exception):
    """Base exception for all rps_client errors."""

    error_type = "RPS_CLIENT_ERROR"

    def to_dict(self) -> Dict[str, Any]:
        return {"error_type": self.error_type, "message": str(self)}


class SubmissionRejectedError(RPSClientError):
    """Raised when the contract-call boundary declines a state-changing request.

    ``reason`` is the boundary's rejection text, unmodified.
    """

    error_type = "SUBMISSION_REJECTED"

    def __init__(self, action: str, reason: str, game_id: Optional[int] = None):
        self.action = action
        self.reason = reason
        self.game_id = game_id
        super().__init__(reason)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({"action": self.action, "reason": self.reason, "game_id": self.game_id})
        return data


class MissingSecretError(RPSClientError):
    """Raised when a reveal is attempted with no stored commitment."""

    error_type = "MISSING_SECRET"

    def __init__(self, game_id: int, account: str):
        self.game_id = game_id
        self.account = account
        super().__init__(
            f"No stored move/salt for game {game_id} and account {account}; "
            "the commitment cannot be revealed from this device"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({"game_id": self.game_id, "account": self.account})
        return data


class ActionNotAllowedError(RPSClientError):
    """Raised when an action is not legal for the game's current status."""

    error_type = "ACTION_NOT_ALLOWED"

    def __init__(self, game_id: int, action: str, status: str, detail: str = ""):
        self.game_id = game_id
        self.action = action
        self.status = status
        self.detail = detail
        message = f"Cannot {action} game {game_id} while it is {status}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "game_id": self.game_id,
            "action": self.action,
            "status": self.status,
            "detail": self.detail,
        })
        return data


class TimeoutImminentError(ActionNotAllowedError):
    """Raised when blocks_left reached zero; the contract will likely reject."""

    error_type = "TIMEOUT_IMMINENT"

    def __init__(self, game_id: int, action: str, status: str):
        super().__init__(
            game_id, action, status,
            detail="no blocks left before forced resolution",
        )


class GameNotFoundError(RPSClientError):
    """Raised when a game is not present in the current snapshot."""

    error_type = "GAME_NOT_FOUND"

    def __init__(self, game_id: int):
        self.game_id = game_id
        super().__init__(f"Game {game_id} is not in the current snapshot")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["game_id"] = self.game_id
        return data


class NoMoveSelectedError(RPSClientError):
    """Raised when commit is requested without a move."""

    error_type = "NO_MOVE_SELECTED"

    def __init__(self, game_id: int):
        self.game_id = game_id
        super().__init__(f"Select Rock, Paper or Scissors before committing to game {game_id}")


class DuplicateSubmissionError(RPSClientError):
    """Raised when the same action for the same game is already in flight."""

    error_type = "DUPLICATE_SUBMISSION"

    def __init__(self, action: str, game_id: Optional[int]):
        self.action = action
        self.game_id = game_id
        super().__init__(f"A {action} for game {game_id} is already pending")


class SubmissionUnconfirmedError(RPSClientError):
    """Raised when a submission was broadcast but its receipt did not arrive in time.

    The state change may still be confirmed later; the next
    reconciliation picks it up.
    """

    error_type = "SUBMISSION_UNCONFIRMED"

    def __init__(self, action: str, tx_hash: str, game_id: Optional[int] = None):
        self.action = action
        self.tx_hash = tx_hash
        self.game_id = game_id
        super().__init__(f"{action} for game {game_id} sent as {tx_hash} but not confirmed yet")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({"action": self.action, "tx_hash": self.tx_hash, "game_id": self.game_id})
        return data

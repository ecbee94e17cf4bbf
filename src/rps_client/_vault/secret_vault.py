# Area: Vault
"""
rps_client._vault.secret_vault — Pending Secret Repository
==========================================================

Durable store for the {move, salt} pair behind each on-chain
commitment, keyed by (game_id, account). The secret must outlive the
process: the reveal may happen many blocks after the commit.

Last writer wins. A missing secret makes the reveal impossible for
that game; callers turn None from get() into a user-visible error.
"""

import logging
import sqlite3
from typing import List, Optional, Union

from ..enums import Move
from ..types import Commitment
from .database import DEFAULT_DB_PATH, connect, init_database

logger = logging.getLogger("rps_client.vault")


def _account_key(account: str) -> str:
    # Checksummed and lowercase forms of an address share one row
    return account.lower()


def _to_commitment(row: sqlite3.Row, account: str) -> Commitment:
    return Commitment(
        game_id=row["game_id"],
        account=account,
        move=Move(row["move"]),
        salt=row["salt"],
    )


class SecretVault:
    """
    Repository for the pending_secrets table.

    Handles storing, retrieving and erasing commitment secrets.

    Args:
        db_path: SQLite file; created with its schema unless initialize is False
        initialize: Run the schema script on construction
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH, initialize: bool = True):
        self.db_path = db_path
        if initialize:
            init_database(db_path)

    def put(self, game_id: int, account: str, move: Union[Move, int], salt: str) -> None:
        """
        Store the secret for (game_id, account), replacing any previous one.

        Args:
            game_id: Game the commitment belongs to
            account: Committing account
            move: Committed move (1-3)
            salt: Salt used in the commitment hash
        """
        commitment = Commitment(game_id=game_id, account=account, move=Move(int(move)), salt=salt)
        query = """
            INSERT OR REPLACE INTO pending_secrets
            (game_id, account_id, move, salt)
            VALUES (?, ?, ?, ?)
        """
        with connect(self.db_path) as conn:
            conn.execute(
                query,
                (commitment.game_id, _account_key(account), int(commitment.move), commitment.salt),
            )
        logger.debug("Stored secret for game %s / %s", game_id, account)

    def get(self, game_id: int, account: str) -> Optional[Commitment]:
        """
        Get the stored secret.

        Args:
            game_id: Game identifier
            account: Account identifier

        Returns:
            Commitment, or None if nothing is stored
        """
        query = """
            SELECT game_id, move, salt FROM pending_secrets
            WHERE game_id = ? AND account_id = ?
        """
        with connect(self.db_path) as conn:
            row = conn.execute(query, (game_id, _account_key(account))).fetchone()
        if row is None:
            return None
        return _to_commitment(row, account)

    def has(self, game_id: int, account: str) -> bool:
        """True if a secret is stored for (game_id, account)."""
        query = "SELECT 1 FROM pending_secrets WHERE game_id = ? AND account_id = ?"
        with connect(self.db_path) as conn:
            return conn.execute(query, (game_id, _account_key(account))).fetchone() is not None

    def remove(self, game_id: int, account: str) -> None:
        """Erase the secret. No-op if not found."""
        query = "DELETE FROM pending_secrets WHERE game_id = ? AND account_id = ?"
        with connect(self.db_path) as conn:
            conn.execute(query, (game_id, _account_key(account)))
        logger.debug("Removed secret for game %s / %s", game_id, account)

    def list_pending(self, account: str) -> List[Commitment]:
        """
        Get every stored secret for an account.

        Returns:
            Commitments ordered by game id
        """
        query = """
            SELECT game_id, move, salt FROM pending_secrets
            WHERE account_id = ?
            ORDER BY game_id
        """
        with connect(self.db_path) as conn:
            rows = conn.execute(query, (_account_key(account),)).fetchall()
        return [_to_commitment(row, account) for row in rows]

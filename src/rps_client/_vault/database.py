# Area: Vault
"""
rps_client._vault.database — Vault file access
==============================================

Opens the SQLite file that holds pending secrets. Each unit of work
gets its own connection, committed before it closes, so a secret is
on disk by the time ``put`` returns. Several client processes may
share one vault file; writers wait on each other's locks.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger("rps_client.vault.database")

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

DEFAULT_DB_PATH = "rps_vault.db"

# Seconds to wait for a lock held by another process
BUSY_TIMEOUT_SECONDS = 5.0


@contextmanager
def connect(db_path: str = DEFAULT_DB_PATH) -> Iterator[sqlite3.Connection]:
    """
    Open the vault for one unit of work.

    Commits when the block exits cleanly, rolls back when it raises,
    and always closes the connection.
    """
    conn = sqlite3.connect(db_path, timeout=BUSY_TIMEOUT_SECONDS)
    conn.row_factory = sqlite3.Row
    try:
        with conn:
            yield conn
    finally:
        conn.close()


def init_database(db_path: str = DEFAULT_DB_PATH) -> None:
    """Create the vault file and its tables. Safe to call repeatedly."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    schema = SCHEMA_PATH.read_text(encoding="utf-8")
    with connect(db_path) as conn:
        conn.executescript(schema)
    logger.info(f"Secret vault initialized at {db_path}")

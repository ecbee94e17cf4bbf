# Area: Commit
"""
rps_client._commit.commitment — Commitment construction
=======================================================

Builds a Commitment for a move, generating a fresh salt unless one
is given. A retry after a failed submission must call this again so
the salt is never reused.
"""

from typing import Optional, Union

from ..enums import Move
from ..types import Commitment
from .hash_committer import generate_salt


def build_commitment(
    game_id: int,
    account: str,
    move: Union[Move, int],
    salt: Optional[str] = None,
) -> Commitment:
    """
    Build a commitment for (game_id, account).

    Args:
        game_id: Game to commit to
        account: Committing account
        move: Rock, Paper or Scissors
        salt: Explicit salt (tests); a fresh one is generated when None

    Returns:
        Commitment whose ``hash`` is ready for submission
    """
    return Commitment(
        game_id=game_id,
        account=account,
        move=Move(int(move)),
        salt=salt if salt is not None else generate_salt(),
    )

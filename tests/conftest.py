# Area: Tests
"""Shared fixtures: an in-memory contract and gateways bound to it."""

import asyncio
import os
import tempfile
from typing import Dict, List, Optional, Sequence

import pytest
from web3 import Web3

from rps_client._chain.gateway import ContractGateway
from rps_client._vault.secret_vault import SecretVault
from rps_client.errors import SubmissionRejectedError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
ALICE = Web3.to_checksum_address("0x" + "a1" * 20)
BOB = Web3.to_checksum_address("0x" + "b2" * 20)
CAROL = Web3.to_checksum_address("0x" + "c3" * 20)

JOIN_BLOCKS = 20
REVEAL_BLOCKS = 20


class FakeChain:
    """
    In-memory stand-in for the RPS contract.

    Mirrors the contract rules the client relies on: exact stake on
    join, one commit per player, keccak(uint8 move || salt) on reveal.
    """

    def __init__(self) -> None:
        self.games: Dict[int, dict] = {}
        self.counter = 0
        self.calls: List[tuple] = []
        self.failing_info: set = set()
        self.malformed_info: set = set()
        self.reject_next: Dict[str, str] = {}

    def _maybe_reject(self, action: str, game_id: Optional[int]) -> None:
        reason = self.reject_next.pop(action, None)
        if reason is not None:
            raise SubmissionRejectedError(action, reason, game_id)

    def create(self, sender: str, value: int) -> int:
        self._maybe_reject("create", None)
        self.counter += 1
        self.games[self.counter] = {
            "player1": sender,
            "player2": ZERO_ADDRESS,
            "bet": value,
            "status": 0,
            "blocks_left": 0,
            "hashes": {},
            "moves": {1: 0, 2: 0},
        }
        return self.counter

    def join(self, sender: str, game_id: int, value: int) -> None:
        self._maybe_reject("join", game_id)
        game = self.games[game_id]
        if game["status"] != 0:
            raise SubmissionRejectedError("join", "Game not open", game_id)
        if value != game["bet"]:
            raise SubmissionRejectedError("join", "Wrong bet amount", game_id)
        game["player2"] = sender
        game["status"] = 1
        game["blocks_left"] = JOIN_BLOCKS

    def _slot(self, game: dict, sender: str) -> int:
        if sender.lower() == game["player1"].lower():
            return 1
        if sender.lower() == game["player2"].lower():
            return 2
        raise SubmissionRejectedError("move", "Not a player", None)

    def commit(self, sender: str, game_id: int, commitment_hash: bytes) -> None:
        self._maybe_reject("commit", game_id)
        game = self.games[game_id]
        if game["status"] != 1:
            raise SubmissionRejectedError("commit", "Wrong phase", game_id)
        slot = self._slot(game, sender)
        if slot in game["hashes"]:
            raise SubmissionRejectedError("commit", "Already committed", game_id)
        game["hashes"][slot] = bytes(commitment_hash)
        if len(game["hashes"]) == 2:
            game["status"] = 2
            game["blocks_left"] = REVEAL_BLOCKS

    def reveal(self, sender: str, game_id: int, move: int, salt: str) -> None:
        self._maybe_reject("reveal", game_id)
        game = self.games[game_id]
        if game["status"] != 2:
            raise SubmissionRejectedError("reveal", "Wrong phase", game_id)
        slot = self._slot(game, sender)
        expected = game["hashes"][slot]
        actual = bytes(Web3.keccak(bytes([move]) + salt.encode("utf-8")))
        if actual != expected:
            raise SubmissionRejectedError("reveal", "Invalid reveal", game_id)
        game["moves"][slot] = move
        if all(game["moves"].values()):
            game["status"] = 3
            game["blocks_left"] = 0

    def open_ids(self) -> List[int]:
        return [gid for gid, g in self.games.items() if g["status"] == 0]

    def info(self, game_id: int) -> tuple:
        if game_id in self.failing_info:
            raise ConnectionError(f"RPC error for game {game_id}")
        if game_id in self.malformed_info:
            return ("0xnot-an-address",)
        game = self.games.get(game_id)
        if game is None:
            return (ZERO_ADDRESS, ZERO_ADDRESS, 0, 0, 0, 0, 0)
        return (
            game["player1"],
            game["player2"],
            game["bet"],
            game["status"],
            game["blocks_left"],
            game["moves"][1],
            game["moves"][2],
        )


class FakeGateway(ContractGateway):
    """ContractGateway bound to one account of a FakeChain."""

    def __init__(self, chain: FakeChain, account: str):
        self.chain = chain
        self._account = account

    @property
    def account(self) -> str:
        return self._account

    async def _io(self, *call) -> None:
        self.chain.calls.append((self._account,) + call)
        await asyncio.sleep(0)

    async def create_game(self, value_wei: int) -> Optional[int]:
        await self._io("create", value_wei)
        return self.chain.create(self._account, value_wei)

    async def join_game(self, game_id: int, value_wei: int) -> None:
        await self._io("join", game_id, value_wei)
        self.chain.join(self._account, game_id, value_wei)

    async def commit_move(self, game_id: int, commitment_hash: bytes) -> None:
        await self._io("commit", game_id, commitment_hash)
        self.chain.commit(self._account, game_id, commitment_hash)

    async def reveal_move(self, game_id: int, move: int, salt: str) -> None:
        await self._io("reveal", game_id, move, salt)
        self.chain.reveal(self._account, game_id, move, salt)

    async def get_open_games(self) -> Sequence[int]:
        await asyncio.sleep(0)
        return self.chain.open_ids()

    async def get_game_info(self, game_id: int) -> tuple:
        await asyncio.sleep(0)
        return self.chain.info(game_id)

    async def game_counter(self) -> int:
        await asyncio.sleep(0)
        return self.chain.counter


@pytest.fixture
def chain():
    return FakeChain()


@pytest.fixture
def alice_gateway(chain):
    return FakeGateway(chain, ALICE)


@pytest.fixture
def bob_gateway(chain):
    return FakeGateway(chain, BOB)


@pytest.fixture
def vault_path():
    """Temporary SQLite file for the secret vault."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield path
    os.unlink(path)


@pytest.fixture
def vault(vault_path):
    return SecretVault(vault_path)

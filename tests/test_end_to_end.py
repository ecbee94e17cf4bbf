# Area: Integration Tests
"""Full game between two clients over the in-memory contract."""

import asyncio
from decimal import Decimal

from rps_client import GameAction, GameStatus, Move, RPSClient
from conftest import ALICE, BOB


def make_client(gateway, vault):
    return RPSClient({"configure_logging": False}, gateway=gateway, vault=vault)


class TestFullGame:
    """Create, join, commit, reveal, finish."""

    def test_two_players_play_to_finished(self, chain, alice_gateway, bob_gateway, vault):
        alice = make_client(alice_gateway, vault)
        bob = make_client(bob_gateway, vault)
        changes = []
        alice.on_status_change(changes.append)

        async def scenario():
            await alice.start()
            await bob.start()
            try:
                game_id = await alice.create_game(Decimal("0.001"))
                assert alice.snapshot.find(game_id).is_owned_by(ALICE)

                await bob.refresh()
                assert bob.allowed_actions(game_id) == {GameAction.JOIN}
                await bob.join_game(game_id)
                await alice.refresh()

                a_commit = await alice.commit_move(game_id, Move.ROCK)
                assert alice.allowed_actions(game_id) == set()
                b_commit = await bob.commit_move(game_id, Move.SCISSORS)
                assert a_commit.hash != b_commit.hash
                assert [c.game_id for c in alice.pending_reveals()] == [game_id]

                await alice.refresh()
                assert alice.snapshot.find(game_id).status is GameStatus.REVEALED

                await alice.reveal_move(game_id)
                await bob.reveal_move(game_id)
                await alice.refresh()
                return game_id
            finally:
                await alice.stop()
                await bob.stop()

        game_id = asyncio.run(scenario())

        game = alice.snapshot.find(game_id)
        assert game.status is GameStatus.FINISHED
        assert game.move1 is Move.ROCK
        assert game.move2 is Move.SCISSORS
        assert game.bet == Decimal("0.001")
        assert chain.games[game_id]["bet"] == 10**15
        assert [c for c in chain.calls if c[1] == "join"] == [(BOB, "join", game_id, 10**15)]
        assert alice.pending_reveals() == []
        assert bob.pending_reveals() == []
        assert [c.current for c in changes] == [
            GameStatus.OPEN,
            GameStatus.COMMITTED,
            GameStatus.REVEALED,
            GameStatus.FINISHED,
        ]

    def test_default_bet_from_config(self, chain, alice_gateway, vault):
        client = RPSClient(
            {"configure_logging": False, "default_bet": "0.002"},
            gateway=alice_gateway, vault=vault,
        )

        game_id = asyncio.run(client.create_game())

        assert chain.games[game_id]["bet"] == 2 * 10**15

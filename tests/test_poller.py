# Area: Games Tests
"""Tests for LifecyclePoller scheduling and snapshot publishing."""

import asyncio

import pytest

from rps_client._games.poller import LifecyclePoller
from rps_client._games.repository import GameRepository
from rps_client._games.state import AppState
from rps_client.enums import GameStatus
from conftest import ALICE, BOB, CAROL, ZERO_ADDRESS


@pytest.fixture
def state(alice_gateway, vault):
    return AppState(account=ALICE, gateway=alice_gateway, vault=vault)


@pytest.fixture
def poller(state, alice_gateway):
    return LifecyclePoller(state, GameRepository(alice_gateway), interval_seconds=0.01)


class TestRefresh:
    """Explicit refreshes."""

    def test_refresh_publishes_snapshot(self, chain, poller, state):
        chain.create(ALICE, 10**15)
        chain.create(BOB, 10**15)

        snapshot = asyncio.run(poller.refresh())

        assert snapshot is state.snapshot
        assert [g.id for g in snapshot.open_games] == [1, 2]
        assert [g.id for g in snapshot.my_games] == [1]
        assert snapshot.refreshed_at is not None
        assert snapshot.refreshing is False
        assert snapshot.find(2).player1 == BOB
        assert snapshot.find(3) is None

    def test_overlapping_refreshes_coalesce(self, chain, alice_gateway, poller):
        chain.create(BOB, 10**15)
        release = asyncio.Event()
        calls = {"active": 0, "peak": 0, "total": 0}
        original = alice_gateway.get_open_games

        async def slow_open_games():
            calls["active"] += 1
            calls["total"] += 1
            calls["peak"] = max(calls["peak"], calls["active"])
            await release.wait()
            calls["active"] -= 1
            return await original()

        alice_gateway.get_open_games = slow_open_games

        async def scenario():
            first = asyncio.create_task(poller.refresh())
            await asyncio.sleep(0)
            second = asyncio.create_task(poller.refresh())
            third = asyncio.create_task(poller.refresh())
            await asyncio.sleep(0)
            release.set()
            await asyncio.gather(first, second, third)

        asyncio.run(scenario())

        assert calls["peak"] == 1
        # One run for the first caller plus one follow-up for the others
        assert calls["total"] == 2
        assert poller.reconciliations == 2

    def test_failed_reconciliation_keeps_previous_snapshot(self, chain, alice_gateway, poller, state):
        chain.create(BOB, 10**15)
        asyncio.run(poller.refresh())
        before = state.snapshot.open_games

        async def broken():
            raise ConnectionError("node down")

        alice_gateway.get_open_games = broken
        snapshot = asyncio.run(poller.refresh())

        assert snapshot.open_games == before
        assert snapshot.last_error == "node down"
        assert snapshot.refreshing is False

    def test_stale_open_record_is_not_shown_as_open(self, chain, poller, state):
        chain.create(BOB, 10**15)
        chain.join(ALICE, 1, 10**15)
        asyncio.run(poller.refresh())

        # A lagging node reports the game as still open
        chain.games[1]["status"] = 0
        chain.games[1]["player2"] = ZERO_ADDRESS
        snapshot = asyncio.run(poller.refresh())

        assert snapshot.open_games == ()
        assert snapshot.find(1).status is GameStatus.COMMITTED

    def test_listeners_receive_changes(self, chain, poller):
        chain.create(ALICE, 10**15)
        seen = []

        def broken_listener(change):
            raise RuntimeError("ui bug")

        poller.add_listener(broken_listener)
        poller.add_listener(seen.append)

        asyncio.run(poller.refresh())
        chain.join(BOB, 1, 10**15)
        asyncio.run(poller.refresh())
        asyncio.run(poller.refresh())

        assert [(c.game_id, c.previous, c.current) for c in seen] == [
            (1, None, GameStatus.OPEN),
            (1, GameStatus.OPEN, GameStatus.COMMITTED),
        ]


class TestPeriodicTicks:
    """Cancellable periodic task."""

    def test_tick_skipped_while_in_flight(self, chain, alice_gateway, poller):
        release = asyncio.Event()
        original = alice_gateway.get_open_games

        async def slow_open_games():
            await release.wait()
            return await original()

        alice_gateway.get_open_games = slow_open_games

        async def scenario():
            assert poller._tick() is True
            await asyncio.sleep(0)
            assert poller._tick() is False
            assert poller._tick() is False
            release.set()
            await poller._inflight

        asyncio.run(scenario())

        assert poller.skipped_ticks == 2
        assert poller.reconciliations == 1

    def test_start_and_stop(self, chain, poller):
        chain.create(BOB, 10**15)

        async def scenario():
            poller.start()
            poller.start()
            assert poller.is_running
            await asyncio.sleep(0.1)
            await poller.stop()
            assert not poller.is_running
            assert not poller.is_refreshing

        asyncio.run(scenario())

        assert poller.reconciliations >= 2

    def test_stop_cancels_in_flight_reconciliation(self, alice_gateway, poller, state):
        async def never():
            await asyncio.Event().wait()

        alice_gateway.get_open_games = never

        async def scenario():
            poller.start()
            await asyncio.sleep(0.02)
            assert state.snapshot.refreshing
            await poller.stop()

        asyncio.run(scenario())

        assert state.snapshot.refreshing is False
        assert poller.reconciliations == 0


class TestReconcileScope:
    """Which records reach the snapshot and the listeners."""

    def test_stale_record_keeps_joined_game_in_my_games(self, chain, poller, state):
        chain.create(BOB, 10**15)
        chain.join(ALICE, 1, 10**15)
        asyncio.run(poller.refresh())

        chain.games[1]["status"] = 0
        chain.games[1]["player2"] = ZERO_ADDRESS
        snapshot = asyncio.run(poller.refresh())

        assert [g.id for g in snapshot.my_games] == [1]
        assert snapshot.my_games[0].player2 == ALICE
        assert snapshot.my_games[0].status is GameStatus.COMMITTED

    def test_other_players_games_emit_no_changes(self, chain, poller):
        chain.create(BOB, 10**15)
        chain.join(CAROL, 1, 10**15)
        seen = []
        poller.add_listener(seen.append)

        snapshot = asyncio.run(poller.refresh())

        assert snapshot.my_games == ()
        assert snapshot.open_games == ()
        assert seen == []

    def test_open_id_past_counter_is_fetched(self, chain, alice_gateway, poller):
        chain.create(BOB, 10**15)

        async def lagging_counter():
            return 0

        alice_gateway.game_counter = lagging_counter
        snapshot = asyncio.run(poller.refresh())

        assert [g.id for g in snapshot.open_games] == [1]

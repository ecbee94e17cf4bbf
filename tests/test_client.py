# Area: Client Tests
"""Tests for RPSClient wiring and its read-side helpers."""

import asyncio

import pytest
from eth_account import Account

from rps_client import GameAction, RPSClient, Web3ContractGateway
from rps_client.errors import GameNotFoundError
from conftest import ALICE, BOB

PRIVATE_KEY = "0x" + "22" * 32


def quiet(**extra):
    return {"configure_logging": False, **extra}


class TestConstruction:
    def test_builds_web3_gateway_from_config(self, vault_path):
        client = RPSClient(quiet(private_key=PRIVATE_KEY, vault_path=vault_path))

        assert isinstance(client.gateway, Web3ContractGateway)
        assert client.account == Account.from_key(PRIVATE_KEY).address
        assert client.gateway._chain_id == 97

    def test_missing_private_key(self, vault_path):
        with pytest.raises(ValueError, match="private_key"):
            RPSClient(quiet(vault_path=vault_path))

    def test_config_values_reach_components(self, alice_gateway, vault):
        client = RPSClient(
            quiet(poll_interval_seconds=2.5, max_concurrent_fetches=3),
            gateway=alice_gateway, vault=vault,
        )

        assert client.poller.interval_seconds == 2.5
        assert client.repository.max_concurrent_fetches == 3
        assert client.account == ALICE


class TestReadSide:
    def test_allowed_actions_unknown_game(self, alice_gateway, vault):
        client = RPSClient(quiet(), gateway=alice_gateway, vault=vault)

        with pytest.raises(GameNotFoundError):
            client.allowed_actions(42)

    def test_allowed_actions_follow_snapshot(self, chain, alice_gateway, bob_gateway, vault):
        chain.create(ALICE, 10**15)
        alice = RPSClient(quiet(), gateway=alice_gateway, vault=vault)
        bob = RPSClient(quiet(), gateway=bob_gateway, vault=vault)

        asyncio.run(alice.refresh())
        asyncio.run(bob.refresh())

        assert alice.allowed_actions(1) == set()
        assert bob.allowed_actions(1) == {GameAction.JOIN}
        assert alice.find_game(1).player1 == ALICE
        assert bob.find_game(1) is not None

    def test_start_and_stop(self, chain, alice_gateway, vault):
        chain.create(ALICE, 10**15)
        client = RPSClient(quiet(), gateway=alice_gateway, vault=vault)

        async def run():
            async with client:
                assert client.poller.is_running
                return client.snapshot

        snapshot = asyncio.run(run())

        assert [g.id for g in snapshot.my_games] == [1]
        assert not client.poller.is_running

    def test_status_listener_registered(self, chain, alice_gateway, vault):
        chain.create(ALICE, 10**15)
        client = RPSClient(quiet(), gateway=alice_gateway, vault=vault)
        changes = []
        client.on_status_change(changes.append)

        asyncio.run(client.refresh())
        chain.join(BOB, 1, 10**15)
        asyncio.run(client.refresh())

        assert [(c.game_id, c.current.value) for c in changes] == [
            (1, "Open"),
            (1, "Committed"),
        ]

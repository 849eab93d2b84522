"""
Tests for the network coordinator.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from thortx.config import Settings
from thortx.core.network import NetworkConfig, NetworkCoordinator, NetworkMode


@pytest.fixture
def coordinator():
    return NetworkCoordinator(NetworkMode.MAINNET, settings=Settings())


NODE_INFO = {"default_node_info": {"network": "thorchain-1"}}


# =============================================================================
# Snapshot Tests
# =============================================================================

class TestSnapshots:
    def test_mainnet_defaults(self, coordinator):
        config = coordinator.config

        assert config.mode == NetworkMode.MAINNET
        assert config.rest_base_url == "https://thornode.ninerealms.com"
        assert config.rpc_base_url == "https://rpc.ninerealms.com"
        assert config.address_prefix == "thor"
        assert config.chain_id is None
        assert coordinator.is_mainnet()

    def test_stagenet_defaults(self):
        config = NetworkConfig.for_mode("stagenet", Settings())

        assert config.address_prefix == "sthor"
        assert "stagenet-thornode" in config.rest_base_url

    def test_endpoints_from_settings(self):
        settings = Settings(stagenet_rest_url="http://localhost:1317/")
        coordinator = NetworkCoordinator("stagenet", settings=settings)

        assert coordinator.is_stagenet()
        assert coordinator.config.rest_base_url == "http://localhost:1317"

    def test_snapshot_is_frozen(self, coordinator):
        with pytest.raises(Exception):
            coordinator.config.address_prefix = "sthor"

    def test_unknown_mode_is_rejected(self, coordinator):
        with pytest.raises(ValueError):
            coordinator.set_network("testnet")


# =============================================================================
# Switch Tests
# =============================================================================

class TestSetNetwork:
    def test_switch_replaces_snapshot_and_notifies(self, coordinator):
        listener = MagicMock()
        coordinator.subscribe(listener)
        before = coordinator.config

        current = coordinator.set_network(NetworkMode.STAGENET)

        assert coordinator.config is current
        assert current.address_prefix == "sthor"
        assert coordinator.generation == 1
        listener.assert_called_once_with(before, current)

    def test_same_mode_is_a_noop(self, coordinator):
        listener = MagicMock()
        coordinator.subscribe(listener)

        coordinator.set_network("mainnet")

        listener.assert_not_called()
        assert coordinator.generation == 0

    def test_every_listener_runs_even_if_one_fails(self, coordinator):
        failing = MagicMock(side_effect=RuntimeError("cache clear failed"))
        second = MagicMock()
        coordinator.subscribe(failing)
        coordinator.subscribe(second)

        with pytest.raises(RuntimeError):
            coordinator.set_network("stagenet")

        second.assert_called_once()
        assert coordinator.mode == NetworkMode.STAGENET

    def test_unsubscribe(self, coordinator):
        listener = MagicMock()
        coordinator.subscribe(listener)
        coordinator.subscribe(listener)
        coordinator.unsubscribe(listener)

        coordinator.set_network("stagenet")

        listener.assert_not_called()

    def test_endpoints_follow_switch(self, coordinator):
        coordinator.set_network("stagenet")

        assert coordinator.endpoints()["prefix"] == "sthor"


# =============================================================================
# Chain ID Tests
# =============================================================================

class TestResolveChainId:
    @pytest.mark.asyncio
    async def test_fetches_once_per_network(self, coordinator):
        fetch = AsyncMock(return_value=NODE_INFO)

        assert await coordinator.resolve_chain_id(fetch) == "thorchain-1"
        assert await coordinator.resolve_chain_id(fetch) == "thorchain-1"

        fetch.assert_awaited_once()
        assert coordinator.config.chain_id == "thorchain-1"

    @pytest.mark.asyncio
    async def test_switch_clears_chain_id(self, coordinator):
        await coordinator.resolve_chain_id(AsyncMock(return_value=NODE_INFO))

        coordinator.set_network("stagenet")

        assert coordinator.config.chain_id is None

    @pytest.mark.asyncio
    async def test_answer_from_previous_network_is_discarded(self, coordinator):
        async def fetch_then_switch():
            coordinator.set_network("stagenet")
            return NODE_INFO

        chain_id = await coordinator.resolve_chain_id(fetch_then_switch)

        assert chain_id == "thorchain-1"
        assert coordinator.config.chain_id is None

    @pytest.mark.asyncio
    async def test_missing_chain_id(self, coordinator):
        with pytest.raises(ValueError):
            await coordinator.resolve_chain_id(AsyncMock(return_value={}))

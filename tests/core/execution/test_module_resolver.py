"""
Tests for thorchain module address resolution.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from thortx.config import Settings
from thortx.core.errors import EndpointUnavailable, UnresolvedModuleAddress
from thortx.core.execution import ModuleAddressResolver
from thortx.core.network import NetworkCoordinator


MAINNET_MODULE = "thor1g98cy3n9mmjrpn0sxmn63lztelera37n8n67c0"
STAGENET_MODULE = "sthor1g98cy3n9mmjrpn0sxmn63lztelera37nn2xgw3"


@pytest.fixture
def coordinator():
    return NetworkCoordinator("mainnet", settings=Settings())


@pytest.fixture
def provider():
    mock = MagicMock()
    mock.get_module_address = AsyncMock(return_value=MAINNET_MODULE)
    return mock


@pytest.mark.asyncio
async def test_address_is_fetched_once(coordinator, provider):
    resolver = ModuleAddressResolver(coordinator, provider)

    assert await resolver.resolve() == MAINNET_MODULE
    assert await resolver.resolve() == MAINNET_MODULE

    provider.get_module_address.assert_awaited_once_with("thorchain")
    assert resolver.cached() == MAINNET_MODULE


@pytest.mark.asyncio
async def test_network_switch_clears_cache(coordinator, provider):
    resolver = ModuleAddressResolver(coordinator, provider)
    await resolver.resolve()

    coordinator.set_network("stagenet")
    assert resolver.cached() is None

    provider.get_module_address.return_value = STAGENET_MODULE
    assert await resolver.resolve() == STAGENET_MODULE
    assert provider.get_module_address.await_count == 2


@pytest.mark.asyncio
async def test_switching_back_does_not_reuse_old_address(coordinator, provider):
    resolver = ModuleAddressResolver(coordinator, provider)
    await resolver.resolve()

    coordinator.set_network("stagenet")
    coordinator.set_network("mainnet")

    assert resolver.cached() is None


@pytest.mark.asyncio
async def test_lookup_failure_is_wrapped(coordinator, provider):
    provider.get_module_address.side_effect = EndpointUnavailable("node down")
    resolver = ModuleAddressResolver(coordinator, provider)

    with pytest.raises(UnresolvedModuleAddress) as exc_info:
        await resolver.resolve()

    assert exc_info.value.network == "mainnet"
    assert resolver.cached() is None


@pytest.mark.asyncio
async def test_missing_address_is_wrapped(coordinator, provider):
    provider.get_module_address.side_effect = ValueError("No thorchain module address found in response")
    resolver = ModuleAddressResolver(coordinator, provider)

    with pytest.raises(UnresolvedModuleAddress):
        await resolver.resolve()


@pytest.mark.asyncio
async def test_answer_from_previous_network_is_discarded(coordinator, provider):
    async def lookup_then_switch(module):
        coordinator.set_network("stagenet")
        return MAINNET_MODULE

    provider.get_module_address.side_effect = lookup_then_switch
    resolver = ModuleAddressResolver(coordinator, provider)

    with pytest.raises(UnresolvedModuleAddress):
        await resolver.resolve()

    assert resolver.cached() is None

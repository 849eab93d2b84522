"""
Module address resolution.

The thorchain module account receives deposits. Its address is looked up from
the node once per network and cached until the coordinator reports a switch.
"""

import logging
from typing import Optional

from ...cache import NetworkScopedCache
from ..errors import EndpointUnavailable, UnresolvedModuleAddress
from ..network import NetworkConfig, NetworkCoordinator
from ...providers.base import ChainNodeProvider


logger = logging.getLogger(__name__)

THORCHAIN_MODULE = "thorchain"


class ModuleAddressResolver:
    """Caches the deposit module address per network."""

    def __init__(
        self,
        coordinator: NetworkCoordinator,
        provider: ChainNodeProvider,
        module: str = THORCHAIN_MODULE,
        cache: Optional[NetworkScopedCache] = None,
    ):
        self.coordinator = coordinator
        self.provider = provider
        self.module = module
        self._cache = cache or NetworkScopedCache()
        coordinator.subscribe(self._on_network_switch)

    def _on_network_switch(self, previous: NetworkConfig, current: NetworkConfig) -> None:
        self._cache.invalidate()
        logger.debug(f"Cleared {self.module} module address cache ({previous.mode.value} -> {current.mode.value})")

    def cached(self) -> Optional[str]:
        return self._cache.get(self.coordinator.mode.value, self.module)

    async def resolve(self) -> str:
        network = self.coordinator.mode.value
        cached = self._cache.get(network, self.module)
        if cached:
            return cached

        generation = self.coordinator.generation
        try:
            address = await self.provider.get_module_address(self.module)
        except (EndpointUnavailable, ValueError) as e:
            logger.error(f"Error fetching {self.module} module address: {e}")
            raise UnresolvedModuleAddress(network, str(e)) from e

        # The answer belongs to a network that is no longer active
        if generation != self.coordinator.generation:
            logger.info(f"Discarding {self.module} module address resolved for {network} after a network switch")
            raise UnresolvedModuleAddress(network, "network switched during lookup")

        self._cache.set(network, self.module, address)
        logger.info(f"Resolved {self.module} module address for {network}: {address}")
        return address

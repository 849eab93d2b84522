"""
Network coordinator.

Single owner of the active ``NetworkConfig``. Every component that needs an
endpoint, prefix or chain id reads ``coordinator.config`` at call time instead
of copying it. Components that cache per-network data register an
invalidation listener; ``set_network`` swaps the snapshot and runs every
listener before it returns, so no caller can observe a half-switched engine.
"""

import logging
import threading
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ...config import Settings, settings as default_settings
from .models import NetworkConfig, NetworkMode


logger = logging.getLogger(__name__)

InvalidationListener = Callable[[NetworkConfig, NetworkConfig], None]
NodeInfoFetcher = Callable[[], Awaitable[Dict[str, Any]]]


class NetworkCoordinator:
    """Holds the active network snapshot and fans out switch notifications."""

    def __init__(
        self,
        mode: Optional[NetworkMode | str] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or default_settings
        self._lock = threading.RLock()
        self._listeners: List[InvalidationListener] = []
        self._generation = 0
        self._config = NetworkConfig.for_mode(mode or self._settings.network_mode, self._settings)

    @property
    def config(self) -> NetworkConfig:
        return self._config

    @property
    def mode(self) -> NetworkMode:
        return self._config.mode

    @property
    def generation(self) -> int:
        """Incremented on every switch; async work compares it before publishing results."""
        return self._generation

    def is_mainnet(self) -> bool:
        return self._config.mode == NetworkMode.MAINNET

    def is_stagenet(self) -> bool:
        return self._config.mode == NetworkMode.STAGENET

    def subscribe(self, listener: InvalidationListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: InvalidationListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def set_network(self, mode: NetworkMode | str) -> NetworkConfig:
        """Switch to ``mode`` and invalidate every dependent cache.

        Switching to the already-active mode is a no-op and fires nothing.
        """
        mode = NetworkMode(mode)
        with self._lock:
            previous = self._config
            if previous.mode == mode:
                return previous

            current = NetworkConfig.for_mode(mode, self._settings)
            self._config = current
            self._generation += 1
            logger.info(f"Network switched: {previous.mode.value} -> {current.mode.value}")

            first_error: Optional[Exception] = None
            for listener in list(self._listeners):
                try:
                    listener(previous, current)
                except Exception as e:
                    logger.error(f"Network invalidation listener failed: {e}")
                    if first_error is None:
                        first_error = e
            if first_error is not None:
                raise first_error
            return current

    async def resolve_chain_id(self, fetch_node_info: NodeInfoFetcher) -> str:
        """Return the active chain id, fetching node info once per network."""
        config = self._config
        if config.chain_id:
            return config.chain_id

        generation = self._generation
        node_info = await fetch_node_info()
        chain_id = (node_info.get("default_node_info") or {}).get("network")
        if not chain_id:
            raise ValueError(f"No chain ID found in node info for {config.mode.value}")

        with self._lock:
            # A switch happened while we were waiting; the answer belongs to the old network
            if generation == self._generation:
                self._config = self._config.model_copy(update={"chain_id": chain_id})
        return chain_id

    def endpoints(self) -> Dict[str, Optional[str]]:
        config = self._config
        return {
            "thor_node": config.rest_base_url,
            "rpc": config.rpc_base_url,
            "prefix": config.address_prefix,
            "chain_id": config.chain_id,
        }


# Singleton instance
_coordinator: Optional[NetworkCoordinator] = None


def get_network_coordinator() -> NetworkCoordinator:
    """Get the singleton network coordinator instance."""
    global _coordinator
    if _coordinator is None:
        _coordinator = NetworkCoordinator()
    return _coordinator

"""
Transaction service.

The one object a wallet front-end talks to. Owns the network coordinator and
builds every engine component against it, so a network switch reaches the
provider, the module address cache and the tracker at once.
"""

import logging
from typing import Any, Dict, Optional

from ..config import Settings, settings as default_settings
from ..core.assets import (
    DisplayAmount,
    NormalizedAsset,
    WireAmount,
    normalize_asset,
    to_display,
    to_wire,
)
from ..core.execution import (
    BroadcastResult,
    Broadcaster,
    ModuleAddressResolver,
    PreparedTransaction,
    Signer,
    TransactionBuilder,
    TransactionIntent,
)
from ..core.network import NetworkConfig, NetworkCoordinator, NetworkMode, get_network_coordinator
from ..core.tracking import StatusSummary, StatusTracker, TxBasicInfo
from ..providers.thornode import ThornodeProvider


logger = logging.getLogger(__name__)


class TransactionService:
    def __init__(
        self,
        coordinator: Optional[NetworkCoordinator] = None,
        provider: Optional[ThornodeProvider] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or default_settings
        self.coordinator = coordinator or NetworkCoordinator(settings=self._settings)
        self.provider = provider or ThornodeProvider(self.coordinator)
        self.module_resolver = ModuleAddressResolver(self.coordinator, self.provider)
        self.builder = TransactionBuilder(self.module_resolver, settings=self._settings)
        self.broadcaster = Broadcaster(self.coordinator, self.builder, settings=self._settings)
        self.tracker = StatusTracker(self.provider, settings=self._settings)

    # Assets and amounts

    @staticmethod
    def normalize_asset(raw: Any) -> NormalizedAsset:
        return normalize_asset(raw)

    @staticmethod
    def to_wire(amount: Any, asset: Optional[str] = None) -> WireAmount:
        return to_wire(amount, asset)

    @staticmethod
    def to_display(amount: Any, asset: Optional[str] = None) -> DisplayAmount:
        return to_display(amount, asset)

    # Network

    def current_network(self) -> NetworkConfig:
        return self.coordinator.config

    def set_network(self, mode: NetworkMode | str) -> NetworkConfig:
        return self.coordinator.set_network(mode)

    async def resolve_chain_id(self) -> str:
        return await self.coordinator.resolve_chain_id(self.provider.get_node_info)

    # Building and broadcasting

    def prepare_send(self, from_address: str, intent: TransactionIntent) -> PreparedTransaction:
        return self.builder.prepare_send(from_address, intent)

    async def prepare_deposit(self, from_address: str, intent: TransactionIntent) -> PreparedTransaction:
        return await self.builder.prepare_deposit(from_address, intent)

    def prepare_native_deposit(self, from_address: str, intent: TransactionIntent) -> PreparedTransaction:
        return self.builder.prepare_native_deposit(from_address, intent)

    async def get_module_address(self) -> str:
        return await self.module_resolver.resolve()

    async def broadcast_transaction(
        self,
        signer: Signer,
        intent: TransactionIntent,
        simulate: bool = False,
    ) -> BroadcastResult:
        return await self.broadcaster.broadcast(signer, intent, simulate=simulate)

    async def estimate_gas(self, signer: Signer, intent: TransactionIntent) -> str:
        return await self.broadcaster.estimate_gas(signer, intent)

    # Tracking

    async def get_tx(self, tx_hash: str) -> Optional[TxBasicInfo]:
        return await self.tracker.get_tx(tx_hash)

    async def get_tx_details(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        return await self.tracker.get_tx_details(tx_hash)

    async def get_transaction_summary(self, tx_hash: str) -> StatusSummary:
        return await self.tracker.get_transaction_summary(tx_hash)

    async def poll_transaction_status(
        self,
        tx_hash: str,
        max_attempts: Optional[int] = None,
        interval_ms: Optional[int] = None,
    ) -> StatusSummary:
        return await self.tracker.poll_transaction_status(tx_hash, max_attempts, interval_ms)


# Singleton instance
_service: Optional[TransactionService] = None


def get_transaction_service() -> TransactionService:
    """Get the singleton transaction service instance."""
    global _service
    if _service is None:
        _service = TransactionService(coordinator=get_network_coordinator())
        logger.info(f"Transaction service ready on {_service.coordinator.mode.value}")
    return _service

from abc import ABC, abstractmethod
from typing import Any, Dict


class Provider(ABC):
    """Base provider interface"""

    name: str
    timeout_s: float = 10

    @abstractmethod
    async def ready(self) -> bool:
        """Check if provider is ready to serve requests"""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return provider health status"""
        pass


class ChainNodeProvider(Provider):
    """Provider for chain node lookups (accounts, modules, transactions)"""

    @abstractmethod
    async def get_module_address(self, module: str = "thorchain") -> str:
        """Resolve the account address of a protocol module"""
        pass

    @abstractmethod
    async def get_node_info(self) -> Dict[str, Any]:
        """Get tendermint node info (carries the chain id)"""
        pass

    @abstractmethod
    async def get_tx(self, tx_hash: str) -> Dict[str, Any]:
        """Get the observed transaction for a hash"""
        pass

    @abstractmethod
    async def get_tx_stages(self, tx_hash: str) -> Dict[str, Any]:
        """Get the settlement pipeline stages for a hash"""
        pass

    @abstractmethod
    async def get_tx_details(self, tx_hash: str) -> Dict[str, Any]:
        """Get the indexed action view (inbound, outbounds) for a hash"""
        pass

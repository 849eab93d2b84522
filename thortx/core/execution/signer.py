"""
Signer capability.

Key material and signing live outside this package. A wallet integration
implements ``Signer`` and hands it to the broadcaster; the broadcaster opens a
brand-new ``SigningSession`` for every submission attempt so the client never
signs with an account sequence cached from an earlier call.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..network import NetworkConfig
from .models import AccountInfo, BroadcastResult, Fee


class SigningSession(ABC):
    """A signer-bound client connected to one network's RPC endpoint."""

    address: str

    @abstractmethod
    async def get_account(self, address: str) -> AccountInfo:
        """Read account number and sequence from the chain"""
        pass

    @abstractmethod
    async def simulate(self, messages: List[Dict[str, Any]], memo: str) -> int:
        """Dry-run the messages and return gas used"""
        pass

    @abstractmethod
    async def sign_and_broadcast(
        self,
        messages: List[Dict[str, Any]],
        fee: Fee,
        memo: str,
    ) -> BroadcastResult:
        """Sign with the current sequence and submit; returns the node's answer"""
        pass

    async def close(self) -> None:
        """Release the underlying client"""
        return None


class Signer(ABC):
    """Factory for signing sessions (wraps mnemonic or hardware key material)."""

    @abstractmethod
    async def open_session(self, network: NetworkConfig) -> SigningSession:
        """Derive the address for ``network.address_prefix`` and connect to ``network.rpc_base_url``"""
        pass

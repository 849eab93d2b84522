"""Async client for the THORNode REST API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import settings
from ..core.errors import EndpointUnavailable, InvalidTransactionHash, LookupIncomplete
from ..core.network import NetworkCoordinator, get_network_coordinator
from .base import ChainNodeProvider


logger = logging.getLogger(__name__)


class ThornodeProvider(ChainNodeProvider):
    """Thin wrapper around THORNode endpoints for the active network.

    The base URL is read from the coordinator on every request, so a network
    switch takes effect on the very next call.
    """

    name = "thornode"

    def __init__(
        self,
        coordinator: Optional[NetworkCoordinator] = None,
        *,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.coordinator = coordinator or get_network_coordinator()
        self.timeout_s = timeout_s if timeout_s is not None else settings.request_timeout_seconds
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self.coordinator.config.rest_base_url

    def _headers(self) -> Dict[str, str]:
        return {
            "accept": "application/json",
            "content-type": "application/json",
            "user-agent": "thortx/0.1",
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        resource: Optional[str] = None,
        identifier: Optional[str] = None,
        **kwargs: Any,
    ) -> Any:
        base_url = self.base_url
        try:
            async with httpx.AsyncClient(
                base_url=base_url,
                timeout=self.timeout_s,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.TimeoutException as exc:
            raise EndpointUnavailable(f"Timed out after {self.timeout_s}s calling {path}", url=f"{base_url}{path}") from exc
        except httpx.RequestError as exc:
            raise EndpointUnavailable(f"Request to {path} failed: {exc}", url=f"{base_url}{path}") from exc

        status = response.status_code
        logger.debug(f"{method} {path} -> {status}")
        if status == 404 and resource:
            raise LookupIncomplete(resource, identifier or path)
        if status == 400 and resource == "transaction":
            raise InvalidTransactionHash(identifier)
        if status >= 400:
            detail = response.text[:200] if response.text else response.reason_phrase
            raise EndpointUnavailable(
                f"THORNode returned {status} for {path}: {detail}",
                url=f"{base_url}{path}",
                status_code=status,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise EndpointUnavailable(f"Non-JSON response from {path}", url=f"{base_url}{path}", status_code=status) from exc

    async def ready(self) -> bool:
        try:
            await self.get_node_info()
            return True
        except EndpointUnavailable:
            return False

    async def health_check(self) -> Dict[str, Any]:
        try:
            info = await self.get_node_info()
        except EndpointUnavailable as e:
            return {"status": "unavailable", "network": self.coordinator.mode.value, "error": e.message}
        return {
            "status": "healthy",
            "network": self.coordinator.mode.value,
            "chain_id": (info.get("default_node_info") or {}).get("network"),
        }

    async def get_module_address(self, module: str = "thorchain") -> str:
        data = await self._request("GET", f"/thorchain/balance/module/{module}")
        address = data.get("address") if isinstance(data, dict) else None
        if not address:
            raise ValueError(f"No {module} module address found in response")
        return address

    async def get_node_info(self) -> Dict[str, Any]:
        return await self._request("GET", "/cosmos/base/tendermint/v1beta1/node_info")

    async def get_tx(self, tx_hash: str) -> Dict[str, Any]:
        return await self._request("GET", f"/thorchain/tx/{tx_hash}", resource="transaction", identifier=tx_hash)

    async def get_tx_stages(self, tx_hash: str) -> Dict[str, Any]:
        return await self._request("GET", f"/thorchain/tx/stages/{tx_hash}", resource="transaction", identifier=tx_hash)

    async def get_tx_details(self, tx_hash: str) -> Dict[str, Any]:
        return await self._request("GET", f"/thorchain/tx/details/{tx_hash}", resource="transaction", identifier=tx_hash)


"""
Tests for the transaction service wiring.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from thortx.config import Settings
from thortx.core.assets import AssetKind
from thortx.core.execution import BroadcastResult, MessageKind, TransactionIntent
from thortx.core.network import NetworkCoordinator, NetworkMode
from thortx.providers.thornode import ThornodeProvider
from thortx.services.transaction_service import TransactionService, get_transaction_service


MAINNET_MODULE = "thor1g98cy3n9mmjrpn0sxmn63lztelera37n8n67c0"
STAGENET_MODULE = "sthor1g98cy3n9mmjrpn0sxmn63lztelera37nn2xgw3"


@pytest.fixture
def provider():
    mock = MagicMock()
    mock.get_module_address = AsyncMock(return_value=MAINNET_MODULE)
    mock.get_node_info = AsyncMock(return_value={"default_node_info": {"network": "thorchain-1"}})
    return mock


@pytest.fixture
def service(provider):
    settings = Settings()
    return TransactionService(NetworkCoordinator("mainnet", settings=settings), provider, settings=settings)


class TestTransactionService:
    def test_components_share_one_coordinator(self, service):
        assert service.broadcaster.coordinator is service.coordinator
        assert service.module_resolver.coordinator is service.coordinator
        assert service.builder.module_resolver is service.module_resolver

    def test_default_provider_follows_coordinator(self):
        service = TransactionService(settings=Settings())

        assert isinstance(service.provider, ThornodeProvider)
        assert service.provider.coordinator is service.coordinator

    def test_pure_helpers(self, service):
        assert service.normalize_asset("btc-btc").kind == AssetKind.SECURED
        assert service.to_wire("1.5").units == 150_000_000
        assert str(service.to_display(150_000_000)) == "1.5"

    @pytest.mark.asyncio
    async def test_network_switch_reaches_deposit_target(self, service, provider):
        intent = TransactionIntent(asset="rune", amount="1", memo="=:BTC.BTC:bc1qdest", deposit_mode=True)

        first = await service.prepare_deposit("thor1me", intent)
        service.set_network(NetworkMode.STAGENET)
        provider.get_module_address.return_value = STAGENET_MODULE
        second = await service.prepare_deposit("sthor1me", intent)

        assert first.payload["toAddress"] == MAINNET_MODULE
        assert second.payload["toAddress"] == STAGENET_MODULE
        assert service.current_network().address_prefix == "sthor"

    def test_prepare_send(self, service):
        intent = TransactionIntent(asset="rune", amount="2", destination_address="thor1dest")

        prepared = service.prepare_send("thor1me", intent)

        assert prepared.message_kind == MessageKind.SEND

    def test_prepare_native_deposit(self, service, provider):
        intent = TransactionIntent(asset="rune", amount="1", memo="=:BTC.BTC:bc1qdest", deposit_mode=True)

        prepared = service.prepare_native_deposit("thor1me", intent)

        assert prepared.message_kind == MessageKind.NATIVE_DEPOSIT
        assert prepared.payload["coins"] == [{"denom": "rune", "amount": "100000000"}]
        provider.get_module_address.assert_not_called()

    @pytest.mark.asyncio
    async def test_resolve_chain_id(self, service, provider):
        assert await service.resolve_chain_id() == "thorchain-1"
        assert await service.resolve_chain_id() == "thorchain-1"
        provider.get_node_info.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_broadcast_delegates(self, service):
        result = BroadcastResult(result_code=0, transaction_hash="A" * 64)
        service.broadcaster.broadcast = AsyncMock(return_value=result)
        signer = MagicMock()
        intent = TransactionIntent(asset="rune", amount="1", destination_address="thor1dest")

        assert await service.broadcast_transaction(signer, intent) is result
        service.broadcaster.broadcast.assert_awaited_once_with(signer, intent, simulate=False)

    def test_singleton(self):
        assert get_transaction_service() is get_transaction_service()

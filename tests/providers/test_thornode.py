"""
Tests for the THORNode REST provider.
"""

import httpx
import pytest

from thortx.config import Settings
from thortx.core.errors import EndpointUnavailable, InvalidTransactionHash, LookupIncomplete
from thortx.core.network import NetworkCoordinator
from thortx.providers.thornode import ThornodeProvider


TX_HASH = "E3B0C44298FC1C149AFBF4C8996FB92427AE41E4649B934CA495991B7852B855"
MODULE = "thor1g98cy3n9mmjrpn0sxmn63lztelera37n8n67c0"
NODE_INFO = {"default_node_info": {"network": "thorchain-1", "moniker": "ninerealms"}}


def make_provider(handler):
    coordinator = NetworkCoordinator("mainnet", settings=Settings())
    return ThornodeProvider(coordinator, timeout_s=1.0, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_module_address():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return httpx.Response(200, json={"name": "thorchain", "address": MODULE, "coins": []})

    provider = make_provider(handler)

    assert await provider.get_module_address() == MODULE
    assert seen[0].host == "thornode.ninerealms.com"
    assert seen[0].path == "/thorchain/balance/module/thorchain"


@pytest.mark.asyncio
async def test_requests_follow_network_switch():
    hosts = []

    def handler(request: httpx.Request) -> httpx.Response:
        hosts.append(request.url.host)
        return httpx.Response(200, json=NODE_INFO)

    provider = make_provider(handler)
    await provider.get_node_info()
    provider.coordinator.set_network("stagenet")
    await provider.get_node_info()

    assert hosts == ["thornode.ninerealms.com", "stagenet-thornode.ninerealms.com"]


@pytest.mark.asyncio
async def test_missing_module_address():
    provider = make_provider(lambda request: httpx.Response(200, json={"coins": []}))

    with pytest.raises(ValueError):
        await provider.get_module_address()


@pytest.mark.asyncio
async def test_transaction_endpoints():
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json={"ok": True})

    provider = make_provider(handler)
    await provider.get_tx(TX_HASH)
    await provider.get_tx_stages(TX_HASH)
    await provider.get_tx_details(TX_HASH)

    assert paths == [
        f"/thorchain/tx/{TX_HASH}",
        f"/thorchain/tx/stages/{TX_HASH}",
        f"/thorchain/tx/details/{TX_HASH}",
    ]


@pytest.mark.asyncio
async def test_not_indexed_is_lookup_incomplete():
    provider = make_provider(lambda request: httpx.Response(404, json={"message": "tx not found"}))

    with pytest.raises(LookupIncomplete) as exc_info:
        await provider.get_tx_stages(TX_HASH)

    assert exc_info.value.identifier == TX_HASH


@pytest.mark.asyncio
async def test_bad_request_is_invalid_hash():
    provider = make_provider(lambda request: httpx.Response(400, json={"message": "invalid tx hash"}))

    with pytest.raises(InvalidTransactionHash):
        await provider.get_tx(TX_HASH)


@pytest.mark.asyncio
async def test_server_error_is_endpoint_unavailable():
    provider = make_provider(lambda request: httpx.Response(502, text="bad gateway"))

    with pytest.raises(EndpointUnavailable) as exc_info:
        await provider.get_tx_stages(TX_HASH)

    assert exc_info.value.status_code == 502
    assert exc_info.value.context.retriable is True


@pytest.mark.asyncio
async def test_connection_error_is_endpoint_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider = make_provider(handler)

    with pytest.raises(EndpointUnavailable):
        await provider.get_node_info()


@pytest.mark.asyncio
async def test_timeout_is_endpoint_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    provider = make_provider(handler)

    with pytest.raises(EndpointUnavailable) as exc_info:
        await provider.get_node_info()

    assert "Timed out" in exc_info.value.message


@pytest.mark.asyncio
async def test_non_json_body():
    provider = make_provider(lambda request: httpx.Response(200, text="<html>maintenance</html>"))

    with pytest.raises(EndpointUnavailable):
        await provider.get_node_info()


@pytest.mark.asyncio
async def test_health_check():
    healthy = make_provider(lambda request: httpx.Response(200, json=NODE_INFO))
    down = make_provider(lambda request: httpx.Response(503, text="unavailable"))

    assert await healthy.health_check() == {"status": "healthy", "network": "mainnet", "chain_id": "thorchain-1"}
    assert (await down.health_check())["status"] == "unavailable"
    assert await healthy.ready() is True
    assert await down.ready() is False

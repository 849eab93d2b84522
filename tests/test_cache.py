from unittest.mock import patch

from thortx.cache import NetworkScopedCache


def test_entries_are_scoped_by_network():
    cache = NetworkScopedCache()
    cache.set("mainnet", "thorchain", "thor1module")

    assert cache.get("mainnet", "thorchain") == "thor1module"
    assert cache.get("stagenet", "thorchain") is None


def test_invalidate_one_network():
    cache = NetworkScopedCache()
    cache.set("mainnet", "thorchain", "thor1module")
    cache.set("stagenet", "thorchain", "sthor1module")

    cache.invalidate("mainnet")

    assert cache.get("mainnet", "thorchain") is None
    assert cache.get("stagenet", "thorchain") == "sthor1module"
    assert cache.size() == 1


def test_invalidate_everything():
    cache = NetworkScopedCache()
    cache.set("mainnet", "a", 1)
    cache.set("stagenet", "b", 2)

    cache.invalidate()

    assert cache.size() == 0


def test_least_recently_used_is_evicted():
    cache = NetworkScopedCache(max_size=2)
    cache.set("mainnet", "a", 1)
    cache.set("mainnet", "b", 2)
    cache.get("mainnet", "a")
    cache.set("mainnet", "c", 3)

    assert cache.get("mainnet", "b") is None
    assert cache.get("mainnet", "a") == 1


def test_ttl_expiry():
    cache = NetworkScopedCache(default_ttl=10)
    with patch("thortx.cache.time.time", return_value=1000.0):
        cache.set("mainnet", "a", 1)
    with patch("thortx.cache.time.time", return_value=1011.0):
        assert cache.get("mainnet", "a") is None

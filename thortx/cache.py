import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass
class CacheEntry:
    value: Any
    expires_at: Optional[float]


class NetworkScopedCache:
    """In-memory cache partitioned by network mode.

    Every operation is synchronous, so a clear triggered from a network switch
    completes before any coroutine can read a stale entry. ``ttl=None`` keeps
    entries until the next invalidation.
    """

    def __init__(self, default_ttl: Optional[float] = None, max_size: int = 256):
        self.default_ttl = default_ttl
        self.max_size = max_size
        self._cache: Dict[Tuple[str, str], CacheEntry] = {}
        self._access_order: list = []

    def get(self, network: str, key: str) -> Optional[Any]:
        slot = (network, key)
        entry = self._cache.get(slot)
        if entry is None:
            return None

        if entry.expires_at is not None and time.time() > entry.expires_at:
            self._drop(slot)
            return None

        # Update access order for LRU
        if slot in self._access_order:
            self._access_order.remove(slot)
        self._access_order.append(slot)
        return entry.value

    def set(self, network: str, key: str, value: Any, ttl: Optional[float] = None) -> None:
        slot = (network, key)
        ttl = ttl if ttl is not None else self.default_ttl
        expires_at = time.time() + ttl if ttl is not None else None

        self._cache[slot] = CacheEntry(value=value, expires_at=expires_at)
        if slot in self._access_order:
            self._access_order.remove(slot)
        self._access_order.append(slot)

        # Evict oldest if over max size
        while len(self._cache) > self.max_size:
            self._drop(self._access_order[0])

    def invalidate(self, network: Optional[str] = None) -> None:
        """Drop one network's entries, or everything when ``network`` is None."""
        if network is None:
            self._cache.clear()
            self._access_order.clear()
            return
        for slot in [s for s in self._cache if s[0] == network]:
            self._drop(slot)

    def _drop(self, slot: Tuple[str, str]) -> None:
        self._cache.pop(slot, None)
        if slot in self._access_order:
            self._access_order.remove(slot)

    def size(self) -> int:
        return len(self._cache)

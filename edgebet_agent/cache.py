"""Disk-backed feed cache with TTL and stale-while-revalidate reads.

Uses diskcache.FanoutCache for thread-safe storage. Entries live on disk
until their stale window closes; reads report whether the entry is still
fresh. Fetchers use fresh entries directly and fall back to stale entries
when the upstream call fails.

The cache is a key-value side-table for the feed layer only; scoring never
touches it.
"""

import asyncio
import time
from dataclasses import dataclass
from datetime import datetime

from diskcache import FanoutCache

from edgebet_agent.monitoring import CacheMetrics


@dataclass
class CacheEntry:
    """Cached payload with metadata.

    Attributes:
        data: Cached dictionary payload
        fetched_at: When the payload was stored
        is_stale: True when past TTL but inside the stale window
    """

    data: dict
    fetched_at: datetime
    is_stale: bool = False


# {data_type: {"ttl": seconds, "stale_max": seconds}}
TTL_CONFIG = {
    "odds": {"ttl": 60, "stale_max": 900},
    "injuries": {"ttl": 600, "stale_max": 3600},
    "props": {"ttl": 300, "stale_max": 1800},
}
DEFAULT_TTL = {"ttl": 300, "stale_max": 1800}


class FeedCache:
    """Disk cache for feed responses.

    Example:
        cache = FeedCache()
        entry = await cache.get("odds:basketball_nba:spreads,totals,h2h", "odds")
        if entry is None or entry.is_stale:
            games = await fetch()
            await cache.set(key, {"games": games}, "odds")
    """

    def __init__(self, cache_dir: str = ".cache/edgebet"):
        self._cache = FanoutCache(directory=cache_dir, shards=4, timeout=0.01)
        self.metrics = CacheMetrics()

    async def get(self, key: str, data_type: str) -> CacheEntry | None:
        """Async get with stale detection (runs in the default executor)."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.get_sync, key, data_type)

    async def set(self, key: str, data: dict, data_type: str) -> None:
        """Async set with TTL from TTL_CONFIG."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.set_sync, key, data, data_type)

    def get_sync(self, key: str, data_type: str) -> CacheEntry | None:
        """Read an entry.

        - age <= ttl: fresh entry
        - ttl < age <= stale_max: entry with is_stale=True
        - otherwise: None
        """
        config = TTL_CONFIG.get(data_type, DEFAULT_TTL)
        stored = self._cache.get(key, default=None)

        if stored is None:
            self.metrics.misses += 1
            return None

        age = time.time() - stored["stored_at"]
        if age > config["stale_max"]:
            self.metrics.misses += 1
            return None

        is_stale = age > config["ttl"]
        if is_stale:
            self.metrics.stale_hits += 1
        else:
            self.metrics.hits += 1

        return CacheEntry(
            data=stored["data"],
            fetched_at=datetime.fromtimestamp(stored["stored_at"]),
            is_stale=is_stale,
        )

    def set_sync(self, key: str, data: dict, data_type: str) -> None:
        config = TTL_CONFIG.get(data_type, DEFAULT_TTL)
        self._cache.set(
            key,
            {"data": data, "stored_at": time.time()},
            expire=config["stale_max"],
        )

    def clear(self) -> None:
        """Remove every cached entry."""
        self._cache.clear()

    def close(self) -> None:
        self._cache.close()

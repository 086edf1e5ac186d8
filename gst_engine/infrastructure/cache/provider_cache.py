# gst_engine/infrastructure/cache/provider_cache.py
"""
TTL caches for HSN provider results.

Two backends share one async interface (get / set / clear / size):

* MemoryProviderCache - per-process dict guarded by a lock, monotonic expiry.
* RedisProviderCache  - redis.asyncio with native key TTL, shared across
  workers.

Values are plain JSON-able dicts; keys are namespaced by the caller
(``hsn:<provider>:<code>``) so one backend can serve every provider.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

import redis.asyncio as redis

from gst_engine.core.config import settings

logger = logging.getLogger("provider_cache")

DEFAULT_SWEEP_INTERVAL_SECONDS = 5 * 60


class ProviderCache(Protocol):
    async def get(self, key: str) -> Optional[Dict[str, Any]]: ...

    async def set(self, key: str, value: Dict[str, Any], ttl_seconds: float) -> None: ...

    async def clear(self, prefix: str = "") -> None: ...

    async def size(self, prefix: str = "") -> int: ...


class MemoryProviderCache:
    """
    In-process TTL map. ``clock`` is injectable for tests.

    Expired entries are dropped when read, and swept from the whole map on
    the first ``set`` after each ``sweep_interval`` seconds.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
    ) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, Tuple[float, Dict[str, Any]]] = {}
        self._sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return dict(value)

    async def set(self, key: str, value: Dict[str, Any], ttl_seconds: float) -> None:
        now = self._clock()
        with self._lock:
            if now >= self._next_sweep:
                self._sweep(now)
            self._entries[key] = (now + ttl_seconds, dict(value))

    def _sweep(self, now: float) -> None:
        # caller holds the lock
        for key in [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]:
            del self._entries[key]
        self._next_sweep = now + self._sweep_interval

    async def clear(self, prefix: str = "") -> None:
        with self._lock:
            if not prefix:
                self._entries.clear()
                return
            for key in [k for k in self._entries if k.startswith(prefix)]:
                del self._entries[key]

    async def size(self, prefix: str = "") -> int:
        now = self._clock()
        with self._lock:
            return sum(
                1
                for key, (expires_at, _) in self._entries.items()
                if key.startswith(prefix) and expires_at > now
            )


class RedisProviderCache:
    """Shared cache on Redis; expiry is delegated to the key TTL."""

    def __init__(self, client: redis.Redis | None = None, redis_url: str | None = None) -> None:
        if client is None:
            url = redis_url or settings.REDIS_URL
            if not url:
                raise RuntimeError("REDIS_URL is not set")
            client = redis.from_url(url, decode_responses=True)
        self._r = client

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        raw = await self._r.get(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Dropping unreadable cache entry %s", key)
            await self._r.delete(key)
            return None

    async def set(self, key: str, value: Dict[str, Any], ttl_seconds: float) -> None:
        await self._r.set(key, json.dumps(value), ex=max(1, int(ttl_seconds)))

    async def clear(self, prefix: str = "") -> None:
        keys = [key async for key in self._r.scan_iter(match=f"{prefix}*")]
        if keys:
            await self._r.delete(*keys)

    async def size(self, prefix: str = "") -> int:
        count = 0
        async for _ in self._r.scan_iter(match=f"{prefix}*"):
            count += 1
        return count


def build_provider_cache(backend: str | None = None) -> ProviderCache:
    """Cache backend chosen by ``HSN_CACHE_BACKEND`` (memory | redis)."""
    backend = (backend or settings.HSN_CACHE_BACKEND or "memory").lower()
    if backend == "redis":
        logger.info("HSN provider cache: redis")
        return RedisProviderCache()
    if backend != "memory":
        logger.warning("Unknown HSN cache backend %r, using memory", backend)
    return MemoryProviderCache()

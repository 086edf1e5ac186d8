# gst_engine/infrastructure/external/hsn_provider.py
"""
Pluggable HSN lookup providers.

A provider is anything with a ``name`` and ``async fetch(code)`` returning an
HSNLookupResult or None. CachedProvider wraps one with its runtime config:
enable switch, priority, per-call timeout and a TTL cache. Every failure
below this boundary (timeout, HTTP error, bad payload, cache outage) is
logged and reported to the caller as a miss.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from gst_engine.domain.models.hsn import HSNLookupResult
from gst_engine.infrastructure.cache.provider_cache import MemoryProviderCache, ProviderCache

logger = logging.getLogger("hsn_provider")

DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_CACHE_TTL_SECONDS = 24 * 60 * 60


@dataclass
class ProviderConfig:
    enabled: bool = True
    priority: int = 1  # lower runs first
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    cache_enabled: bool = True
    cache_ttl: float = DEFAULT_CACHE_TTL_SECONDS


@runtime_checkable
class HSNProvider(Protocol):
    name: str

    async def fetch(self, code: str) -> Optional[HSNLookupResult]: ...


class CachedProvider:
    """Provider plus its config and cache; the unit HSNLookupService iterates."""

    def __init__(
        self,
        provider: HSNProvider,
        config: ProviderConfig | None = None,
        cache: ProviderCache | None = None,
    ) -> None:
        self.provider = provider
        self.config = config or ProviderConfig()
        self.cache: ProviderCache = cache if cache is not None else MemoryProviderCache()

    @property
    def name(self) -> str:
        return self.provider.name

    @property
    def priority(self) -> int:
        return self.config.priority

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def _key(self, code: str) -> str:
        return f"hsn:{self.name}:{code}"

    async def _cached(self, code: str) -> Optional[HSNLookupResult]:
        try:
            raw = await self.cache.get(self._key(code))
        except Exception as e:
            logger.warning("[%s] cache read failed for %s: %s", self.name, code, e)
            return None
        if raw is None:
            return None
        return HSNLookupResult.from_dict(raw).tagged("cache", self.name)

    async def _store(self, code: str, result: HSNLookupResult) -> None:
        try:
            await self.cache.set(self._key(code), result.to_dict(), self.config.cache_ttl)
        except Exception as e:
            logger.warning("[%s] cache write failed for %s: %s", self.name, code, e)

    async def lookup(self, code: str) -> Optional[HSNLookupResult]:
        """Cache hit, else one bounded fetch. None on disabled / miss / failure."""
        if not self.config.enabled:
            return None

        if self.config.cache_enabled:
            hit = await self._cached(code)
            if hit is not None:
                logger.debug("[%s] cache hit for %s", self.name, code)
                return hit

        try:
            result = await asyncio.wait_for(self.provider.fetch(code), timeout=self.config.timeout)
        except asyncio.TimeoutError:
            logger.warning("[%s] HSN lookup timed out after %.1fs for %s", self.name, self.config.timeout, code)
            return None
        except Exception as e:
            logger.warning("[%s] HSN lookup failed for %s: %s", self.name, code, e)
            return None

        if result is None:
            return None

        tagged = result.tagged("api", self.name)
        if self.config.cache_enabled:
            await self._store(code, tagged)
        return tagged

    async def clear_cache(self) -> None:
        await self.cache.clear(prefix=f"hsn:{self.name}:")

    async def cache_size(self) -> int:
        return await self.cache.size(prefix=f"hsn:{self.name}:")

# gst_engine/domain/services/hsn_lookup.py
"""
HSN lookup with external providers in front of the static registry.

Resolution order:
1. Registered providers, ascending priority (each with its own cache + timeout)
2. Static HSN registry (final fallback, never fails)

With ``api_only=True`` step 2 is skipped and exhaustion reports
``is_valid=False``.
"""

from __future__ import annotations

import logging
import re
import threading

from gst_engine.domain.models.hsn import HSNLookupResult
from gst_engine.domain.services.hsn_registry import HSNRegistry, get_hsn_registry
from gst_engine.infrastructure.cache.provider_cache import ProviderCache, build_provider_cache
from gst_engine.infrastructure.external.ewaybill_hsn_client import create_ewaybill_provider
from gst_engine.infrastructure.external.hsn_provider import CachedProvider
from gst_engine.infrastructure.external.sandbox_hsn_client import create_sandbox_provider

logger = logging.getLogger("hsn_lookup")

_HSN_CODE = re.compile(r"^[0-9]{2,8}$")


class HSNLookupService:
    """Provider chain plus registry fallback."""

    def __init__(self, registry: HSNRegistry | None = None) -> None:
        self.registry = registry or get_hsn_registry()
        self._providers: list[CachedProvider] = []
        self._lock = threading.Lock()

    # ---- Provider management ----

    def register_provider(self, provider: CachedProvider) -> None:
        with self._lock:
            self._providers.append(provider)
            self._providers.sort(key=lambda p: p.priority)
        logger.info("Registered HSN provider %s (priority %d)", provider.name, provider.priority)

    def get_providers(self) -> list[CachedProvider]:
        with self._lock:
            return list(self._providers)

    def clear_providers(self) -> None:
        with self._lock:
            self._providers.clear()

    # ---- Lookup ----

    def lookup(self, code: str) -> HSNLookupResult:
        """Registry-only lookup."""
        return self.registry.lookup(code)

    async def lookup_async(self, code: str, api_only: bool = False) -> HSNLookupResult:
        code = (code or "").strip()
        if not _HSN_CODE.match(code):
            return HSNLookupResult(is_valid=False, code=code, description="Invalid HSN code")

        for provider in self.get_providers():
            if not provider.enabled:
                continue
            result = await provider.lookup(code)
            if result is not None:
                logger.debug("HSN %s resolved by %s (%s)", code, result.provider, result.source)
                return result

        if api_only:
            return HSNLookupResult(
                is_valid=False,
                code=code,
                description="Not found in API providers",
                source="fallback",
            )

        logger.debug("HSN %s: no provider answered, using registry", code)
        return self.registry.lookup(code).tagged("fallback")

    async def clear_caches(self) -> None:
        for provider in self.get_providers():
            await provider.clear_cache()


def build_providers_from_settings(cache: ProviderCache | None = None) -> list[CachedProvider]:
    """Configured providers (those with credentials), sharing one cache backend."""
    cache = cache if cache is not None else build_provider_cache()
    providers = []
    for factory in (create_ewaybill_provider, create_sandbox_provider):
        provider = factory(cache=cache)
        if provider is not None:
            providers.append(provider)
    return providers


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_service: HSNLookupService | None = None


def get_hsn_lookup_service() -> HSNLookupService:
    """Shared service with every provider configured in settings registered."""
    global _service
    if _service is None:
        service = HSNLookupService()
        for provider in build_providers_from_settings():
            service.register_provider(provider)
        _service = service
    return _service

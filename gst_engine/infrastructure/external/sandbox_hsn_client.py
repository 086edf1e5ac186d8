# gst_engine/infrastructure/external/sandbox_hsn_client.py
"""
Sandbox.co.in HSN details API.

GET {base}/hsn/{code}
Headers: x-api-key, x-api-secret, x-api-version
404 means the code is unknown to Sandbox (a miss, not an error).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from gst_engine.core.config import settings
from gst_engine.domain.models.hsn import HSNLookupResult
from gst_engine.infrastructure.external.hsn_provider import CachedProvider, ProviderConfig

logger = logging.getLogger("sandbox_hsn_client")

_API_VERSION = "2.0"


class SandboxHSNError(Exception):
    """Raised when the Sandbox API answers with anything but 200 / 404."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code


class SandboxHSNProvider:
    name = "sandbox"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        api_secret: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base = base_url.rstrip("/")
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "x-api-secret": self.api_secret,
            "x-api-version": _API_VERSION,
        }

    async def fetch(self, code: str) -> Optional[HSNLookupResult]:
        url = f"{self.base}/hsn/{code}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            r = await client.get(url, headers=self._headers())

        if r.status_code == 404:
            logger.info("Sandbox has no HSN %s", code)
            return None
        if r.status_code != 200:
            raise SandboxHSNError(f"HSN lookup failed: {r.status_code}", status_code=r.status_code)

        return _parse(r.json(), code)


def _parse(payload: Dict[str, Any], code: str) -> Optional[HSNLookupResult]:
    # Some plans wrap the record in "data"
    data = payload.get("data") if isinstance(payload.get("data"), dict) else payload
    if not data:
        return None
    return HSNLookupResult.from_dict(
        {
            "is_valid": True,
            "code": data.get("hsn_code") or code,
            "description": data.get("description") or "",
            "gst_rate": data.get("gst_rate"),
            "cess": data.get("cess_rate"),
            "unit": data.get("unit"),
            "chapter": data.get("chapter"),
            "source": "api",
        }
    )


def create_sandbox_provider(**overrides: Any) -> Optional[CachedProvider]:
    """Provider from settings; None without API key and secret."""
    api_key = overrides.pop("api_key", settings.SANDBOX_API_KEY)
    api_secret = overrides.pop("api_secret", settings.SANDBOX_API_SECRET)
    if not (api_key and api_secret):
        return None

    config = ProviderConfig(
        enabled=overrides.pop("enabled", settings.SANDBOX_ENABLED),
        priority=overrides.pop("priority", settings.SANDBOX_PRIORITY),
        timeout=overrides.pop("timeout", settings.SANDBOX_TIMEOUT),
        cache_enabled=overrides.pop("cache_enabled", settings.SANDBOX_CACHE_ENABLED),
        cache_ttl=overrides.pop("cache_ttl", settings.SANDBOX_CACHE_TTL),
    )
    cache = overrides.pop("cache", None)
    provider = SandboxHSNProvider(
        base_url=overrides.pop("base_url", settings.SANDBOX_BASE_URL),
        api_key=api_key,
        api_secret=api_secret,
        timeout=config.timeout,
        **overrides,
    )
    return CachedProvider(provider, config, cache)

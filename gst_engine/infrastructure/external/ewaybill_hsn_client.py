# gst_engine/infrastructure/external/ewaybill_hsn_client.py
"""
HSN master lookup through the MasterGST / WhiteBooks e-WayBill API.

MasterGST handles the NIC session-key encryption, so responses are plain
JSON. Authentication follows the e-WayBill flow:

  GET /ewaybillapi/v1.03/authenticate   (username + password + email query)
  Headers: ip_address, client_id, client_secret, gstin

The auth token is valid for 6 hours and is reused until then.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

import httpx

from gst_engine.core.config import settings
from gst_engine.domain.models.hsn import HSNLookupResult
from gst_engine.infrastructure.external.hsn_provider import CachedProvider, ProviderConfig

logger = logging.getLogger("ewaybill_hsn_client")

_API_PREFIX = "/ewaybillapi/v1.03"
_TOKEN_TTL_SECONDS = 6 * 60 * 60


class EWayBillHSNError(Exception):
    """Raised when the e-WayBill API rejects a call."""

    def __init__(self, message: str, status_code: int = 0, response: dict | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response or {}


class EWayBillHSNProvider:
    name = "ewaybill"

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        gstin: str,
        email: str,
        client_id: str = "",
        client_secret: str = "",
        ip_address: str = "127.0.0.1",
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.base = base_url.rstrip("/")
        self.username = username
        self.password = password
        self.gstin = gstin
        self.email = email
        self.client_id = client_id
        self.client_secret = client_secret
        self.ip_address = ip_address
        self.timeout = timeout
        self._transport = transport
        self._clock = clock
        self._auth_token: str | None = None
        self._token_expiry = 0.0

    # ----------------------------------------------------------------
    # Header & transport helpers
    # ----------------------------------------------------------------

    def _base_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "ip_address": self.ip_address,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "gstin": self.gstin,
        }

    async def _get(self, path: str, headers: Dict[str, str], params: Dict[str, str]) -> Dict[str, Any]:
        url = f"{self.base}{path}"
        logger.info("e-WayBill GET %s", path)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            r = await client.get(url, headers=headers, params=params)
        if r.status_code != 200:
            raise EWayBillHSNError(f"e-WayBill API error: {r.status_code}", status_code=r.status_code)
        return r.json()

    # ----------------------------------------------------------------
    # Authentication
    # ----------------------------------------------------------------

    @property
    def token_valid(self) -> bool:
        return bool(self._auth_token) and self._clock() < self._token_expiry

    async def authenticate(self) -> str:
        resp = await self._get(
            f"{_API_PREFIX}/authenticate",
            headers=self._base_headers(),
            params={"email": self.email, "username": self.username, "password": self.password},
        )
        data = resp.get("data") or {}
        token = data.get("authtoken") or data.get("auth_token") or resp.get("authtoken") or ""
        if str(resp.get("status_cd", "0")) != "1" or not token:
            raise EWayBillHSNError("Failed to obtain e-WayBill auth token", response=resp)

        self._auth_token = token
        self._token_expiry = self._clock() + _TOKEN_TTL_SECONDS
        logger.info("Authenticated with e-WayBill API for GSTIN %s", self.gstin)
        return token

    async def _ensure_token(self) -> str:
        if self.token_valid:
            return self._auth_token  # type: ignore[return-value]
        return await self.authenticate()

    # ----------------------------------------------------------------
    # HSN master
    # ----------------------------------------------------------------

    async def fetch(self, code: str) -> Optional[HSNLookupResult]:
        token = await self._ensure_token()
        headers = self._base_headers()
        headers["authtoken"] = token

        resp = await self._get(
            f"{_API_PREFIX}/ewayapi/gethsndetailsbyhsncode",
            headers=headers,
            params={"email": self.email, "hsncode": code},
        )
        if str(resp.get("status_cd", "0")) != "1":
            logger.info("e-WayBill has no HSN %s: %s", code, resp.get("status_desc") or resp.get("error"))
            return None

        data = resp.get("data") or {}
        if isinstance(data, list):
            data = data[0] if data else {}
        if not data:
            return None

        return HSNLookupResult(
            is_valid=True,
            code=str(data.get("hsnCode") or code),
            description=data.get("hsnDesc") or data.get("description") or "",
            chapter=str(data.get("hsnCode") or code)[:2],
            source="api",
        )


def create_ewaybill_provider(**overrides: Any) -> Optional[CachedProvider]:
    """Provider from settings; None unless username, password, GSTIN and email are set."""
    username = overrides.pop("username", settings.EWAYBILL_USERNAME)
    password = overrides.pop("password", settings.EWAYBILL_PASSWORD)
    gstin = overrides.pop("gstin", settings.EWAYBILL_GSTIN)
    email = overrides.pop("email", settings.EWAYBILL_EMAIL)
    if not (username and password and gstin and email):
        return None

    config = ProviderConfig(
        enabled=overrides.pop("enabled", settings.EWAYBILL_ENABLED),
        priority=overrides.pop("priority", settings.EWAYBILL_PRIORITY),
        timeout=overrides.pop("timeout", settings.EWAYBILL_TIMEOUT),
        cache_enabled=overrides.pop("cache_enabled", settings.EWAYBILL_CACHE_ENABLED),
        cache_ttl=overrides.pop("cache_ttl", settings.EWAYBILL_CACHE_TTL),
    )
    cache = overrides.pop("cache", None)
    provider = EWayBillHSNProvider(
        base_url=overrides.pop("base_url", settings.EWAYBILL_BASE_URL),
        username=username,
        password=password,
        gstin=gstin,
        email=email,
        client_id=overrides.pop("client_id", settings.EWAYBILL_CLIENT_ID),
        client_secret=overrides.pop("client_secret", settings.EWAYBILL_CLIENT_SECRET),
        ip_address=overrides.pop("ip_address", settings.EWAYBILL_IP_ADDRESS),
        timeout=config.timeout,
        **overrides,
    )
    return CachedProvider(provider, config, cache)

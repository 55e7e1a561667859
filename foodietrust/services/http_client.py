"""Thin httpx wrapper shared by the vendor API clients."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class VendorError(Exception):
    """A vendor API call failed (transport error, non-2xx, or error payload)."""

    def __init__(self, vendor: str, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"{vendor}: {message}")
        self.vendor = vendor
        self.status_code = status_code


class VendorClient:
    """
    Base for JSON-over-HTTP vendor clients.

    Pass `client` to reuse a connection pool (or a MockTransport in tests);
    otherwise each call opens a short-lived AsyncClient.
    """

    vendor = ""
    base_url = ""

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self._client = client

    def _headers(self) -> dict[str, str]:
        return {}

    async def _get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        url = path if path.startswith("http") else f"{self.base_url}{path}"
        params = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            if self._client is not None:
                response = await self._client.get(url, params=params, headers=self._headers())
            else:
                timeout = httpx.Timeout(self.timeout_seconds, connect=min(self.timeout_seconds, 5.0))
                async with httpx.AsyncClient(timeout=timeout) as client:
                    response = await client.get(url, params=params, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            body = re.sub(r"\s+", " ", exc.response.text or "")[:200]
            raise VendorError(self.vendor, f"HTTP {status}: {body}", status_code=status) from exc
        except httpx.HTTPError as exc:
            raise VendorError(self.vendor, f"{type(exc).__name__}: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise VendorError(self.vendor, "Response is not valid JSON") from exc

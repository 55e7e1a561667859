"""Zomato search client."""

from __future__ import annotations

from typing import Any

from foodietrust.services.http_client import VendorClient


class ZomatoClient(VendorClient):
    vendor = "Zomato"
    base_url = "https://developers.zomato.com/api/v2.1"

    def _headers(self) -> dict[str, str]:
        return {"user-key": self.api_key or ""}

    async def search(self, query: str, entity_id: str, entity_type: str = "city") -> dict[str, Any]:
        return await self._get_json(
            "/search", {"q": query, "entity_type": entity_type, "entity_id": entity_id}
        )

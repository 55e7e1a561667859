"""Yelp Fusion client: business search and business reviews."""

from __future__ import annotations

from typing import Any, Optional

from foodietrust.services.http_client import VendorClient, VendorError


class YelpClient(VendorClient):
    vendor = "Yelp"
    base_url = "https://api.yelp.com/v3"

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key or ''}"}

    def _require_key(self) -> None:
        if not self.api_key:
            raise VendorError(self.vendor, "Missing YELP_API_KEY")

    async def search_businesses(
        self,
        term: str,
        location: str,
        categories: Optional[str] = None,
        limit: Optional[int] = None,
        sort_by: Optional[str] = None,
    ) -> dict[str, Any]:
        self._require_key()
        return await self._get_json(
            "/businesses/search",
            {
                "term": term,
                "location": location,
                "categories": categories,
                "limit": str(limit) if limit else None,
                "sort_by": sort_by,
            },
        )

    async def business_reviews(self, business_id: str) -> dict[str, Any]:
        self._require_key()
        return await self._get_json(f"/businesses/{business_id}/reviews")

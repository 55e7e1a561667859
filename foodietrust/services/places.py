"""
Google Places client: nearby search, text search and place details.

Used by the AI gateway to ground answers in real restaurants, and by the
Google crawler to pull reviews.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from foodietrust.services.http_client import VendorClient, VendorError

logger = logging.getLogger(__name__)

_OK_STATUSES = {"OK", "ZERO_RESULTS"}

DETAIL_FIELDS = "name,place_id,photos,reviews,types"


@dataclass
class PlaceSummary:
    place_id: str
    name: str
    address: Optional[str] = None
    rating: Optional[float] = None
    review_count: int = 0
    open_now: Optional[bool] = None
    types: list[str] = field(default_factory=list)

    @classmethod
    def from_result(cls, result: dict[str, Any]) -> "PlaceSummary":
        rating = result.get("rating")
        return cls(
            place_id=result.get("place_id", ""),
            name=result.get("name", ""),
            address=result.get("formatted_address") or result.get("vicinity"),
            rating=float(rating) if rating is not None else None,
            review_count=int(result.get("user_ratings_total") or 0),
            open_now=(result.get("opening_hours") or {}).get("open_now"),
            types=list(result.get("types") or []),
        )


class GooglePlacesClient(VendorClient):
    vendor = "GooglePlaces"
    base_url = "https://maps.googleapis.com/maps/api/place"

    async def _call(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        if not self.api_key:
            raise VendorError(self.vendor, "Missing GOOGLE_PLACES_API_KEY")
        data = await self._get_json(path, {**params, "key": self.api_key})
        status = data.get("status", "OK")
        if status not in _OK_STATUSES:
            raise VendorError(
                self.vendor, f"{status}: {data.get('error_message', 'request failed')}"
            )
        return data

    async def nearby_search(
        self,
        lat: float,
        lng: float,
        radius: int = 5000,
        place_type: str = "restaurant",
        keyword: Optional[str] = None,
    ) -> dict[str, Any]:
        return await self._call(
            "/nearbysearch/json",
            {
                "location": f"{lat},{lng}",
                "radius": str(radius),
                "type": place_type,
                "keyword": keyword,
            },
        )

    async def text_search(self, query: str, place_type: str = "restaurant") -> dict[str, Any]:
        return await self._call("/textsearch/json", {"query": query, "type": place_type})

    async def place_details(self, place_id: str, fields: str = DETAIL_FIELDS) -> dict[str, Any]:
        return await self._call("/details/json", {"place_id": place_id, "fields": fields})

    async def find_restaurants(
        self,
        dish_query: str,
        place: Optional[str] = None,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        limit: int = 5,
    ) -> list[PlaceSummary]:
        """
        Restaurants serving `dish_query`, searched by coordinates when given,
        otherwise by a "<dish> in <place>" text query. Sorted by rating.
        """
        if lat is not None and lng is not None:
            data = await self.nearby_search(lat, lng, keyword=dish_query or None)
        elif place:
            data = await self.text_search(f"{dish_query or 'restaurants'} in {place}")
        else:
            return []

        places = [PlaceSummary.from_result(r) for r in data.get("results") or []]
        places.sort(key=lambda p: (p.rating or 0.0, p.review_count), reverse=True)
        return places[:limit]

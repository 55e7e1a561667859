"""
Swiggy menu proxy: fetches a restaurant's full menu and flattens it into
DishMenuItem records.

The menu payload is a list of "cards". One of them carries the restaurant
info; the grouped REGULAR card holds categories, some of which nest further
sub-categories. Item prices are in paise.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

from foodietrust.errors import InternalError, NotFoundError
from foodietrust.schemas.menu import DishMenuItem, SwiggyMenuResponse
from foodietrust.services.http_client import VendorClient, VendorError

logger = logging.getLogger(__name__)

IMAGE_CDN = (
    "https://media-assets.swiggy.com/swiggy/image/upload/"
    "fl_lossy,f_auto,q_auto,w_300,h_300,c_fit/"
)

_RESTAURANT_TYPE_SUFFIX = "food.v2.Restaurant"


class SwiggyClient(VendorClient):
    vendor = "Swiggy"
    base_url = "https://www.swiggy.com/dapi"

    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": (
                "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
                "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
            ),
            "Accept": "application/json",
        }

    async def fetch_menu(self, lat: float, lng: float, restaurant_id: str) -> dict[str, Any]:
        return await self._get_json(
            "/menu/pl",
            {
                "page-type": "REGULAR_MENU",
                "complete-menu": "true",
                "lat": str(lat),
                "lng": str(lng),
                "restaurantId": restaurant_id,
            },
        )


def _inner(card: dict[str, Any]) -> dict[str, Any]:
    return (card.get("card") or {}).get("card") or {}


def _restaurant_name(cards: list[dict[str, Any]]) -> str:
    for card in cards:
        inner = _inner(card)
        info = inner.get("info") or {}
        if inner.get("@type", "").endswith(_RESTAURANT_TYPE_SUFFIX) and info.get("name"):
            return info["name"]
    for card in cards:
        info = _inner(card).get("info") or {}
        if info.get("name") and "cuisines" in info:
            return info["name"]
    return ""


def _iter_item_infos(cards: list[dict[str, Any]]) -> Iterator[tuple[str, dict[str, Any]]]:
    """Yield (category title, item info) from every regular and nested category."""
    for card in cards:
        group_map = (card.get("groupedCard") or {}).get("cardGroupMap") or {}
        grouped = group_map.get("REGULAR") or {}
        for group_card in grouped.get("cards") or []:
            inner = _inner(group_card)
            title = inner.get("title", "")
            for item_card in inner.get("itemCards") or []:
                yield title, (item_card.get("card") or {}).get("info") or {}
            for category in inner.get("categories") or []:
                sub_title = category.get("title") or title
                for item_card in category.get("itemCards") or []:
                    yield sub_title, (item_card.get("card") or {}).get("info") or {}


def _rating(info: dict[str, Any]) -> tuple[Optional[float], Optional[str]]:
    aggregated = (info.get("ratings") or {}).get("aggregatedRating") or {}
    raw = aggregated.get("rating")
    try:
        rating = float(raw) if raw not in (None, "") else None
    except (TypeError, ValueError):
        rating = None
    return rating, aggregated.get("ratingCountV2") or aggregated.get("ratingCount")


def _to_menu_item(category: str, info: dict[str, Any]) -> Optional[DishMenuItem]:
    if not info.get("id") or not info.get("name"):
        return None
    paise = info.get("price") or info.get("defaultPrice") or 0
    veg_classifier = (info.get("itemAttribute") or {}).get("vegClassifier")
    image_id = info.get("imageId")
    rating, rating_count = _rating(info)
    return DishMenuItem(
        id=str(info["id"]),
        name=info["name"],
        description=info.get("description") or "",
        price=round(float(paise) / 100, 2),
        category=info.get("category") or category,
        is_veg=info.get("isVeg") == 1 or veg_classifier == "VEG",
        image_url=f"{IMAGE_CDN}{image_id}" if image_id else None,
        rating=rating,
        rating_count=rating_count,
    )


def parse_menu(payload: dict[str, Any], restaurant_id: str) -> SwiggyMenuResponse:
    """Flatten a Swiggy menu payload. Duplicate item ids keep their first occurrence."""
    cards = (payload.get("data") or {}).get("cards") or []

    dishes: list[DishMenuItem] = []
    seen: set[str] = set()
    for category, info in _iter_item_infos(cards):
        item = _to_menu_item(category, info)
        if item is None or item.id in seen:
            continue
        seen.add(item.id)
        dishes.append(item)

    return SwiggyMenuResponse(
        success=True,
        restaurant_id=restaurant_id,
        restaurant_name=_restaurant_name(cards),
        dishes=dishes,
        total_dishes=len(dishes),
    )


async def get_swiggy_menu(
    lat: float,
    lng: float,
    restaurant_id: str,
    client: Optional[SwiggyClient] = None,
) -> SwiggyMenuResponse:
    """Fetch and parse a menu. Upstream 404 -> not-found, anything else -> internal."""
    client = client or SwiggyClient()
    try:
        payload = await client.fetch_menu(lat, lng, restaurant_id)
    except VendorError as exc:
        if exc.status_code == 404:
            raise NotFoundError(f"Restaurant {restaurant_id} not found on Swiggy") from exc
        logger.error("Swiggy menu fetch failed for %s: %s", restaurant_id, exc)
        raise InternalError("Failed to fetch menu from Swiggy") from exc

    menu = parse_menu(payload, restaurant_id)
    logger.info(
        "Swiggy menu for %s (%s): %d dishes",
        restaurant_id, menu.restaurant_name or "unknown", menu.total_dishes,
    )
    return menu

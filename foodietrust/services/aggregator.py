"""
Data aggregator: search Zomato and Yelp for a dish, relabel both vendors into
the common VendorListing shape, then group listings by dish name.

Grouping is by exact dish-name string; there is no fuzzy matching.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from foodietrust.config import settings
from foodietrust.schemas.dish import AggregatedDish, VendorListing
from foodietrust.services.http_client import VendorError
from foodietrust.services.yelp import YelpClient
from foodietrust.services.zomato import ZomatoClient

logger = logging.getLogger(__name__)

# Yelp price is "$".."$$$$"; a missing price counts as mid-range
_DEFAULT_YELP_PRICE = 2


async def search_zomato(
    dish: str, location: str, client: Optional[ZomatoClient] = None
) -> Optional[dict[str, Any]]:
    """Raw Zomato search payload, or None on any failure."""
    client = client or ZomatoClient(settings.zomato_key, timeout_seconds=settings.vendor_timeout_seconds)
    try:
        return await client.search(dish, entity_id=location)
    except VendorError as exc:
        logger.error("Zomato API error: %s", exc)
        return None


async def search_yelp(
    dish: str, location: str, client: Optional[YelpClient] = None
) -> Optional[dict[str, Any]]:
    """Raw Yelp search payload, or None on any failure."""
    client = client or YelpClient(settings.yelp_api_key, timeout_seconds=settings.vendor_timeout_seconds)
    try:
        return await client.search_businesses(dish, location, categories="restaurants")
    except VendorError as exc:
        logger.error("Yelp API error: %s", exc)
        return None


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_int(value: Any) -> int:
    try:
        return int(str(value).replace(",", ""))
    except (TypeError, ValueError):
        return 0


def format_zomato_results(data: dict[str, Any]) -> list[VendorListing]:
    results = []
    for entry in data.get("restaurants") or []:
        restaurant = entry.get("restaurant") or {}
        rating = _to_float((restaurant.get("user_rating") or {}).get("aggregate_rating"))
        results.append(
            VendorListing(
                dish_name=restaurant.get("name", ""),
                restaurant_name=restaurant.get("name", ""),
                address=(restaurant.get("location") or {}).get("address"),
                rating=rating,
                price=restaurant.get("price_range"),
                review_count=_to_int(restaurant.get("all_reviews_count")),
                sources={"zomato": rating},
            )
        )
    return results


def format_yelp_results(data: dict[str, Any]) -> list[VendorListing]:
    results = []
    for business in data.get("businesses") or []:
        rating = _to_float(business.get("rating"))
        price = business.get("price")
        results.append(
            VendorListing(
                dish_name=business.get("name", ""),
                restaurant_name=business.get("name", ""),
                address=(business.get("location") or {}).get("address1"),
                rating=rating,
                price=len(price) if price else _DEFAULT_YELP_PRICE,
                review_count=_to_int(business.get("review_count")),
                sources={"yelp": rating},
            )
        )
    return results


def consolidate_by_dish(listings: list[VendorListing]) -> list[AggregatedDish]:
    """
    Group listings by exact dish name, in first-seen order.
    aggregated_rating is the unweighted mean of the group's ratings and
    total_reviews the sum of its review counts.
    """
    groups: dict[str, AggregatedDish] = {}
    for listing in listings:
        dish = groups.get(listing.dish_name)
        if dish is None:
            dish = groups[listing.dish_name] = AggregatedDish(dish_name=listing.dish_name)
        dish.available_at.append(listing)
        dish.total_reviews += listing.review_count

    for dish in groups.values():
        ratings = [listing.rating for listing in dish.available_at]
        dish.aggregated_rating = sum(ratings) / len(ratings) if ratings else 0.0

    return list(groups.values())


async def aggregate_dish_data(
    dish_name: str,
    location: str,
    zomato: Optional[ZomatoClient] = None,
    yelp: Optional[YelpClient] = None,
) -> list[AggregatedDish]:
    """Query both vendors concurrently; either one may fail without affecting the other."""
    zomato_data, yelp_data = await asyncio.gather(
        search_zomato(dish_name, location, zomato),
        search_yelp(dish_name, location, yelp),
        return_exceptions=True,
    )

    listings: list[VendorListing] = []
    if isinstance(zomato_data, dict):
        listings.extend(format_zomato_results(zomato_data))
    elif isinstance(zomato_data, BaseException):
        logger.error("Zomato search raised: %s", zomato_data)
    if isinstance(yelp_data, dict):
        listings.extend(format_yelp_results(yelp_data))
    elif isinstance(yelp_data, BaseException):
        logger.error("Yelp search raised: %s", yelp_data)

    aggregated = consolidate_by_dish(listings)
    logger.info(
        "Aggregated %d listings into %d dishes for %r in %r",
        len(listings), len(aggregated), dish_name, location,
    )
    return aggregated

"""
Review crawlers for Google Places and Yelp.

Each run is linear and one-shot:
  1. list restaurants around the configured city
  2. fetch each restaurant's reviews
  3. find dish mentions in every review (fixed vocabulary, substring match)
  4. per (review, dish): upsert the dish, append the review under it and
     keep the raw review in crawled_items

Any unhandled error aborts the whole run; the caller reports it.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from foodietrust.config import Settings
from foodietrust.services.dish_service import (
    add_crawled_item,
    add_review_under_dish,
    ensure_dish,
    touch_dish,
)
from foodietrust.services.http_client import VendorError
from foodietrust.services.places import GooglePlacesClient
from foodietrust.services.yelp import YelpClient
from foodietrust.utils.food_terms import CRAWL_DISH_VOCABULARY

logger = logging.getLogger(__name__)

YELP_SEARCH_LIMIT = 20


class CrawlError(Exception):
    """A crawl run could not start or was aborted."""


@dataclass
class CrawlStats:
    restaurants: int = 0
    reviews: int = 0
    mentions: int = 0
    dishes_created: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


def extract_dish_mentions(text: str) -> list[str]:
    """Vocabulary dishes contained in text (case-insensitive), in vocabulary order."""
    if not text:
        return []
    lower = text.lower()
    return [dish for dish in CRAWL_DISH_VOCABULARY if dish in lower]


def _valid_rating(value: Any) -> Optional[int]:
    try:
        rating = int(round(float(value)))
    except (TypeError, ValueError):
        return None
    return rating if 1 <= rating <= 5 else None


async def _record_mention(
    db: AsyncSession,
    stats: CrawlStats,
    *,
    source: str,
    dish_name: str,
    restaurant_name: str,
    city: str,
    cuisine: str,
    tags: list[str],
    photo_url: Optional[str],
    review: dict[str, Any],
    review_fields: dict[str, Any],
    external_id: str,
) -> None:
    dish, created = await ensure_dish(
        db,
        name=dish_name,
        restaurant_name=restaurant_name,
        location=city,
        cuisine=cuisine,
        photo_url=photo_url,
        tags=tags,
    )
    if created:
        stats.dishes_created += 1
    else:
        await touch_dish(db, dish)

    await add_review_under_dish(db, dish.id, source=source, **review_fields)
    await add_crawled_item(
        db,
        source=source,
        external_id=external_id,
        external_name=restaurant_name,
        dish_name=dish_name,
        payload=review,
    )
    stats.mentions += 1


async def crawl_google(
    db: AsyncSession,
    settings: Settings,
    client: Optional[GooglePlacesClient] = None,
) -> CrawlStats:
    """Crawl Google Places reviews around the configured city centre."""
    if not settings.places_key:
        raise CrawlError("Missing GOOGLE_PLACES_API_KEY")
    client = client or GooglePlacesClient(
        settings.places_key, timeout_seconds=settings.vendor_timeout_seconds
    )
    city = settings.crawl_city
    stats = CrawlStats()

    nearby = await client.nearby_search(
        settings.crawl_lat, settings.crawl_lng, radius=settings.crawl_radius_m
    )
    for place in nearby.get("results") or []:
        details = await client.place_details(place["place_id"])
        result = details.get("result") or {}
        name = result.get("name") or place.get("name", "")
        types = list(result.get("types") or [])
        stats.restaurants += 1

        for review in result.get("reviews") or []:
            stats.reviews += 1
            comment = review.get("text") or review.get("content") or ""
            for dish_name in extract_dish_mentions(comment):
                await _record_mention(
                    db,
                    stats,
                    source="google",
                    dish_name=dish_name,
                    restaurant_name=name,
                    city=city,
                    cuisine=types[0] if types else "",
                    tags=types,
                    photo_url=None,
                    review=review,
                    review_fields={
                        "user_id": f"google:{review.get('author_url') or 'unknown'}",
                        "user_name": review.get("author_name") or "Google User",
                        "rating": _valid_rating(review.get("rating")),
                        "comment": comment,
                    },
                    external_id=result.get("place_id") or place["place_id"],
                )

    logger.info("Google crawl of %s finished: %s", city, stats.as_dict())
    return stats


async def crawl_yelp(
    db: AsyncSession,
    settings: Settings,
    client: Optional[YelpClient] = None,
) -> CrawlStats:
    """Crawl Yelp reviews for the top-rated restaurants in the configured city."""
    if not settings.yelp_api_key:
        raise CrawlError("Missing YELP_API_KEY")
    client = client or YelpClient(
        settings.yelp_api_key, timeout_seconds=settings.vendor_timeout_seconds
    )
    city = settings.crawl_city
    stats = CrawlStats()

    search = await client.search_businesses(
        "restaurants", f"{city}, IN", limit=YELP_SEARCH_LIMIT, sort_by="rating"
    )
    for business in search.get("businesses") or []:
        categories = [c.get("title", "") for c in business.get("categories") or []]
        reviews = await client.business_reviews(business["id"])
        stats.restaurants += 1

        for review in reviews.get("reviews") or []:
            stats.reviews += 1
            comment = review.get("text") or ""
            user = review.get("user") or {}
            for dish_name in extract_dish_mentions(comment):
                await _record_mention(
                    db,
                    stats,
                    source="yelp",
                    dish_name=dish_name,
                    restaurant_name=business.get("name", ""),
                    city=city,
                    cuisine=categories[0] if categories else "",
                    tags=categories,
                    photo_url=business.get("image_url"),
                    review=review,
                    review_fields={
                        "user_id": f"yelp:{user.get('id') or 'unknown'}",
                        "user_name": user.get("name") or "Yelp User",
                        "rating": _valid_rating(review.get("rating")),
                        "comment": comment,
                    },
                    external_id=business["id"],
                )

    logger.info("Yelp crawl of %s finished: %s", city, stats.as_dict())
    return stats


CRAWLERS = {
    "google": crawl_google,
    "yelp": crawl_yelp,
}


async def run_crawler(source: str, db: AsyncSession, settings: Settings) -> CrawlStats:
    """Run one crawler by name; vendor failures surface as CrawlError."""
    try:
        crawler = CRAWLERS[source]
    except KeyError:
        raise CrawlError(f"Unknown crawl source {source!r}") from None
    try:
        return await crawler(db, settings)
    except VendorError as exc:
        raise CrawlError(str(exc)) from exc

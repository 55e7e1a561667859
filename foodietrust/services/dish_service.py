"""
Dish and review persistence.

Dishes are unique by (name, restaurant_name, location) on a best-effort basis;
dishes named in a user review match on (name, restaurant_name) only.
ensure_dish reads, then inserts if nothing matched. There is no transaction
around the pair, so two concurrent writers can both insert.
Reviews are append-only; every append recomputes the dish's review_count and
average_rating from the stored reviews.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from foodietrust.errors import NotFoundError
from foodietrust.models import CrawledItem, Dish, Review
from foodietrust.schemas.review import RestaurantReviewCreate, UserReviewSubmission

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 50

# Defaults for dishes first seen through a user review
DEFAULT_CUISINE = "Indian"
DEFAULT_CATEGORY = "Main Course"
DEFAULT_LOCATION = "Chennai"


def _matches(dish: Dish, needle: str) -> bool:
    haystacks = [
        dish.name,
        dish.description,
        dish.cuisine,
        dish.restaurant_name,
        dish.location,
        *(dish.tags or []),
    ]
    return any(needle in (h or "").lower() for h in haystacks)


async def search_dishes(
    db: AsyncSession,
    query: str = "",
    location: Optional[str] = None,
    limit: int = SEARCH_LIMIT,
) -> list[Dish]:
    """
    Up to `limit` dishes ordered by name, optionally restricted to one
    location, then filtered by a case-insensitive substring match.
    """
    stmt = select(Dish)
    if location:
        stmt = stmt.where(Dish.location == location)
    stmt = stmt.order_by(Dish.name).limit(limit)
    dishes = list((await db.execute(stmt)).scalars().all())

    needle = (query or "").strip().lower()
    if not needle:
        return dishes
    return [d for d in dishes if _matches(d, needle)]


async def get_dish(db: AsyncSession, dish_id: int) -> Dish:
    dish = await db.get(Dish, dish_id)
    if dish is None:
        raise NotFoundError(f"Dish {dish_id} not found", reason="dish-not-found")
    return dish


async def get_dish_reviews(db: AsyncSession, dish_id: int) -> list[Review]:
    """Reviews for a dish, newest first."""
    await get_dish(db, dish_id)
    result = await db.execute(
        select(Review)
        .where(Review.dish_id == dish_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
    )
    return list(result.scalars().all())


async def ensure_dish(
    db: AsyncSession,
    name: str,
    restaurant_name: str = "",
    location: str = "",
    cuisine: str = "",
    photo_url: Optional[str] = None,
    tags: Optional[Sequence[str]] = None,
    match_location: bool = True,
    **extra: Any,
) -> tuple[Dish, bool]:
    """
    Return the dish matching (name, restaurant_name, location), creating it
    when absent. The boolean is True when a new row was inserted.

    With match_location=False an existing dish matches on name and
    restaurant alone, whatever its location.
    """
    stmt = select(Dish).where(
        Dish.name == name,
        Dish.restaurant_name == (restaurant_name or ""),
    )
    if match_location:
        stmt = stmt.where(Dish.location == (location or ""))
    result = await db.execute(stmt.order_by(Dish.id).limit(1))
    existing = result.scalars().first()
    if existing is not None:
        return existing, False

    now = datetime.now(timezone.utc)
    dish = Dish(
        name=name,
        restaurant_name=restaurant_name or "",
        location=location or "",
        cuisine=cuisine or "",
        photo_url=photo_url,
        tags=list(tags or []),
        average_rating=0.0,
        review_count=0,
        created_at=now,
        updated_at=now,
        **extra,
    )
    db.add(dish)
    await db.commit()
    await db.refresh(dish)
    logger.debug("Created dish %s (%s @ %s, %s)", dish.id, name, restaurant_name, location)
    return dish, True


async def touch_dish(db: AsyncSession, dish: Dish) -> None:
    dish.updated_at = datetime.now(timezone.utc)
    await db.commit()


async def add_review_under_dish(
    db: AsyncSession,
    dish_id: int,
    *,
    user_id: str,
    user_name: str = "Anonymous",
    rating: Optional[int] = None,
    comment: str = "",
    photo_url: Optional[str] = None,
    tags: Optional[Sequence[str]] = None,
    source: str = "user",
) -> Review:
    """Append a review and recompute the dish's count and average rating."""
    dish = await get_dish(db, dish_id)

    review = Review(
        dish_id=dish.id,
        user_id=user_id,
        user_name=user_name or "Anonymous",
        rating=rating,
        comment=comment or "",
        photo_url=photo_url,
        tags=list(tags or []),
        source=source,
        created_at=datetime.now(timezone.utc),
    )
    db.add(review)
    await db.flush()

    count, average = (
        await db.execute(
            select(func.count(Review.id), func.avg(Review.rating)).where(
                Review.dish_id == dish.id
            )
        )
    ).one()
    dish.review_count = int(count or 0)
    dish.average_rating = float(average or 0.0)
    dish.updated_at = datetime.now(timezone.utc)
    if photo_url and not dish.photo_url:
        dish.photo_url = photo_url

    if source == "user":
        await db.execute(
            text("UPDATE users SET review_count = review_count + 1 WHERE uid = :uid"),
            {"uid": user_id},
        )

    await db.commit()
    await db.refresh(review)
    return review


async def create_dish_from_review(
    db: AsyncSession, submission: UserReviewSubmission
) -> tuple[Dish, bool, Review]:
    """Ensure the reviewed dish exists, then append the review to it."""
    dish, created = await ensure_dish(
        db,
        name=submission.dish_name,
        restaurant_name=submission.restaurant_name,
        location=submission.location or DEFAULT_LOCATION,
        cuisine=DEFAULT_CUISINE,
        photo_url=submission.photo_url,
        tags=submission.tags,
        match_location=False,
        description=f"Delicious {submission.dish_name} from {submission.restaurant_name}",
        category=DEFAULT_CATEGORY,
        restaurant_id=f"restaurant_{int(time.time() * 1000)}",
    )
    review = await add_review_under_dish(
        db,
        dish.id,
        user_id=submission.user_id,
        user_name=submission.user_name,
        rating=submission.rating,
        comment=submission.comment,
        photo_url=submission.photo_url,
        tags=submission.tags,
    )
    await db.refresh(dish)
    return dish, created, review


async def post_restaurant_review(
    db: AsyncSession, restaurant_id: str, body: RestaurantReviewCreate
) -> Review:
    """Free-text review attached to a restaurant rather than a dish."""
    review = Review(
        restaurant_id=restaurant_id,
        user_id=body.user_id,
        user_name=body.user_name or "Anonymous",
        user_photo=body.user_photo,
        comment=body.review_text,
        photo_url=body.photo_url,
        tags=[],
        source="user",
        created_at=datetime.now(timezone.utc),
    )
    db.add(review)
    await db.commit()
    await db.refresh(review)
    return review


async def list_restaurant_reviews(db: AsyncSession, restaurant_id: str) -> list[Review]:
    result = await db.execute(
        select(Review)
        .where(Review.restaurant_id == restaurant_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
    )
    return list(result.scalars().all())


async def add_crawled_item(
    db: AsyncSession,
    source: str,
    external_id: str,
    external_name: str,
    dish_name: str,
    payload: dict[str, Any],
) -> CrawledItem:
    """Keep the raw vendor review that produced a dish mention."""
    item = CrawledItem(
        source=source,
        external_id=external_id,
        external_name=external_name or "",
        dish_name=dish_name,
        payload=payload,
        created_at=datetime.now(timezone.utc),
    )
    db.add(item)
    await db.commit()
    return item

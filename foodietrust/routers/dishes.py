"""Dish search, dish reviews and the cross-vendor aggregator."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from foodietrust.database import get_db
from foodietrust.schemas.dish import AggregatedDish, AggregateRequest, DishRead
from foodietrust.schemas.review import (
    CreatedDishReview,
    ReviewCreate,
    ReviewRead,
    UserReviewSubmission,
)
from foodietrust.services import dish_service
from foodietrust.services.aggregator import aggregate_dish_data

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dishes", tags=["dishes"])


@router.get("", response_model=list[DishRead])
async def search_dishes(
    q: str = Query(default="", max_length=200),
    location: Optional[str] = Query(default=None, max_length=100),
    db: AsyncSession = Depends(get_db),
) -> list[DishRead]:
    """Search stored dishes by name, cuisine, restaurant, location or tag."""
    dishes = await dish_service.search_dishes(db, q, location)
    return [DishRead.from_model(d) for d in dishes]


@router.post("/aggregate", response_model=list[AggregatedDish])
async def aggregate(body: AggregateRequest) -> list[AggregatedDish]:
    """Merge Zomato and Yelp search results for a dish, grouped by dish name."""
    return await aggregate_dish_data(body.dish, body.location)


@router.post("/reviews", response_model=CreatedDishReview, status_code=status.HTTP_201_CREATED)
async def submit_review(
    body: UserReviewSubmission,
    db: AsyncSession = Depends(get_db),
) -> CreatedDishReview:
    """Review a dish by name; the dish is created on its first review."""
    dish, created, review = await dish_service.create_dish_from_review(db, body)
    return CreatedDishReview(
        dish_id=dish.id,
        dish_created=created,
        review=ReviewRead.model_validate(review),
    )


@router.get("/{dish_id}", response_model=DishRead)
async def get_dish(dish_id: int, db: AsyncSession = Depends(get_db)) -> DishRead:
    return DishRead.from_model(await dish_service.get_dish(db, dish_id))


@router.get("/{dish_id}/reviews", response_model=list[ReviewRead])
async def list_dish_reviews(dish_id: int, db: AsyncSession = Depends(get_db)) -> list[ReviewRead]:
    """Reviews for a dish, newest first."""
    reviews = await dish_service.get_dish_reviews(db, dish_id)
    return [ReviewRead.model_validate(r) for r in reviews]


@router.post(
    "/{dish_id}/reviews",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_dish_review(
    dish_id: int,
    body: ReviewCreate,
    db: AsyncSession = Depends(get_db),
) -> ReviewRead:
    review = await dish_service.add_review_under_dish(
        db,
        dish_id,
        user_id=body.user_id,
        user_name=body.user_name,
        rating=body.rating,
        comment=body.comment,
        photo_url=body.photo_url,
        tags=body.tags,
    )
    return ReviewRead.model_validate(review)

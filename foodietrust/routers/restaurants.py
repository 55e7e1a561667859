"""Restaurant-level reviews (free text, optional photo)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from foodietrust.database import get_db
from foodietrust.schemas.review import RestaurantReviewCreate, ReviewRead
from foodietrust.services import dish_service

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("/{restaurant_id}/reviews", response_model=list[ReviewRead])
async def list_reviews(
    restaurant_id: str = Path(..., min_length=1, max_length=100),
    db: AsyncSession = Depends(get_db),
) -> list[ReviewRead]:
    reviews = await dish_service.list_restaurant_reviews(db, restaurant_id)
    return [ReviewRead.model_validate(r) for r in reviews]


@router.post(
    "/{restaurant_id}/reviews",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
)
async def post_review(
    body: RestaurantReviewCreate,
    restaurant_id: str = Path(..., min_length=1, max_length=100),
    db: AsyncSession = Depends(get_db),
) -> ReviewRead:
    review = await dish_service.post_restaurant_review(db, restaurant_id, body)
    return ReviewRead.model_validate(review)

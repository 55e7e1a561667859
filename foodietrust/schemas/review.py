"""Pydantic schemas for dish and restaurant reviews."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from foodietrust.schemas.base import CamelModel


class ReviewCreate(CamelModel):
    """Review appended under an existing dish."""

    user_id: str = Field(..., min_length=1)
    user_name: str = "Anonymous"
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field("", max_length=5000)
    photo_url: Optional[str] = None
    tags: list[str] = Field(default_factory=list)


class UserReviewSubmission(ReviewCreate):
    """A review that names its dish; the dish is created if it does not exist yet."""

    dish_name: str = Field(..., min_length=1, max_length=200)
    restaurant_name: str = Field(..., min_length=1, max_length=200)
    location: Optional[str] = None


class RestaurantReviewCreate(CamelModel):
    """Body for POST /restaurants/{restaurant_id}/reviews."""

    user_id: str = Field(..., min_length=1)
    user_name: str = "Anonymous"
    user_photo: Optional[str] = None
    review_text: str = Field(..., min_length=1, max_length=5000)
    photo_url: Optional[str] = None


class ReviewRead(CamelModel):
    id: int
    dish_id: Optional[int] = None
    restaurant_id: Optional[str] = None
    user_id: str
    user_name: str
    user_photo: Optional[str] = None
    rating: Optional[int] = None
    comment: str = ""
    photo_url: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    source: str = "user"
    created_at: Optional[datetime] = None


class CreatedDishReview(CamelModel):
    dish_id: int
    dish_created: bool
    review: ReviewRead

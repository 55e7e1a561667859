"""Pydantic schemas for dishes and the vendor aggregator."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from foodietrust.schemas.base import CamelModel


class RestaurantRef(CamelModel):
    id: str = ""
    name: str = ""
    location: str = ""


class DishRead(CamelModel):
    """Dish as returned to the web client."""

    id: int
    name: str
    description: str = ""
    image: Optional[str] = None
    price: float = 0.0
    cuisine: str = ""
    category: str = ""
    restaurant: RestaurantRef
    average_rating: float = 0.0
    review_count: int = 0
    tags: list[str] = Field(default_factory=list)
    trust_score: int = 80
    photo_url: Optional[str] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, dish: Any) -> "DishRead":
        return cls(
            id=dish.id,
            name=dish.name,
            description=dish.description or "",
            image=dish.image,
            price=dish.price or 0.0,
            cuisine=dish.cuisine or "",
            category=dish.category or "",
            restaurant=RestaurantRef(
                id=dish.restaurant_id or "",
                name=dish.restaurant_name or "",
                location=dish.location or "",
            ),
            average_rating=dish.average_rating or 0.0,
            review_count=dish.review_count or 0,
            tags=list(dish.tags or []),
            trust_score=dish.trust_score or 80,
            photo_url=dish.photo_url,
            updated_at=dish.updated_at,
        )


class AggregateRequest(CamelModel):
    """Body for POST /dishes/aggregate."""

    dish: str = Field(..., min_length=1, max_length=200)
    location: str = Field(..., min_length=1, max_length=200)


class VendorListing(CamelModel):
    """One vendor search hit, relabelled into the common shape."""

    dish_name: str
    restaurant_name: str
    address: Optional[str] = None
    rating: float = 0.0
    price: Optional[int] = None
    review_count: int = 0
    sources: dict[str, float] = Field(default_factory=dict)


class AggregatedDish(CamelModel):
    dish_name: str
    available_at: list[VendorListing] = Field(default_factory=list)
    aggregated_rating: float = 0.0
    total_reviews: int = 0

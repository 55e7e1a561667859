"""Pydantic schemas for the Swiggy menu proxy."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from foodietrust.schemas.base import CamelModel


class SwiggyMenuRequest(CamelModel):
    """Body for POST /getSwiggyMenu."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    restaurant_id: str = Field(..., min_length=1)


class DishMenuItem(CamelModel):
    id: str
    name: str
    description: str = ""
    price: float = 0.0          # rupees
    category: str = ""
    is_veg: bool = False
    image_url: Optional[str] = None
    rating: Optional[float] = None
    rating_count: Optional[str] = None


class SwiggyMenuResponse(CamelModel):
    success: bool = True
    restaurant_id: str
    restaurant_name: str
    dishes: list[DishMenuItem] = Field(default_factory=list)
    total_dishes: int = 0

"""Pydantic schemas package."""

from foodietrust.schemas.ai import AIQueryRequest, AIQueryResponse, CityLocation, Coordinates
from foodietrust.schemas.crawl import CrawlFailed, CrawlOk
from foodietrust.schemas.dish import (
    AggregatedDish,
    AggregateRequest,
    DishRead,
    RestaurantRef,
    VendorListing,
)
from foodietrust.schemas.menu import DishMenuItem, SwiggyMenuRequest, SwiggyMenuResponse
from foodietrust.schemas.review import (
    CreatedDishReview,
    RestaurantReviewCreate,
    ReviewCreate,
    ReviewRead,
    UserReviewSubmission,
)
from foodietrust.schemas.user import UserCreate, UserPreferencesPatch, UserRead

__all__ = [
    "AIQueryRequest", "AIQueryResponse", "CityLocation", "Coordinates",
    "CrawlFailed", "CrawlOk",
    "AggregatedDish", "AggregateRequest", "DishRead", "RestaurantRef", "VendorListing",
    "DishMenuItem", "SwiggyMenuRequest", "SwiggyMenuResponse",
    "CreatedDishReview", "RestaurantReviewCreate", "ReviewCreate", "ReviewRead",
    "UserReviewSubmission",
    "UserCreate", "UserPreferencesPatch", "UserRead",
]

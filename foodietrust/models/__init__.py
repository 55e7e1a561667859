"""SQLAlchemy ORM models package."""

from foodietrust.database import Base
from foodietrust.models.crawled_item import CrawledItem
from foodietrust.models.dish import Dish
from foodietrust.models.review import Review
from foodietrust.models.user import User

__all__ = ["Base", "CrawledItem", "Dish", "Review", "User"]

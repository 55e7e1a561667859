"""Dish ORM model, one row per (dish name, restaurant, location)."""

from sqlalchemy import JSON, TIMESTAMP, Column, Float, Integer, String, Text, func
from sqlalchemy.orm import relationship

from foodietrust.database import Base


class Dish(Base):
    """
    A dish served at a restaurant.
    Created on the first review or crawl hit; average_rating and review_count
    are recomputed whenever a review is appended.
    """

    __tablename__ = "dishes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, index=True)
    description = Column(Text, nullable=False, server_default="")
    image = Column(Text, nullable=True)
    price = Column(Float, nullable=False, server_default="0")
    cuisine = Column(String(100), nullable=False, server_default="")
    category = Column(String(100), nullable=False, server_default="")

    restaurant_id = Column(String(100), nullable=True)
    restaurant_name = Column(Text, nullable=False, server_default="")
    location = Column(String(100), nullable=False, server_default="")

    average_rating = Column(Float, nullable=False, server_default="0")
    review_count = Column(Integer, nullable=False, server_default="0")
    tags = Column(JSON, nullable=False, default=list)

    # Placeholder, not computed anywhere
    trust_score = Column(Integer, nullable=False, server_default="80")
    photo_url = Column(Text, nullable=True)

    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    reviews = relationship(
        "Review", back_populates="dish", cascade="all, delete-orphan"
    )

"""Review ORM model. Reviews hang off a dish or a restaurant and are never edited."""

from sqlalchemy import JSON, TIMESTAMP, Column, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from foodietrust.database import Base


class Review(Base):
    """
    A user-written or crawled review.
    rating is 1-5; crawled reviews that carry no rating store NULL and are
    left out of the dish average.
    """

    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    dish_id = Column(
        Integer,
        ForeignKey("dishes.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    restaurant_id = Column(String(100), nullable=True, index=True)

    user_id = Column(Text, nullable=False)
    user_name = Column(Text, nullable=False, server_default="Anonymous")
    user_photo = Column(Text, nullable=True)

    rating = Column(Integer, nullable=True)
    comment = Column(Text, nullable=False, server_default="")
    photo_url = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)

    source = Column(String(20), nullable=False, server_default="user")
    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )

    dish = relationship("Dish", back_populates="reviews")

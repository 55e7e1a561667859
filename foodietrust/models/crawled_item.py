"""Raw crawl records, one per (review, dish mention)."""

from sqlalchemy import JSON, TIMESTAMP, Column, Integer, String, Text, func

from foodietrust.database import Base


class CrawledItem(Base):
    __tablename__ = "crawled_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source = Column(String(20), nullable=False, index=True)  # 'google' | 'yelp'
    external_id = Column(Text, nullable=False)
    external_name = Column(Text, nullable=False, server_default="")
    dish_name = Column(Text, nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )

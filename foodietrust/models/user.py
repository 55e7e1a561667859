"""User profile ORM model, mirrored from the auth provider."""

from sqlalchemy import JSON, TIMESTAMP, Column, Integer, String, Text, func

from foodietrust.database import Base


class User(Base):
    __tablename__ = "users"

    uid = Column(String(128), primary_key=True)
    name = Column(Text, nullable=False, server_default="")
    email = Column(Text, nullable=True)
    avatar = Column(Text, nullable=True)
    location = Column(String(100), nullable=False, server_default="")

    preferences = Column(JSON, nullable=False, default=dict)
    trust_score = Column(Integer, nullable=False, server_default="80")
    review_count = Column(Integer, nullable=False, server_default="0")

    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

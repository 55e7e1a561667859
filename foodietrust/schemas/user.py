"""Pydantic schemas for user profile endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from foodietrust.schemas.base import CamelModel


class UserCreate(CamelModel):
    """Body for POST /users/{uid}, sent after sign-up with the auth provider."""

    name: str = ""
    email: Optional[str] = None
    avatar: Optional[str] = None
    location: str = ""
    preferences: dict[str, Any] = Field(default_factory=dict)


class UserRead(CamelModel):
    """Full user profile returned by GET /users/{uid}."""

    uid: str
    name: str
    email: Optional[str]
    avatar: Optional[str]
    location: str
    preferences: dict[str, Any]
    trust_score: int
    review_count: int
    created_at: datetime
    updated_at: datetime


class UserPreferencesPatch(CamelModel):
    """Body for PATCH /users/{uid}: deep-merged into preferences."""

    preferences: dict[str, Any] = Field(default_factory=dict)

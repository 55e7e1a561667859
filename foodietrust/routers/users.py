"""
User profile endpoints. Profiles mirror the auth provider's users; the web
client creates one right after sign-up.

When SERVICE_TOKEN is configured every call must carry it in X-Service-Token.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Header, Path, status
from fastapi.responses import Response
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from foodietrust.config import settings
from foodietrust.database import get_db
from foodietrust.errors import FoodieTrustError, NotFoundError
from foodietrust.models import User
from foodietrust.schemas.user import UserCreate, UserPreferencesPatch, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


# ── Auth dependency ──────────────────────────────────────────────────────────


async def verify_service_token(
    x_service_token: Optional[str] = Header(None, alias="X-Service-Token"),
) -> None:
    """Check the inter-service token, if one is configured."""
    if settings.service_token and x_service_token != settings.service_token:
        raise FoodieTrustError("unauthenticated", "Invalid service token")


# ── Helpers ──────────────────────────────────────────────────────────────────


def _deep_merge(base: dict, update: dict) -> dict:
    """Deep-merge update into base. Lists are unioned; scalars are replaced."""
    result = dict(base)
    for key, value in update.items():
        if isinstance(value, list) and isinstance(result.get(key), list):
            result[key] = list(dict.fromkeys(result[key] + value))
        elif isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


async def _get_user_or_404(db: AsyncSession, uid: str) -> User:
    user = await db.get(User, uid)
    if user is None:
        raise NotFoundError("User not found", reason="user-not-found")
    return user


# ── Endpoints ────────────────────────────────────────────────────────────────


@router.post("/{uid}", status_code=status.HTTP_201_CREATED)
async def create_or_get_user(
    body: UserCreate,
    uid: str = Path(..., min_length=1, max_length=128),
    db: AsyncSession = Depends(get_db),
    _: None = Depends(verify_service_token),
) -> dict:
    """
    Create a profile or return the existing one (idempotent).
    Returns {"uid": "...", "created": true} on first call,
            {"uid": "...", "created": false} afterwards.
    """
    if await db.get(User, uid) is not None:
        return {"uid": uid, "created": False}

    now = datetime.now(timezone.utc)
    db.add(
        User(
            uid=uid,
            name=body.name,
            email=body.email,
            avatar=body.avatar,
            location=body.location,
            preferences=body.preferences,
            created_at=now,
            updated_at=now,
        )
    )
    try:
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Failed to create user %s: %s", uid, exc)
        raise FoodieTrustError("internal", "Failed to create user") from exc

    return {"uid": uid, "created": True}


@router.get("/{uid}", response_model=UserRead)
async def get_user(
    uid: str = Path(..., min_length=1, max_length=128),
    db: AsyncSession = Depends(get_db),
    _: None = Depends(verify_service_token),
) -> UserRead:
    """Return the full user profile."""
    user = await _get_user_or_404(db, uid)
    await db.refresh(user)
    return UserRead.model_validate(user)


@router.patch("/{uid}")
async def patch_user_preferences(
    body: UserPreferencesPatch,
    uid: str = Path(..., min_length=1, max_length=128),
    db: AsyncSession = Depends(get_db),
    _: None = Depends(verify_service_token),
) -> dict:
    """Deep-merge body.preferences into the stored preferences."""
    user = await _get_user_or_404(db, uid)
    user.preferences = _deep_merge(user.preferences or {}, body.preferences)
    user.updated_at = datetime.now(timezone.utc)
    try:
        await db.commit()
    except Exception as exc:
        await db.rollback()
        raise FoodieTrustError("internal", "Failed to update preferences") from exc

    return {"uid": uid, "updated": True, "preferences": user.preferences}


@router.delete("/{uid}")
async def delete_user(
    uid: str = Path(..., min_length=1, max_length=128),
    db: AsyncSession = Depends(get_db),
    _: None = Depends(verify_service_token),
) -> Response:
    """Delete a profile. Reviews the user wrote are kept."""
    await _get_user_or_404(db, uid)
    try:
        await db.execute(text("DELETE FROM users WHERE uid = :uid"), {"uid": uid})
        await db.commit()
    except Exception as exc:
        await db.rollback()
        raise FoodieTrustError("internal", "Failed to delete user") from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)

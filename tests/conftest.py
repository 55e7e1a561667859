"""Shared fixtures: a throwaway SQLite database and an in-process API client."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Settings are read at import time, so the environment is fixed up first.
_DB_DIR = tempfile.mkdtemp(prefix="foodietrust-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_DB_DIR) / 'test.db'}"
for _key in (
    "GOOGLEAI_KEY", "GROQ_KEY", "OPENROUTER_KEY",
    "GOOGLE_MAPS_KEY", "GOOGLE_PLACES_API_KEY", "YELP_API_KEY", "ZOMATO_KEY",
    "SERVICE_TOKEN",
):
    os.environ.pop(_key, None)

from typing import AsyncIterator

import httpx
import pytest

from foodietrust.database import AsyncSessionLocal, Base, engine
from foodietrust.main import app


@pytest.fixture
async def db() -> AsyncIterator:
    """Fresh tables for every test."""
    import foodietrust.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSessionLocal() as session:
        yield session
    await engine.dispose()


@pytest.fixture
async def client(db) -> AsyncIterator[httpx.AsyncClient]:
    """API client; route tests should not query through `db` at the same time."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()

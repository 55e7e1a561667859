"""
FoodieTrust API: FastAPI application entry point.
Lifespan: create DB tables, then verify connectivity.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from foodietrust import __version__
from foodietrust.config import settings
from foodietrust.database import check_db_connectivity, create_tables, engine
from foodietrust.errors import FoodieTrustError
from foodietrust.routers import ai, crawl, dishes, health, menus, restaurants, users

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.
    1. Create all tables (idempotent).
    2. Verify DB connectivity.
    """
    logger.info("Starting FoodieTrust API (env=%s)", settings.app_env)

    await create_tables()
    logger.info("Database tables created/verified.")

    if await check_db_connectivity():
        logger.info("Database connectivity verified.")
    else:
        logger.error("Database connectivity check FAILED at startup.")

    yield

    logger.info("Shutting down FoodieTrust API.")
    await engine.dispose()


app = FastAPI(
    title="FoodieTrust API",
    description="Dish discovery, multi-provider AI answers, and trusted reviews.",
    version=__version__,
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────────────────────

app.include_router(health.router)
app.include_router(ai.router)
app.include_router(menus.router)
app.include_router(dishes.router)
app.include_router(restaurants.router)
app.include_router(users.router)
app.include_router(crawl.router)


# ── Exception handlers ───────────────────────────────────────────────────────

@app.exception_handler(FoodieTrustError)
async def foodietrust_error_handler(request: Request, exc: FoodieTrustError) -> JSONResponse:
    """Map domain errors to their HTTP status with a machine-readable code."""
    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers={"X-Error-Code": exc.code},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are reported as invalid-argument."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{field}: {first.get('msg', 'invalid value')}" if field else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={"detail": message, "code": "invalid-argument"},
        headers={"X-Error-Code": "invalid-argument"},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a machine-readable error for any unhandled exception."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "code": "internal"},
    )

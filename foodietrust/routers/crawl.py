"""
Crawler endpoints, hit by the scheduler. No input; {"ok": true} on success,
{"error": "..."} with status 500 on any failure.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from foodietrust.config import settings
from foodietrust.database import get_db
from foodietrust.schemas.crawl import CrawlFailed, CrawlOk
from foodietrust.services.crawler import CrawlError, run_crawler

logger = logging.getLogger(__name__)

router = APIRouter(tags=["crawl"])


async def _run(source: str, db: AsyncSession) -> JSONResponse:
    try:
        await run_crawler(source, db, settings)
    except CrawlError as exc:
        await db.rollback()
        logger.error("Crawl %s failed: %s", source, exc)
        return JSONResponse(status_code=500, content=CrawlFailed(error=str(exc)).model_dump())
    except Exception as exc:
        await db.rollback()
        logger.exception("Crawl %s aborted", source)
        return JSONResponse(status_code=500, content=CrawlFailed(error=str(exc)).model_dump())
    return JSONResponse(status_code=200, content=CrawlOk().model_dump())


@router.api_route("/crawl-google", methods=["GET", "POST"])
async def crawl_google_endpoint(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    return await _run("google", db)


@router.api_route("/crawl-yelp", methods=["GET", "POST"])
async def crawl_yelp_endpoint(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    return await _run("yelp", db)

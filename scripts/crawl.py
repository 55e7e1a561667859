"""
crawl.py: run the review crawlers outside the API process.

Pulls restaurants and reviews around CRAWL_CITY from Google Places and/or
Yelp, records every dish mention as a review under the matching dish.

Usage:
    python scripts/crawl.py                    # both sources
    python scripts/crawl.py --source google
    python scripts/crawl.py --source yelp --city Bengaluru
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

sys.path.insert(0, str(Path(__file__).parent.parent))

from foodietrust.config import get_settings
from foodietrust.database import AsyncSessionLocal, create_tables, engine
from foodietrust.services.crawler import CRAWLERS, CrawlError, run_crawler

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


async def run_crawl(sources: list[str], city: Optional[str] = None) -> int:
    """Run each crawler in turn; returns the number of failed runs."""
    settings = get_settings()
    if city:
        settings = settings.model_copy(update={"crawl_city": city})

    await create_tables()
    failures = 0
    for source in sources:
        logger.info("Crawling %s for %s...", source, settings.crawl_city)
        async with AsyncSessionLocal() as session:
            try:
                stats = await run_crawler(source, session, settings)
            except CrawlError as exc:
                await session.rollback()
                logger.error("  ✗ %s crawl failed: %s", source, exc)
                failures += 1
                continue
        logger.info(
            "  ✓ %s: %d restaurants, %d reviews, %d dish mentions, %d new dishes",
            source, stats.restaurants, stats.reviews, stats.mentions, stats.dishes_created,
        )

    await engine.dispose()
    return failures


def main() -> None:
    parser = argparse.ArgumentParser(description="Crawl restaurant reviews into the dish catalogue.")
    parser.add_argument(
        "--source",
        choices=[*CRAWLERS, "all"],
        default="all",
        help="Which crawler to run (default: all)",
    )
    parser.add_argument("--city", default=None, help="Override CRAWL_CITY for this run")
    args = parser.parse_args()

    sources = list(CRAWLERS) if args.source == "all" else [args.source]
    failures = asyncio.run(run_crawl(sources, city=args.city))
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()

"""
create_tables.py: idempotent table creation script.
Run this before starting the API for the first time, or after schema changes.
Safe to run multiple times (create_all skips existing tables).

Usage:
    python scripts/create_tables.py
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Ensure the project root is on the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from foodietrust.config import settings
from foodietrust.database import create_tables, engine


async def main() -> None:
    """Create all tables."""
    print(f"Creating tables on {settings.database_url.split('://', 1)[0]}...")
    await create_tables()
    print("  ✓ dishes, reviews, users, crawled_items ready")

    print("\nDone. Run `python scripts/crawl.py --source all` to seed dishes.")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())

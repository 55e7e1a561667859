"""
Process-local response cache for AI answers.

Capacity-bounded with FIFO eviction (cachetools.FIFOCache) plus a per-entry
TTL that is checked lazily on read: an expired entry is deleted the first time
someone asks for it. Nothing is persisted; a restart starts empty.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional, Union

from cachetools import FIFOCache

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 100
DEFAULT_TTL_SECONDS = 3600.0


def _render_location(location: Any) -> str:
    if location is None:
        return ""
    if isinstance(location, str):
        return location
    if isinstance(location, dict):
        if "lat" in location and "lng" in location:
            return f"{location['lat']},{location['lng']}"
        return str(location.get("city", ""))
    lat, lng = getattr(location, "lat", None), getattr(location, "lng", None)
    if lat is not None and lng is not None:
        return f"{lat},{lng}"
    return str(getattr(location, "city", "") or "")


def make_key(query: str, location: Union[str, dict, Any, None] = None) -> str:
    """Cache key: lowercased, trimmed `query + "_" + location`."""
    return f"{query or ''}_{_render_location(location)}".strip().lower()


class ResponseCache:
    """FIFO-bounded cache whose entries expire `ttl` seconds after insertion."""

    def __init__(
        self,
        maxsize: int = DEFAULT_MAX_ENTRIES,
        ttl: float = DEFAULT_TTL_SECONDS,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.maxsize = maxsize
        self.ttl = ttl
        self._timer = timer
        self._entries: FIFOCache = FIFOCache(maxsize=maxsize)

    def get(self, key: str) -> Optional[Any]:
        """Return the payload stored under key, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        payload, stored_at = entry
        if self._timer() - stored_at > self.ttl:
            # Lazy expiry
            self._entries.pop(key, None)
            logger.debug("Cache entry expired (key=%s)", key)
            return None
        logger.debug("Cache HIT (key=%s)", key)
        return payload

    def set(self, key: str, payload: Any) -> None:
        """Store payload; the oldest inserted key is evicted once maxsize is exceeded."""
        self._entries[key] = (payload, self._timer())

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)

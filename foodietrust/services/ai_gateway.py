"""
AI gateway behind POST /aiMultiProvider.

Pipeline per request:
  1. validate query, reject non-food queries (no network I/O before this)
  2. split out a location ("near me" needs a location from the client)
  3. response cache lookup
  4. optional Google Places lookup to ground the answer in real restaurants
  5. provider chain: GoogleAI -> Groq -> OpenRouter
  6. if every provider failed but Places answered, reply with the plain
     restaurant list; otherwise surface an `internal` error
  7. cache provider answers and return
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from foodietrust.config import Settings, settings as default_settings
from foodietrust.errors import InternalError, InvalidArgumentError
from foodietrust.schemas.ai import AIQueryRequest, AIQueryResponse, CityLocation, Coordinates
from foodietrust.services.cache import ResponseCache, make_key
from foodietrust.services.fallback import (
    AllProvidersFailedError,
    ProviderChain,
    build_provider_chain,
)
from foodietrust.services.http_client import VendorError
from foodietrust.services.places import GooglePlacesClient, PlaceSummary
from foodietrust.utils.prompts import build_prompt, format_restaurant_list
from foodietrust.utils.query_parsing import CURRENT_LOCATION, extract_location, is_food_query

logger = logging.getLogger(__name__)

PLACES_PROVIDER = "GooglePlaces"
MAX_PLACES = 5


def _location_text(location: Any) -> Optional[str]:
    """Human-readable location for prompts and cache keys."""
    if location is None:
        return None
    if isinstance(location, Coordinates):
        return f"{location.lat},{location.lng}"
    if isinstance(location, CityLocation):
        return location.city.strip() or None
    if isinstance(location, str):
        return location.strip() or None
    # Unrecognised objects carry no usable location
    return None


class AIGateway:
    """Holds the injected collaborators; one process-wide instance serves all requests."""

    def __init__(
        self,
        chain: ProviderChain,
        cache: ResponseCache,
        places: Optional[GooglePlacesClient] = None,
    ) -> None:
        self.chain = chain
        self.cache = cache
        self.places = places

    async def answer(self, request: AIQueryRequest) -> AIQueryResponse:
        query = (request.query or "").strip()
        if not query:
            raise InvalidArgumentError(
                "Field 'query' is required and must be a non-empty string.",
                reason="query-required",
            )
        if not is_food_query(query):
            raise InvalidArgumentError(
                "Only food and restaurant questions are supported.",
                reason="not-food-related",
            )

        parsed = extract_location(query)
        location: Any = request.location
        if _location_text(location) is None:
            if parsed.location == CURRENT_LOCATION:
                raise InvalidArgumentError(
                    "A location is required for 'near me' queries.",
                    reason="location-required",
                )
            location = parsed.location

        location_text = _location_text(location)
        key = make_key(query, location_text)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("AI cache HIT for %r", key)
            return AIQueryResponse(**{**cached, "cached": True})

        restaurants = await self._lookup_restaurants(parsed.dish_query, location)
        prompt = build_prompt(query, location_text, request.context, restaurants)

        try:
            result = await self.chain.complete(prompt, request.models or {})
            payload = {"provider": result.provider, "result": result.result}
        except AllProvidersFailedError as exc:
            if not restaurants:
                raise InternalError(
                    "AI service temporarily unavailable. Please try again.",
                    reason=exc.reason,
                ) from exc
            logger.warning("All AI providers failed; answering from Places results")
            payload = {
                "provider": PLACES_PROVIDER,
                "result": format_restaurant_list(restaurants, parsed.dish_query, location_text),
            }

        # Places-only answers are never cached
        if payload["provider"] != PLACES_PROVIDER:
            self.cache.set(key, payload)
        return AIQueryResponse(**payload, cached=False)

    async def _lookup_restaurants(self, dish_query: str, location: Any) -> list[PlaceSummary]:
        if self.places is None or not self.places.api_key or location is None:
            return []
        try:
            if isinstance(location, Coordinates):
                return await self.places.find_restaurants(
                    dish_query, lat=location.lat, lng=location.lng, limit=MAX_PLACES
                )
            return await self.places.find_restaurants(
                dish_query, place=_location_text(location), limit=MAX_PLACES
            )
        except VendorError as exc:
            logger.warning("Places lookup failed, continuing without it: %s", exc)
            return []


def build_gateway(settings: Settings = default_settings) -> AIGateway:
    return AIGateway(
        chain=build_provider_chain(settings),
        cache=ResponseCache(settings.cache_max_entries, settings.cache_ttl_seconds),
        places=GooglePlacesClient(
            settings.places_key,
            timeout_seconds=settings.vendor_timeout_seconds,
        ),
    )


_gateway: Optional[AIGateway] = None


def get_gateway() -> AIGateway:
    """FastAPI dependency returning the process-wide gateway."""
    global _gateway
    if _gateway is None:
        _gateway = build_gateway()
    return _gateway

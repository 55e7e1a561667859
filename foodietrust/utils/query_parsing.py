"""
Free-text query heuristics: location phrase extraction and the food filter.
Pure functions, no I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from foodietrust.utils.food_terms import FOOD_KEYWORDS, NON_FOOD_KEYWORDS, NON_PLACE_WORDS

CURRENT_LOCATION = "current"

_NEAR_ME_RE = re.compile(
    r"\b(?:near\s*me|nearby|near\s*by|around\s+me|close\s+to\s+me|"
    r"in\s+my\s+(?:area|city|locality))\b",
    re.IGNORECASE,
)

# Greedy dish part so the split happens at the last preposition:
# "chicken in butter sauce in Delhi" -> ("chicken in butter sauce", "Delhi")
_PLACE_RE = re.compile(
    r"^(?P<dish>.+)\s+(?:in|at|near|around)\s+(?P<place>[^\s?!.][^?!]*?)[\s?!.]*$",
    re.IGNORECASE,
)

_TOKEN_RE = re.compile(r"[a-z]+")


@dataclass(frozen=True)
class LocationQuery:
    """Result of splitting a query into what to eat and where."""

    location: Optional[str]
    dish_query: str


def _tidy(text: str) -> str:
    collapsed = re.sub(r"\s+", " ", text).strip()
    return collapsed.strip(" ,?!.")


def _looks_like_place(place: str) -> bool:
    """Times ("1pm") and words like "home" follow at/in without naming a place."""
    if not place or place[0].isdigit():
        return False
    return place.lower() not in NON_PLACE_WORDS


def extract_location(text: str) -> LocationQuery:
    """
    Pull a location phrase out of a free-text query.

    "best biryani near me"      -> LocationQuery("current", "best biryani")
    "pizza in Austin"           -> LocationQuery("Austin", "pizza")
    "biryani nearby in Chennai" -> LocationQuery("Chennai", "biryani")
    "masala dosa"               -> LocationQuery(None, "masala dosa")
    """
    cleaned = _tidy(text or "")
    if not cleaned:
        return LocationQuery(None, "")

    # An explicit place wins over "near me"
    near_me = bool(_NEAR_ME_RE.search(cleaned))
    remainder = _tidy(_NEAR_ME_RE.sub(" ", cleaned)) if near_me else cleaned

    match = _PLACE_RE.match(remainder)
    if match:
        place = _tidy(match.group("place"))
        dish = _tidy(match.group("dish"))
        if dish and _looks_like_place(place):
            return LocationQuery(place, dish)

    if near_me:
        return LocationQuery(CURRENT_LOCATION, remainder)
    return LocationQuery(None, cleaned)


def _tokens(text: str) -> list[str]:
    return _TOKEN_RE.findall((text or "").lower())


def is_food_query(text: str) -> bool:
    """
    Keyword filter deciding whether a query is about food.
    Any non-food keyword rejects the query outright.
    """
    tokens = _tokens(text)
    if any(t in NON_FOOD_KEYWORDS for t in tokens):
        return False
    for token in tokens:
        if token in FOOD_KEYWORDS:
            return True
        if token.endswith("s") and token[:-1] in FOOD_KEYWORDS:
            return True
    return False

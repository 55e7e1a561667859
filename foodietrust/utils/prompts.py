"""
Prompt builders for the AI gateway.
All prompt strings live here; no hardcoded prompts elsewhere in the codebase.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from foodietrust.services.places import PlaceSummary


_SYSTEM_PREAMBLE = (
    "You are FoodieTrust, a food discovery assistant. Recommend specific dishes "
    "and restaurants, mention why each is worth trying, and keep the answer short."
)


def build_prompt(
    query: str,
    location: Optional[str] = None,
    context: Optional[str] = None,
    restaurants: Sequence["PlaceSummary"] = (),
) -> str:
    """
    Assemble the provider prompt from the user's query and optional extras.

    Empty or whitespace-only extras are dropped so cache-equal requests
    produce byte-equal prompts.
    """
    prompt = f"{_SYSTEM_PREAMBLE}\n\n{(query or '').strip()}"

    location_text = (location or "").strip()
    if location_text:
        prompt += f"\n\nUser location/context: {location_text}"

    extra_context = (context or "").strip()
    if extra_context:
        prompt += f"\n\nAdditional context: {extra_context}"

    if restaurants:
        prompt += (
            "\n\nRestaurants found nearby (prefer these when relevant):\n"
            + _restaurant_lines(restaurants)
        )
    return prompt


def _restaurant_lines(restaurants: Sequence["PlaceSummary"]) -> str:
    lines = []
    for i, place in enumerate(restaurants, start=1):
        line = f"{i}. {place.name}"
        if place.rating is not None:
            line += f" - {place.rating:.1f}★"
            if place.review_count:
                line += f" ({place.review_count} reviews)"
        if place.address:
            line += f" - {place.address}"
        if place.open_now is not None:
            line += " - open now" if place.open_now else " - closed now"
        lines.append(line)
    return "\n".join(lines)


def format_restaurant_list(
    restaurants: Sequence["PlaceSummary"],
    dish_query: str,
    location: Optional[str] = None,
) -> str:
    """
    Plain-text answer built from Places results alone. Used when every AI
    provider is down but a restaurant lookup succeeded.
    """
    where = f" near {location}" if location else ""
    header = f"Top places for {dish_query or 'food'}{where}:"
    return f"{header}\n{_restaurant_lines(restaurants)}"

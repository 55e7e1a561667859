"""Pydantic schemas for the multi-provider AI endpoint."""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """Device position sent by the client for "near me" queries."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class CityLocation(BaseModel):
    city: str = Field(..., min_length=1)


class AIQueryRequest(BaseModel):
    """Body for POST /aiMultiProvider."""

    query: str = Field(..., max_length=2000)
    # Objects of any other shape are accepted and treated as no location
    location: Optional[Union[Coordinates, CityLocation, str, dict[str, Any]]] = Field(
        None, union_mode="left_to_right"
    )
    context: Optional[str] = Field(None, max_length=2000)
    # Per-provider model override, keyed by provider name ("GoogleAI", "Groq", "OpenRouter");
    # a null entry keeps that provider's default model
    models: Optional[dict[str, Optional[str]]] = None


class AIQueryResponse(BaseModel):
    provider: str
    result: str
    cached: bool = False

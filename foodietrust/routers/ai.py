"""Multi-provider AI endpoint, called by the web client's search and chat views."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from foodietrust.schemas.ai import AIQueryRequest, AIQueryResponse
from foodietrust.services.ai_gateway import AIGateway, get_gateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ai"])


@router.post("/aiMultiProvider", response_model=AIQueryResponse)
async def ai_multi_provider(
    body: AIQueryRequest,
    gateway: AIGateway = Depends(get_gateway),
) -> AIQueryResponse:
    """
    Answer a food question with the first AI provider that responds.

    Errors:
      400 invalid-argument: empty query, non-food query, or "near me" without a location
      500 internal: every provider failed (reason all-providers-failed or
          no-provider-configured)
    """
    return await gateway.answer(body)

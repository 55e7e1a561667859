"""Swiggy menu proxy endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from foodietrust.schemas.menu import SwiggyMenuRequest, SwiggyMenuResponse
from foodietrust.services.swiggy import get_swiggy_menu

router = APIRouter(tags=["menus"])


@router.post("/getSwiggyMenu", response_model=SwiggyMenuResponse)
async def swiggy_menu(body: SwiggyMenuRequest) -> SwiggyMenuResponse:
    """Full menu of one Swiggy restaurant; unknown restaurant -> 404 not-found."""
    return await get_swiggy_menu(body.lat, body.lng, body.restaurant_id)

import httpx
import pytest

from foodietrust.errors import InternalError, NotFoundError
from foodietrust.services.swiggy import IMAGE_CDN, SwiggyClient, get_swiggy_menu, parse_menu
from tests.fakes import mock_http


def _item(item_id, name, paise, veg=False, image=None, rating=None):
    info = {"id": item_id, "name": name, "price": paise, "description": f"{name} desc"}
    if veg:
        info["itemAttribute"] = {"vegClassifier": "VEG"}
    if image:
        info["imageId"] = image
    if rating:
        info["ratings"] = {"aggregatedRating": {"rating": rating, "ratingCountV2": "120"}}
    return {"card": {"info": info}}


MENU_PAYLOAD = {
    "data": {
        "cards": [
            {"card": {"card": {"@type": "type.googleapis.com/swiggy.presentation.food.v2.Restaurant",
                               "info": {"name": "A2B Adyar", "cuisines": ["South Indian"]}}}},
            {"groupedCard": {"cardGroupMap": {"REGULAR": {"cards": [
                {"card": {"card": {"title": "Recommended", "itemCards": [
                    _item("1", "Ghee Roast Dosa", 14500, veg=True, image="abc", rating="4.4"),
                    _item("2", "Mini Tiffin", 17000, veg=True),
                ]}}},
                {"card": {"card": {"title": "Combos", "categories": [
                    {"title": "Lunch Combos", "itemCards": [
                        _item("3", "South Indian Meals", 22050),
                        _item("1", "Ghee Roast Dosa", 14500, veg=True),
                    ]},
                ]}}},
            ]}}}},
        ]
    }
}


def test_parse_menu_flattens_categories():
    menu = parse_menu(MENU_PAYLOAD, "12345")

    assert menu.success is True
    assert menu.restaurant_name == "A2B Adyar"
    assert menu.total_dishes == 3
    assert [d.id for d in menu.dishes] == ["1", "2", "3"]

    dosa, _, meals = menu.dishes
    assert dosa.price == 145.0
    assert dosa.is_veg is True
    assert dosa.category == "Recommended"
    assert dosa.image_url == f"{IMAGE_CDN}abc"
    assert dosa.rating == 4.4
    assert dosa.rating_count == "120"
    assert meals.price == 220.5
    assert meals.category == "Lunch Combos"
    assert meals.is_veg is False


def test_parse_menu_tolerates_empty_payload():
    menu = parse_menu({}, "1")
    assert menu.dishes == []
    assert menu.restaurant_name == ""


async def test_get_menu_sends_expected_query():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=MENU_PAYLOAD)

    menu = await get_swiggy_menu(13.0, 80.2, "12345", client=SwiggyClient(client=mock_http(handler)))

    assert menu.total_dishes == 3
    params = seen[0].url.params
    assert params["restaurantId"] == "12345"
    assert params["page-type"] == "REGULAR_MENU"


async def test_unknown_restaurant_is_not_found():
    client = SwiggyClient(client=mock_http(lambda r: httpx.Response(404, text="nope")))
    with pytest.raises(NotFoundError):
        await get_swiggy_menu(13.0, 80.2, "999", client=client)


async def test_upstream_failure_is_internal():
    client = SwiggyClient(client=mock_http(lambda r: httpx.Response(502)))
    with pytest.raises(InternalError):
        await get_swiggy_menu(13.0, 80.2, "999", client=client)


async def test_menu_route_serialises_camel_case(client, monkeypatch):
    from foodietrust.routers import menus

    async def fake_menu(lat, lng, restaurant_id):
        return parse_menu(MENU_PAYLOAD, restaurant_id)

    monkeypatch.setattr(menus, "get_swiggy_menu", fake_menu)
    resp = await client.post("/getSwiggyMenu", json={"lat": 13.0, "lng": 80.2, "restaurantId": "12345"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["restaurantName"] == "A2B Adyar"
    assert body["totalDishes"] == 3
    assert body["dishes"][0]["isVeg"] is True

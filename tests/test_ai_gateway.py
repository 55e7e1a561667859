import httpx
import pytest

from foodietrust.errors import InternalError, InvalidArgumentError
from foodietrust.schemas.ai import AIQueryRequest, CityLocation, Coordinates
from foodietrust.services.ai_gateway import AIGateway, get_gateway
from foodietrust.services.cache import ResponseCache
from foodietrust.services.fallback import ProviderChain
from foodietrust.services.places import GooglePlacesClient
from tests.fakes import FakeProvider, failing, mock_http, unconfigured

PLACES_RESULTS = {
    "status": "OK",
    "results": [
        {"place_id": "p1", "name": "Dindigul Thalappakatti", "rating": 4.2,
         "user_ratings_total": 900, "vicinity": "Vadapalani"},
        {"place_id": "p2", "name": "Ponnusamy", "rating": 4.5,
         "user_ratings_total": 300, "vicinity": "Egmore"},
    ],
}


def places_client(requests: list) -> GooglePlacesClient:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=PLACES_RESULTS)

    return GooglePlacesClient("places-key", client=mock_http(handler))


def gateway(*providers, places=None) -> AIGateway:
    return AIGateway(ProviderChain(list(providers)), ResponseCache(), places)


async def test_non_food_query_rejected_before_any_call():
    provider = FakeProvider("GoogleAI", answer="x")
    requests: list = []
    gw = gateway(provider, places=places_client(requests))

    with pytest.raises(InvalidArgumentError) as info:
        await gw.answer(AIQueryRequest(query="cheap flights to Goa", location="Chennai"))

    assert info.value.reason == "not-food-related"
    assert provider.calls == []
    assert requests == []


async def test_empty_query_rejected():
    with pytest.raises(InvalidArgumentError) as info:
        await gateway(FakeProvider("GoogleAI", answer="x")).answer(AIQueryRequest(query="  "))
    assert info.value.reason == "query-required"


async def test_near_me_without_location_rejected():
    with pytest.raises(InvalidArgumentError) as info:
        await gateway(FakeProvider("GoogleAI", answer="x")).answer(
            AIQueryRequest(query="best biryani near me")
        )
    assert info.value.reason == "location-required"


async def test_near_me_with_blank_city_rejected():
    provider = FakeProvider("Groq", answer="x")
    with pytest.raises(InvalidArgumentError) as info:
        await gateway(provider).answer(
            AIQueryRequest(query="best biryani near me", location=CityLocation(city="   "))
        )
    assert info.value.reason == "location-required"
    assert provider.calls == []


async def test_unrecognised_location_object_is_ignored():
    provider = FakeProvider("Groq", answer="x")
    request = AIQueryRequest.model_validate(
        {"query": "dosa in Madurai", "location": {"latitude": 1, "longitude": 2}}
    )
    assert request.location == {"latitude": 1, "longitude": 2}

    await gateway(provider).answer(request)
    assert "User location/context: Madurai" in provider.calls[0][0]


async def test_null_model_override_keeps_default():
    provider = FakeProvider("GoogleAI", answer="x")
    request = AIQueryRequest.model_validate(
        {"query": "dosa", "location": "Chennai", "models": {"GoogleAI": None}}
    )
    await gateway(provider).answer(request)
    assert provider.calls[0][1] == "default-model"


async def test_near_me_uses_client_coordinates():
    requests: list = []
    provider = FakeProvider("GoogleAI", answer="Go to Ponnusamy")
    gw = gateway(provider, places=places_client(requests))

    response = await gw.answer(
        AIQueryRequest(query="best biryani near me", location=Coordinates(lat=13.05, lng=80.21))
    )

    assert response.provider == "GoogleAI"
    assert requests[0].url.path.endswith("/nearbysearch/json")
    assert requests[0].url.params["location"] == "13.05,80.21"
    assert requests[0].url.params["keyword"] == "best biryani"
    prompt = provider.calls[0][0]
    assert "User location/context: 13.05,80.21" in prompt
    # highest rated first
    assert prompt.index("Ponnusamy") < prompt.index("Dindigul Thalappakatti")


async def test_place_in_query_is_used_for_lookup():
    requests: list = []
    gw = gateway(FakeProvider("Groq", answer="ok"), places=places_client(requests))
    await gw.answer(AIQueryRequest(query="pizza in Austin"))

    assert requests[0].url.path.endswith("/textsearch/json")
    assert requests[0].url.params["query"] == "pizza in Austin"


async def test_second_identical_query_is_served_from_cache():
    provider = FakeProvider("GoogleAI", answer="Try Murugan Idli Shop")
    gw = gateway(provider)
    request = AIQueryRequest(query="Best idli", location="Chennai")

    first = await gw.answer(request)
    second = await gw.answer(AIQueryRequest(query="best IDLI ", location="chennai"))

    assert first.cached is False
    assert second.cached is True
    assert second.result == first.result
    assert len(provider.calls) == 1


async def test_places_list_used_when_every_provider_fails():
    gw = gateway(failing("GoogleAI"), failing("Groq"), places=places_client([]))
    response = await gw.answer(AIQueryRequest(query="biryani", location="Chennai"))

    assert response.provider == "GooglePlaces"
    assert response.result.startswith("Top places for biryani near Chennai:")
    assert "1. Ponnusamy" in response.result


async def test_places_only_answer_is_not_cached():
    first = failing("GoogleAI")
    gw = gateway(first, places=places_client([]))
    request = AIQueryRequest(query="biryani", location="Chennai")

    await gw.answer(request)
    again = await gw.answer(request)

    assert again.provider == "GooglePlaces"
    assert again.cached is False
    assert len(first.calls) == 2


async def test_all_failed_without_places_is_internal():
    gw = gateway(failing("GoogleAI"), failing("Groq"))
    with pytest.raises(InternalError) as info:
        await gw.answer(AIQueryRequest(query="biryani", location="Chennai"))
    assert info.value.reason == "all-providers-failed"


async def test_places_failure_does_not_block_answer():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "REQUEST_DENIED", "error_message": "bad key"})

    gw = gateway(
        FakeProvider("GoogleAI", answer="ok"),
        places=GooglePlacesClient("k", client=mock_http(handler)),
    )
    response = await gw.answer(AIQueryRequest(query="dosa", location="Chennai"))
    assert response.result == "ok"


# ── Route ────────────────────────────────────────────────────────────────────


async def test_route_returns_answer(client):
    from foodietrust.main import app

    app.dependency_overrides[get_gateway] = lambda: gateway(FakeProvider("Groq", answer="Eat dosa"))
    resp = await client.post("/aiMultiProvider", json={"query": "dosa", "location": {"city": "Chennai"}})

    assert resp.status_code == 200
    assert resp.json() == {"provider": "Groq", "result": "Eat dosa", "cached": False}


async def test_route_maps_errors(client):
    from foodietrust.main import app

    app.dependency_overrides[get_gateway] = lambda: gateway(unconfigured("GoogleAI"))

    resp = await client.post("/aiMultiProvider", json={"query": "hotel in Goa"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid-argument"
    assert resp.headers["X-Error-Code"] == "invalid-argument"

    resp = await client.post("/aiMultiProvider", json={"query": "dosa", "location": "Chennai"})
    assert resp.status_code == 500
    assert resp.json()["reason"] == "no-provider-configured"

    resp = await client.post("/aiMultiProvider", json={"location": "Chennai"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid-argument"


async def test_route_accepts_null_models_and_unknown_location_shape(client):
    from foodietrust.main import app

    provider = FakeProvider("Groq", answer="Eat dosa")
    app.dependency_overrides[get_gateway] = lambda: gateway(provider)

    resp = await client.post(
        "/aiMultiProvider", json={"query": "dosa", "location": "Chennai", "models": None}
    )
    assert resp.status_code == 200
    assert resp.json()["provider"] == "Groq"

    resp = await client.post(
        "/aiMultiProvider",
        json={"query": "idli", "location": {"latitude": 1, "longitude": 2}, "models": {"Groq": None}},
    )
    assert resp.status_code == 200
    assert provider.calls[-1][1] == "default-model"

from foodietrust.routers.users import _deep_merge


def test_deep_merge_unions_lists_and_recurses():
    base = {"diet": ["veg"], "spice": {"level": 2, "max": 4}, "city": "Chennai"}
    update = {"diet": ["jain", "veg"], "spice": {"level": 3}, "city": "Madurai"}

    assert _deep_merge(base, update) == {
        "diet": ["veg", "jain"],
        "spice": {"level": 3, "max": 4},
        "city": "Madurai",
    }
    assert base["diet"] == ["veg"]


async def test_user_lifecycle(client):
    resp = await client.post("/users/u-1", json={"name": "Meena", "email": "m@example.com"})
    assert resp.status_code == 201
    assert resp.json() == {"uid": "u-1", "created": True}

    resp = await client.post("/users/u-1", json={"name": "Someone else"})
    assert resp.json() == {"uid": "u-1", "created": False}

    resp = await client.patch("/users/u-1", json={"preferences": {"diet": ["veg"]}})
    assert resp.status_code == 200
    resp = await client.patch("/users/u-1", json={"preferences": {"diet": ["jain"]}})
    assert resp.json()["preferences"] == {"diet": ["veg", "jain"]}

    profile = (await client.get("/users/u-1")).json()
    assert profile["name"] == "Meena"
    assert profile["trustScore"] == 80
    assert profile["reviewCount"] == 0
    assert profile["preferences"] == {"diet": ["veg", "jain"]}

    resp = await client.delete("/users/u-1")
    assert resp.status_code == 204
    resp = await client.get("/users/u-1")
    assert resp.status_code == 404
    assert resp.json()["reason"] == "user-not-found"


async def test_service_token_enforced_when_configured(client, monkeypatch):
    from foodietrust.routers import users

    monkeypatch.setattr(users.settings, "service_token", "s3cret")

    resp = await client.get("/users/u-9")
    assert resp.status_code == 401
    assert resp.json()["code"] == "unauthenticated"

    resp = await client.get("/users/u-9", headers={"X-Service-Token": "s3cret"})
    assert resp.status_code == 404

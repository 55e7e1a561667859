import pytest
from sqlalchemy import select

from foodietrust.errors import NotFoundError
from foodietrust.models import Dish, User
from foodietrust.schemas.review import UserReviewSubmission
from foodietrust.services import dish_service


async def test_ensure_dish_is_keyed_by_name_restaurant_and_location(db):
    first, created = await dish_service.ensure_dish(db, "Biryani", "Paradise", "Hyderabad")
    again, created_again = await dish_service.ensure_dish(db, "Biryani", "Paradise", "Hyderabad")
    other, created_other = await dish_service.ensure_dish(db, "Biryani", "Paradise", "Chennai")

    assert created and not created_again and created_other
    assert first.id == again.id
    assert other.id != first.id


async def test_review_updates_count_and_average(db):
    dish, _ = await dish_service.ensure_dish(db, "Dosa", "MTR", "Bengaluru")
    for rating in (5, 4, 2):
        await dish_service.add_review_under_dish(db, dish.id, user_id="u1", rating=rating)

    await db.refresh(dish)
    assert dish.review_count == 3
    assert dish.average_rating == pytest.approx(11 / 3)


async def test_user_review_bumps_user_review_count(db):
    db.add(User(uid="u1", name="Meena"))
    await db.commit()
    dish, _ = await dish_service.ensure_dish(db, "Idli", "Murugan", "Chennai")

    await dish_service.add_review_under_dish(db, dish.id, user_id="u1", rating=4)
    await dish_service.add_review_under_dish(db, dish.id, user_id="bot", rating=4, source="google")

    user = await db.get(User, "u1")
    await db.refresh(user)
    assert user.review_count == 1


async def test_review_for_missing_dish(db):
    with pytest.raises(NotFoundError):
        await dish_service.add_review_under_dish(db, 404, user_id="u1", rating=3)


async def test_create_dish_from_review_defaults(db):
    submission = UserReviewSubmission(
        user_id="u1", rating=5, comment="Crispy", dish_name="Masala Dosa",
        restaurant_name="Sangeetha", photo_url="http://img/d.jpg", tags=["crispy"],
    )
    dish, created, review = await dish_service.create_dish_from_review(db, submission)

    assert created is True
    assert dish.location == "Chennai"
    assert dish.cuisine == "Indian"
    assert dish.category == "Main Course"
    assert dish.photo_url == "http://img/d.jpg"
    assert dish.restaurant_id.startswith("restaurant_")
    assert dish.review_count == 1 and dish.average_rating == 5.0
    assert review.dish_id == dish.id

    _, created_again, _ = await dish_service.create_dish_from_review(db, submission)
    assert created_again is False
    assert len((await db.execute(select(Dish))).scalars().all()) == 1


async def test_review_without_location_reuses_dish_from_any_location(db):
    with_location = UserReviewSubmission(
        user_id="u1", rating=4, dish_name="Kothu Parotta",
        restaurant_name="Buhari", location="Madurai",
    )
    without_location = with_location.model_copy(update={"location": None, "rating": 2})

    dish, created, _ = await dish_service.create_dish_from_review(db, with_location)
    same, created_again, _ = await dish_service.create_dish_from_review(db, without_location)

    assert created is True and created_again is False
    assert same.id == dish.id
    assert same.location == "Madurai"
    assert same.review_count == 2


async def test_search_matches_name_tag_and_location(db):
    await dish_service.ensure_dish(db, "Chicken 65", "Buhari", "Chennai", tags=["spicy"])
    await dish_service.ensure_dish(db, "Paneer Tikka", "Punjab Grill", "Delhi", cuisine="North Indian")

    assert [d.name for d in await dish_service.search_dishes(db, "chicken")] == ["Chicken 65"]
    assert [d.name for d in await dish_service.search_dishes(db, "SPICY")] == ["Chicken 65"]
    assert [d.name for d in await dish_service.search_dishes(db, "north")] == ["Paneer Tikka"]
    assert [d.name for d in await dish_service.search_dishes(db, "", "Delhi")] == ["Paneer Tikka"]
    assert len(await dish_service.search_dishes(db)) == 2


# ── Routes ───────────────────────────────────────────────────────────────────


async def test_review_flow_over_http(client):
    resp = await client.post("/dishes/reviews", json={
        "userId": "u1", "userName": "Asha", "rating": 4, "comment": "Good",
        "dishName": "Filter Coffee", "restaurantName": "Ratna Cafe",
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["dishCreated"] is True
    dish_id = body["dishId"]

    resp = await client.post(f"/dishes/{dish_id}/reviews", json={"userId": "u2", "rating": 2})
    assert resp.status_code == 201

    dish = (await client.get(f"/dishes/{dish_id}")).json()
    assert dish["reviewCount"] == 2
    assert dish["averageRating"] == pytest.approx(3.0)
    assert dish["restaurant"]["name"] == "Ratna Cafe"

    reviews = (await client.get(f"/dishes/{dish_id}/reviews")).json()
    assert [r["userId"] for r in reviews] == ["u2", "u1"]

    found = (await client.get("/dishes", params={"q": "coffee"})).json()
    assert [d["id"] for d in found] == [dish_id]


async def test_invalid_rating_and_missing_dish(client):
    resp = await client.post("/dishes/reviews", json={
        "userId": "u1", "rating": 9, "dishName": "Vada", "restaurantName": "X",
    })
    assert resp.status_code == 400

    resp = await client.get("/dishes/999")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Dish 999 not found", "code": "not-found", "reason": "dish-not-found"}


async def test_restaurant_reviews(client):
    resp = await client.post("/restaurants/r-1/reviews", json={
        "userId": "u1", "userName": "Asha", "reviewText": "Lovely ambience",
    })
    assert resp.status_code == 201
    assert resp.json()["restaurantId"] == "r-1"
    assert resp.json()["rating"] is None

    reviews = (await client.get("/restaurants/r-1/reviews")).json()
    assert [r["comment"] for r in reviews] == ["Lovely ambience"]

import pytest

from foodietrust.utils.query_parsing import (
    CURRENT_LOCATION,
    LocationQuery,
    extract_location,
    is_food_query,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("best biryani near me", LocationQuery(CURRENT_LOCATION, "best biryani")),
        ("pizza in Austin", LocationQuery("Austin", "pizza")),
        ("dosa at Mylapore?", LocationQuery("Mylapore", "dosa")),
        ("chicken in butter sauce in Delhi", LocationQuery("Delhi", "chicken in butter sauce")),
        ("masala dosa", LocationQuery(None, "masala dosa")),
        ("biryani nearby in Chennai", LocationQuery("Chennai", "biryani")),
        ("dosa near Anna Nagar", LocationQuery("Anna Nagar", "dosa")),
        ("lunch at 1pm", LocationQuery(None, "lunch at 1pm")),
        ("what to eat at home", LocationQuery(None, "what to eat at home")),
        ("pizza near me for dinner", LocationQuery(CURRENT_LOCATION, "pizza for dinner")),
        ("   ", LocationQuery(None, "")),
    ],
)
def test_extract_location(text, expected):
    assert extract_location(text) == expected


def test_nearby_counts_as_current_location():
    assert extract_location("cafes nearby").location == CURRENT_LOCATION


@pytest.mark.parametrize(
    "text",
    ["best biryani near me", "Where can I eat dosa", "good restaurants in Austin", "Tacos?"],
)
def test_food_queries_accepted(text):
    assert is_food_query(text)


@pytest.mark.parametrize(
    "text",
    [
        "cheap hotel in Goa",
        "flight to Delhi",
        "hotel with a good restaurant",
        "what is the capital of France",
        "",
    ],
)
def test_non_food_queries_rejected(text):
    assert not is_food_query(text)

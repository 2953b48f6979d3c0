from unittest import mock

import pytest
import requests

from navi_travel.api.locations import (
    CATEGORY_IMAGES,
    DEFAULT_PLACE_IMAGE,
    SPECIFIC_LOCATION_IMAGES,
)
from navi_travel.api.models import parse_itinerary
from navi_travel.api.services.place_service import PlaceService, fallback_image

IMAGE_URL = "https://images.example.com/place.jpg"


def make_http(status_code=200, error=None):
    http = mock.Mock()
    if error is not None:
        http.head.side_effect = error
    else:
        http.head.return_value = mock.Mock(status_code=status_code)
    return http


def test_fallback_prefers_known_place():
    assert fallback_image("Lunch", "Near Inorbit Mall", "Shopping") == SPECIFIC_LOCATION_IMAGES["Inorbit Mall"]


def test_fallback_matches_place_name_too():
    assert fallback_image("Kharghar trek", "", "") == SPECIFIC_LOCATION_IMAGES["Kharghar"]


def test_fallback_uses_category_then_default():
    assert fallback_image("Cafe", "Somewhere", "Food & Dining") == CATEGORY_IMAGES["Food & Dining"]
    assert fallback_image("Cafe", "Somewhere", "Nope") == DEFAULT_PLACE_IMAGE


def test_working_image_is_kept():
    http = make_http(200)
    card = PlaceService(http=http).build_card({"name": "Gallery", "image": IMAGE_URL})

    assert card["image"] == IMAGE_URL
    http.head.assert_called_once_with(IMAGE_URL, allow_redirects=True, timeout=5)


@pytest.mark.parametrize("http", [
    make_http(404),
    make_http(error=requests.ConnectionError("down")),
])
def test_broken_image_is_replaced(http):
    card = PlaceService(http=http).build_card({
        "name": "Fort walk",
        "location": "Belapur Fort",
        "image": IMAGE_URL,
    })
    assert card["image"] == SPECIFIC_LOCATION_IMAGES["Belapur Fort"]


def test_card_fields():
    card = PlaceService(http=make_http(200)).build_card({
        "id": "p1",
        "name": "Central Park",
        "category": "Parks & Gardens",
        "rating": 4.3,
        "duration": "2 hours",
        "featured": True,
        "image": IMAGE_URL,
    })

    assert card["id"] == "p1"
    assert card["rating"] == "4.3"
    assert card["duration"] == "2 hours"
    assert card["featured"] is True
    assert card["is_favorite"] is False


def test_card_without_duration_or_rating():
    card = PlaceService(http=make_http(200)).build_card({"name": "Lake", "image": IMAGE_URL})
    assert "duration" not in card
    assert card["rating"] == "0.0"
    assert card["id"] == "Lake"


def test_card_requires_name():
    with pytest.raises(ValueError):
        PlaceService(http=make_http(200)).build_card({"name": "  "})


def test_with_fallback_images_only_fills_missing():
    days = parse_itinerary([
        {"day": 1, "activities": [
            {"time": "09:00", "title": "Temple", "location": "Nerul Balaji Temple"},
            {"time": "11:00", "title": "Own photo", "location": "Vashi", "image": IMAGE_URL},
        ]},
    ])
    result = PlaceService.with_fallback_images(days)
    activities = result[0]["activities"]

    assert activities[0]["image"] == SPECIFIC_LOCATION_IMAGES["Nerul Balaji Temple"]
    assert activities[1]["image"] == IMAGE_URL

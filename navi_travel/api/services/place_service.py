# navi_travel/api/services/place_service.py
"""Service layer for place cards and their images."""

import logging
from typing import Any, Dict, List, Sequence

import requests

from navi_travel.api.locations import (
    CATEGORY_IMAGES,
    DEFAULT_PLACE_IMAGE,
    SPECIFIC_LOCATION_IMAGES,
)
from navi_travel.api.models import ItineraryDay

logger = logging.getLogger(__name__)

IMAGE_PROBE_TIMEOUT = 5


def fallback_image(name: str, location: str, category: str) -> str:
    """Pick a stand-in image for a place whose own image is missing or broken.

    A known place contained in the location or the name wins, then the
    category image, then the generic default.
    """
    location_lower = (location or "").lower()
    name_lower = (name or "").lower()
    for key, url in SPECIFIC_LOCATION_IMAGES.items():
        key_lower = key.lower()
        if key_lower in location_lower or key_lower in name_lower:
            logger.debug(f"Found image match for {name}/{location} with {key}")
            return url
    return CATEGORY_IMAGES.get(category, DEFAULT_PLACE_IMAGE)


class PlaceService:
    """Builds place cards and fills in missing activity images."""

    def __init__(self, http=None):
        self.http = http or requests

    def image_available(self, url: str) -> bool:
        """Check that an image URL answers with a 2xx."""
        if not url:
            return False
        try:
            response = self.http.head(url, allow_redirects=True, timeout=IMAGE_PROBE_TIMEOUT)
        except requests.RequestException as e:
            logger.info(f"Error loading image {url}: {e}")
            return False
        return 200 <= response.status_code < 300

    def resolve_image(self, image: str, name: str, location: str, category: str) -> str:
        if self.image_available(image):
            return image
        logger.info(f"Using fallback image for {name}")
        return fallback_image(name, location, category)

    def build_card(self, place: Dict[str, Any]) -> Dict[str, Any]:
        """View model for a place card.

        Raises:
            ValueError: if the place has no name.
        """
        name = str(place.get("name") or "").strip()
        if not name:
            raise ValueError("Place name is required")

        category = str(place.get("category") or "")
        location = str(place.get("location") or "")
        try:
            rating = float(place.get("rating") or 0)
        except (TypeError, ValueError):
            rating = 0.0

        card = {
            "id": str(place.get("id") or name),
            "name": name,
            "category": category,
            "description": str(place.get("description") or ""),
            "location": location,
            "image": self.resolve_image(str(place.get("image") or ""), name, location, category),
            "rating": f"{rating:.1f}",
            "featured": bool(place.get("featured", False)),
            "is_favorite": bool(place.get("is_favorite", False)),
        }
        if place.get("duration"):
            card["duration"] = str(place["duration"])
        return card

    @staticmethod
    def with_fallback_images(days: Sequence[ItineraryDay]) -> List[dict]:
        """Itinerary as JSON, giving image-less activities a stand-in image."""
        result = []
        for day in days:
            activities = []
            for activity in day.activities:
                data = activity.to_dict()
                if not activity.image:
                    data["image"] = fallback_image(
                        activity.title, activity.location, activity.category
                    )
                activities.append(data)
            result.append({"day": day.day, "activities": activities})
        return result


__all__ = ['PlaceService', 'fallback_image']

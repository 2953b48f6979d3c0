# navi_travel/api/geocoding.py
from __future__ import annotations

import logging
import random
from typing import Mapping, Optional, Sequence

from navi_travel.api.locations import DEFAULT_CENTER, LOCATION_COORDINATES
from navi_travel.api.models import Coordinate, ItineraryDay

logger = logging.getLogger(__name__)

# Half-width of the box unmatched places are scattered in, in degrees.
FALLBACK_JITTER = 0.01

_default_rng = random.Random()


def match_location(
    location: str,
    table: Mapping[str, Coordinate] = LOCATION_COORDINATES,
) -> Optional[str]:
    """Return the table key a free-text location refers to, or None.

    Exact (case-sensitive) keys win; otherwise the first key, in table
    order, that contains or is contained in the location ignoring case.
    """
    if not location or not location.strip():
        return None
    if location in table:
        return location

    needle = location.lower()
    for key in table:
        candidate = key.lower()
        if candidate in needle or needle in candidate:
            return key
    return None


def is_valid_coordinate(coordinate: Coordinate) -> bool:
    """True if a (lon, lat) pair lies on the globe."""
    lon, lat = coordinate
    return -180 <= lon <= 180 and -90 <= lat <= 90


def lookup_coordinate(
    location: str,
    table: Mapping[str, Coordinate] = LOCATION_COORDINATES,
) -> Optional[Coordinate]:
    """Table coordinate for a location, or None if unmatched or out of range."""
    key = match_location(location, table)
    if key is None:
        return None
    coordinate = table[key]
    if not is_valid_coordinate(coordinate):
        logger.warning(f"Ignoring out-of-range coordinate {coordinate} for '{key}'")
        return None
    return coordinate


def fallback_coordinate(rng: Optional[random.Random] = None) -> Coordinate:
    """Default center nudged by an independent offset on each axis."""
    rng = rng or _default_rng
    lon, lat = DEFAULT_CENTER
    return (
        lon + (rng.random() - 0.5) * 2 * FALLBACK_JITTER,
        lat + (rng.random() - 0.5) * 2 * FALLBACK_JITTER,
    )


def resolve_location(
    location: str,
    table: Mapping[str, Coordinate] = LOCATION_COORDINATES,
    rng: Optional[random.Random] = None,
) -> Coordinate:
    """Resolve a free-text place name to (lon, lat). Never fails."""
    coordinate = lookup_coordinate(location, table)
    if coordinate is not None:
        return coordinate

    logger.debug(f"No match for '{location}', scattering around the city center")
    return fallback_coordinate(rng)


def enhance_itinerary_with_coordinates(
    days: Sequence[ItineraryDay],
    table: Mapping[str, Coordinate] = LOCATION_COORDINATES,
    rng: Optional[random.Random] = None,
) -> list[tuple[int, int, Coordinate]]:
    """
    Resolve every activity of an itinerary.

    Returns ``(day, activity_index, coordinate)`` triples in traversal
    order (day ascending, then activity). Unmatched places are logged but
    still get a coordinate, so the caller can always render the whole trip.
    """
    resolved = []
    matched = 0
    total = 0

    for day in days:
        for index, activity in enumerate(day.activities):
            total += 1
            coordinate = lookup_coordinate(activity.location, table)
            if coordinate is not None:
                matched += 1
            else:
                coordinate = fallback_coordinate(rng)
            resolved.append((day.day, index, coordinate))

    if total:
        logger.info(f"Resolved {matched}/{total} activity locations from the lookup table")
        if matched < total:
            logger.warning(f"{total - matched} location(s) fell back to the city center")

    return resolved


# Re-export for clean imports elsewhere
__all__ = [
    "match_location",
    "lookup_coordinate",
    "is_valid_coordinate",
    "resolve_location",
    "fallback_coordinate",
    "enhance_itinerary_with_coordinates",
]

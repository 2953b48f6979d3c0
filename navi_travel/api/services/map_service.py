# navi_travel/api/services/map_service.py
"""Service layer for map-related operations."""

import html
import importlib
import logging
import random
from typing import Any, Dict, List, Mapping, Optional, Sequence

from navi_travel.api.config import get_map_config
from navi_travel.api.errors import DependencyLoadFailure
from navi_travel.api.geocoding import enhance_itinerary_with_coordinates
from navi_travel.api.locations import (
    DAY_COLORS,
    DEFAULT_CENTER,
    DEFAULT_ZOOM,
    LOCATION_COORDINATES,
)
from navi_travel.api.models import Coordinate, ItineraryDay, ResolvedMarker

logger = logging.getLogger(__name__)

MARKER_SIZE_PX = 24

_MARKER_HTML = (
    '<div style="background-color: {color}; width: {size}px; height: {size}px; '
    "border-radius: 50%; display: flex; align-items: center; justify-content: center; "
    "color: white; font-weight: bold; border: 2px solid white; "
    'box-shadow: 0 0 10px rgba(0,0,0,0.3);">{label}</div>'
)

_POPUP_HTML = (
    '<div style="padding: 10px;">'
    '<h3 style="font-weight: bold;">{title}</h3>'
    '<p style="font-size: 12px; color: #666;">{time} - Day {day}</p>'
    '<p style="font-size: 12px;">{location}</p>'
    "</div>"
)

_map_library = None


def load_map_library():
    """Import the map library once, like loading Leaflet before first use.

    Raises:
        DependencyLoadFailure: if the library cannot be imported.
    """
    global _map_library
    if _map_library is None:
        try:
            _map_library = importlib.import_module("folium")
        except ImportError as e:
            logger.error(f"Failed to load map library: {e}")
            raise DependencyLoadFailure(
                "Could not load the map: map library unavailable"
            ) from e
        logger.info("Map library loaded")
    return _map_library


class MapService:
    """Turns itineraries into markers and markers into a map."""

    @staticmethod
    def day_color(day: int) -> str:
        """Palette colour for a 1-based day; wraps once days exceed the palette."""
        return DAY_COLORS[(day - 1) % len(DAY_COLORS)]

    @staticmethod
    def format_popup_text(title: str, time: str, day: int, location: str) -> str:
        return f"{title}\n{time} - Day {day}\n{location}"

    @staticmethod
    def build_markers(
        days: Sequence[ItineraryDay],
        rng: Optional[random.Random] = None,
        table: Mapping[str, Coordinate] = LOCATION_COORDINATES,
    ) -> List[ResolvedMarker]:
        """Build one marker per activity, day ascending then activity order.

        Args:
            days: Parsed itinerary
            rng: Random source for unmatched locations (seed it in tests)
            table: Place-name lookup table

        Returns:
            Markers in itinerary traversal order
        """
        activities = {
            (day.day, index): activity
            for day in days
            for index, activity in enumerate(day.activities)
        }

        markers = []
        for day_number, index, coordinate in enhance_itinerary_with_coordinates(days, table, rng):
            activity = activities[(day_number, index)]
            markers.append(
                ResolvedMarker(
                    day_index=day_number,
                    coordinate=coordinate,
                    color=MapService.day_color(day_number),
                    label=str(day_number),
                    popup_text=MapService.format_popup_text(
                        activity.title, activity.time, day_number, activity.location
                    ),
                    title=activity.title,
                    time=activity.time,
                    location=activity.location,
                )
            )

        logger.debug(f"Built {len(markers)} markers for {len(days)} day(s)")
        return markers

    @staticmethod
    def unique_locations(days: Sequence[ItineraryDay]) -> List[str]:
        """Distinct location strings in first-seen order."""
        seen = dict.fromkeys(
            activity.location for day in days for activity in day.activities
        )
        return list(seen)

    @staticmethod
    def calculate_bounds(markers: Sequence[ResolvedMarker]) -> Dict[str, Any]:
        """Calculate bounding box for a set of markers.

        Args:
            markers: Resolved markers

        Returns:
            Dictionary with north, south, east, west bounds
        """
        if not markers:
            return {}

        lngs = [marker.coordinate[0] for marker in markers]
        lats = [marker.coordinate[1] for marker in markers]

        return {
            'north': max(lats),
            'south': min(lats),
            'east': max(lngs),
            'west': min(lngs)
        }

    @staticmethod
    def marker_icon_html(marker: ResolvedMarker) -> str:
        return _MARKER_HTML.format(
            color=marker.color, size=MARKER_SIZE_PX, label=html.escape(marker.label)
        )

    @staticmethod
    def popup_html(marker: ResolvedMarker) -> str:
        return _POPUP_HTML.format(
            title=html.escape(marker.title),
            time=html.escape(marker.time),
            day=marker.day_index,
            location=html.escape(marker.location),
        )

    @staticmethod
    def build_map(markers: Sequence[ResolvedMarker], config: Optional[Dict[str, Any]] = None):
        """Create a folium map with one tile layer and all markers.

        The view starts on the default center; it is refit to the markers
        only when there is at least one.
        """
        folium = load_map_library()
        config = config or get_map_config()

        center_lon, center_lat = DEFAULT_CENTER
        map_ = folium.Map(location=[center_lat, center_lon], zoom_start=DEFAULT_ZOOM, tiles=None)

        folium.TileLayer(
            tiles=config["tile_url"],
            attr=config["attribution"],
            max_zoom=config["max_zoom"],
            name="OpenStreetMap",
        ).add_to(map_)

        for marker in markers:
            icon = folium.DivIcon(
                html=MapService.marker_icon_html(marker),
                icon_size=(MARKER_SIZE_PX, MARKER_SIZE_PX),
                class_name="custom-div-icon",
            )
            folium.Marker(
                location=marker.lat_lng,
                icon=icon,
                popup=folium.Popup(MapService.popup_html(marker), max_width=300),
            ).add_to(map_)

        if markers:
            padding = config["fit_padding_px"]
            map_.fit_bounds([marker.lat_lng for marker in markers], padding=(padding, padding))

        logger.info(f"Added {len(markers)} markers to map")
        return map_

    @staticmethod
    def render_html(map_) -> str:
        """Render a folium map to a standalone HTML document."""
        return map_.get_root().render()


# Export for use in other modules
__all__ = ['MapService', 'load_map_library']

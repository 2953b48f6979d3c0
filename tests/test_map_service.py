import random
from unittest import mock

import folium
import pytest

from navi_travel.api.geocoding import FALLBACK_JITTER
from navi_travel.api.locations import DAY_COLORS, DEFAULT_CENTER, LOCATION_COORDINATES
from navi_travel.api.models import ItineraryActivity, ItineraryDay, parse_itinerary
from navi_travel.api.services.map_service import MapService

MAP_CONFIG = {
    "tile_url": "https://tiles.example.com/{z}/{x}/{y}.png",
    "attribution": "test tiles",
    "max_zoom": 19,
    "settle_delay_ms": 0,
    "fit_padding_px": 30,
}


@pytest.mark.parametrize("day, index", [(1, 0), (2, 1), (7, 6), (8, 0), (9, 1), (15, 0)])
def test_day_color_cycles_through_palette(day, index):
    assert MapService.day_color(day) == DAY_COLORS[index]


def test_markers_for_sample_trip(itinerary):
    markers = MapService.build_markers(itinerary, rng=random.Random(0))

    assert len(markers) == 3
    assert [m.day_index for m in markers] == [1, 1, 2]
    assert [m.label for m in markers] == ["1", "1", "2"]
    assert [m.color for m in markers] == [DAY_COLORS[0], DAY_COLORS[0], DAY_COLORS[1]]

    assert markers[0].coordinate == LOCATION_COORDINATES["Vashi"]
    lon, lat = markers[1].coordinate
    assert abs(lon - DEFAULT_CENTER[0]) <= FALLBACK_JITTER
    assert abs(lat - DEFAULT_CENTER[1]) <= FALLBACK_JITTER
    assert markers[2].coordinate == LOCATION_COORDINATES["Belapur Fort"]


def test_known_then_unknown_day():
    days = parse_itinerary([
        {"day": 1, "activities": [{"location": "Vashi"}]},
        {"day": 2, "activities": [{"location": "Unknown Place"}]},
    ])
    first, second = MapService.build_markers(days, rng=random.Random(5))

    assert (first.color, first.coordinate) == (DAY_COLORS[0], LOCATION_COORDINATES["Vashi"])
    assert second.color == DAY_COLORS[1]
    assert second.coordinate != DEFAULT_CENTER
    assert abs(second.coordinate[0] - DEFAULT_CENTER[0]) <= FALLBACK_JITTER
    assert abs(second.coordinate[1] - DEFAULT_CENTER[1]) <= FALLBACK_JITTER


def test_popup_text_lists_title_time_day_and_location(itinerary):
    marker = MapService.build_markers(itinerary, rng=random.Random(0))[0]
    assert marker.popup_text == "Morning walk\n09:00 - Day 1\nVashi"


def test_markers_follow_day_order_not_input_order():
    days = parse_itinerary([
        {"day": 2, "activities": [{"time": "10:00", "title": "B", "location": "Nerul"}]},
        {"day": 1, "activities": [{"time": "09:00", "title": "A", "location": "Airoli"}]},
    ])
    markers = MapService.build_markers(days)
    assert [m.title for m in markers] == ["A", "B"]


def test_marker_lat_lng_swaps_axes(itinerary):
    marker = MapService.build_markers(itinerary)[0]
    lon, lat = LOCATION_COORDINATES["Vashi"]
    assert marker.lat_lng == [lat, lon]
    assert marker.to_dict()["lat"] == lat
    assert marker.to_dict()["lng"] == lon


def test_unique_locations_first_seen_order():
    days = [
        ItineraryDay(1, (
            ItineraryActivity("09:00", "a", "Vashi"),
            ItineraryActivity("12:00", "b", "Nerul"),
        )),
        ItineraryDay(2, (ItineraryActivity("09:00", "c", "Vashi"),)),
    ]
    assert MapService.unique_locations(days) == ["Vashi", "Nerul"]


def test_calculate_bounds(itinerary):
    markers = MapService.build_markers(itinerary, rng=random.Random(0))
    bounds = MapService.calculate_bounds(markers)

    lats = [m.coordinate[1] for m in markers]
    lngs = [m.coordinate[0] for m in markers]
    assert bounds == {
        "north": max(lats),
        "south": min(lats),
        "east": max(lngs),
        "west": min(lngs),
    }
    assert MapService.calculate_bounds([]) == {}


def test_empty_itinerary_keeps_default_view():
    with mock.patch.object(folium.Map, "fit_bounds") as fit_bounds:
        map_ = MapService.build_map([], config=MAP_CONFIG)

    fit_bounds.assert_not_called()
    assert map_.location == [DEFAULT_CENTER[1], DEFAULT_CENTER[0]]


def test_map_fits_all_markers(itinerary):
    markers = MapService.build_markers(itinerary, rng=random.Random(0))
    with mock.patch.object(folium.Map, "fit_bounds") as fit_bounds:
        MapService.build_map(markers, config=MAP_CONFIG)

    fit_bounds.assert_called_once_with([m.lat_lng for m in markers], padding=(30, 30))


def test_map_has_one_tile_layer_and_a_marker_per_activity(itinerary):
    markers = MapService.build_markers(itinerary, rng=random.Random(0))
    map_ = MapService.build_map(markers, config=MAP_CONFIG)

    children = list(map_._children.values())
    assert sum(isinstance(c, folium.TileLayer) for c in children) == 1
    assert sum(isinstance(c, folium.Marker) for c in children) == 3


def test_render_html_is_a_standalone_page(itinerary):
    markers = MapService.build_markers(itinerary, rng=random.Random(0))
    html = MapService.render_html(MapService.build_map(markers, config=MAP_CONFIG))
    assert "leaflet" in html.lower()
    assert "tiles.example.com" in html


def test_popup_html_escapes_user_text():
    days = parse_itinerary([
        {"day": 1, "activities": [{"time": "09:00", "title": "<b>x</b>", "location": "Vashi"}]},
    ])
    marker = MapService.build_markers(days)[0]
    assert "&lt;b&gt;x&lt;/b&gt;" in MapService.popup_html(marker)


@pytest.mark.parametrize("activities", [["Vashi"], "Vashi", [{"location": "Vashi"}, 3], {"location": "Vashi"}])
def test_malformed_activities_rejected(activities):
    with pytest.raises(ValueError, match="Invalid itinerary day 1"):
        parse_itinerary([{"day": 1, "activities": activities}])

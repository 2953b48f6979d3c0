from unittest import mock

import pytest
import requests

from navi_travel.api.errors import DataFetchFailure
from navi_travel.api.services.weather_service import WeatherService, condition_category

WEATHER_CONFIG = {
    "api_key": "test-key",
    "base_url": "https://weather.example.com/data/2.5/weather",
    "country_code": "in",
    "timeout": 10,
}

RAINY_PAYLOAD = {
    "weather": [{"id": 500, "description": "light rain"}],
    "main": {"temp": 28.6, "humidity": 80},
    "wind": {"speed": 5},
}


def make_http(payload=None, error=None):
    http = mock.Mock()
    if error is not None:
        http.get.side_effect = error
    else:
        response = mock.Mock()
        response.json.return_value = payload
        response.raise_for_status.return_value = None
        http.get.return_value = response
    return http


@pytest.mark.parametrize("weather_id, category", [
    (211, "thunderstorm"),
    (301, "drizzle"),
    (502, "rain"),
    (601, "snow"),
    (741, "atmosphere"),
    (800, "clear"),
    (803, "clouds"),
    (100, "unknown"),
])
def test_condition_category(weather_id, category):
    assert condition_category(weather_id) == category


def test_fetch_current_parses_reading():
    http = make_http(RAINY_PAYLOAD)
    reading = WeatherService(config=WEATHER_CONFIG, http=http).fetch_current("Vashi")

    assert reading.condition == "Light rain"
    assert reading.category == "rain"
    assert reading.temperature == 29
    assert reading.humidity == 80
    assert reading.wind_speed == 18
    assert reading.error is None

    http.get.assert_called_once_with(
        WEATHER_CONFIG["base_url"],
        params={"q": "Vashi,in", "units": "metric", "appid": "test-key"},
        timeout=10,
    )


def test_fetch_current_network_error():
    http = make_http(error=requests.ConnectionError("offline"))
    with pytest.raises(DataFetchFailure) as excinfo:
        WeatherService(config=WEATHER_CONFIG, http=http).fetch_current("Vashi")
    assert excinfo.value.title == "Error fetching data"


def test_fetch_current_http_error():
    http = make_http(RAINY_PAYLOAD)
    http.get.return_value.raise_for_status.side_effect = requests.HTTPError("404")
    with pytest.raises(DataFetchFailure):
        WeatherService(config=WEATHER_CONFIG, http=http).fetch_current("Nowhere")


def test_fetch_current_requires_location():
    http = make_http(RAINY_PAYLOAD)
    with pytest.raises(DataFetchFailure):
        WeatherService(config=WEATHER_CONFIG, http=http).fetch_current("  ")
    http.get.assert_not_called()


def test_unexpected_payload_is_a_fetch_failure():
    http = make_http({"weather": []})
    with pytest.raises(DataFetchFailure):
        WeatherService(config=WEATHER_CONFIG, http=http).fetch_current("Vashi")


def test_get_weather_falls_back_to_placeholder():
    http = make_http(error=requests.Timeout("slow"))
    reading = WeatherService(config=WEATHER_CONFIG, http=http).get_weather("Vashi")

    assert reading.to_dict() == {
        "location": "Vashi",
        "condition": "Unknown",
        "category": "unknown",
        "temperature": 25,
        "humidity": 60,
        "wind_speed": 10,
        "error": "Could not fetch weather data for Vashi",
    }


def test_blank_location_gets_placeholder_without_request():
    http = make_http(RAINY_PAYLOAD)
    reading = WeatherService(config=WEATHER_CONFIG, http=http).get_weather("")

    http.get.assert_not_called()
    assert reading.condition == "Unknown"
    assert reading.error is not None

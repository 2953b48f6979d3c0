# navi_travel/api/services/weather_service.py
"""Service layer for destination weather."""

import logging
from typing import Any, Dict, Optional

import requests

from navi_travel.api.config import get_openweather_config
from navi_travel.api.errors import DataFetchFailure
from navi_travel.api.models import WeatherReading

logger = logging.getLogger(__name__)

PLACEHOLDER_TEMPERATURE = 25
PLACEHOLDER_HUMIDITY = 60
PLACEHOLDER_WIND_KMH = 10


def condition_category(weather_id: int) -> str:
    """Map an OpenWeatherMap condition code to a display category."""
    if 200 <= weather_id < 300:
        return "thunderstorm"
    elif 300 <= weather_id < 400:
        return "drizzle"
    elif 500 <= weather_id < 600:
        return "rain"
    elif 600 <= weather_id < 700:
        return "snow"
    elif 700 <= weather_id < 800:
        return "atmosphere"
    elif weather_id == 800:
        return "clear"
    elif weather_id > 800:
        return "clouds"
    return "unknown"


def _capitalize(description: str) -> str:
    return description[:1].upper() + description[1:]


class WeatherService:
    """Fetches current conditions for a place name."""

    def __init__(self, config: Optional[Dict[str, Any]] = None, http=None):
        self.config = config or get_openweather_config()
        self.http = http or requests

    def fetch_current(self, location: str) -> WeatherReading:
        """Get current weather for a place.

        Raises:
            DataFetchFailure: on network errors, non-2xx replies or an
                unexpected payload.
        """
        if not location or not location.strip():
            raise DataFetchFailure("A location is required for weather data")

        params = {
            "q": f"{location},{self.config['country_code']}",
            "units": "metric",
            "appid": self.config["api_key"],
        }

        try:
            logger.debug(f"Fetching weather for {location}")
            response = self.http.get(
                self.config["base_url"], params=params, timeout=self.config["timeout"]
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Weather request for '{location}' failed: {e}")
            raise DataFetchFailure(f"Weather data not available for {location}") from e

        return self.parse_payload(location, payload)

    @staticmethod
    def parse_payload(location: str, payload: Dict[str, Any]) -> WeatherReading:
        try:
            weather = payload["weather"][0]
            weather_id = int(weather["id"])
            main = payload["main"]
            return WeatherReading(
                location=location,
                condition=_capitalize(str(weather.get("description", ""))),
                category=condition_category(weather_id),
                temperature=round(float(main["temp"])),
                humidity=int(main["humidity"]),
                # m/s -> km/h
                wind_speed=round(float(payload["wind"]["speed"]) * 3.6),
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Unexpected weather payload for '{location}': {e}")
            raise DataFetchFailure(f"Weather data not available for {location}") from e

    @staticmethod
    def placeholder(location: str, error: str) -> WeatherReading:
        return WeatherReading(
            location=location,
            condition="Unknown",
            category="unknown",
            temperature=PLACEHOLDER_TEMPERATURE,
            humidity=PLACEHOLDER_HUMIDITY,
            wind_speed=PLACEHOLDER_WIND_KMH,
            error=error,
        )

    def get_weather(self, location: str) -> WeatherReading:
        """Current weather, or the placeholder reading if the fetch fails."""
        try:
            return self.fetch_current(location)
        except DataFetchFailure as e:
            logger.warning(f"Using placeholder weather for '{location}': {e.message}")
            return self.placeholder(location, f"Could not fetch weather data for {location}")


__all__ = ['WeatherService', 'condition_category']

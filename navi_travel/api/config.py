# api/config.py
"""Configuration management for the travel planner API."""
import os
from dotenv import load_dotenv

load_dotenv()

OSM_TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
OSM_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)


def get_openweather_config():
    """Get OpenWeatherMap configuration."""
    return {
        "api_key": os.getenv("OPENWEATHER_API_KEY", ""),
        "base_url": os.getenv(
            "OPENWEATHER_BASE_URL", "https://api.openweathermap.org/data/2.5/weather"
        ),
        # Place names are looked up within this country
        "country_code": os.getenv("WEATHER_COUNTRY_CODE", "in"),
        "timeout": float(os.getenv("WEATHER_TIMEOUT_SECONDS", "10")),
    }


def get_map_config():
    """Get map rendering configuration."""
    return {
        "tile_url": os.getenv("MAP_TILE_URL", OSM_TILE_URL),
        "attribution": os.getenv("MAP_TILE_ATTRIBUTION", OSM_ATTRIBUTION),
        "max_zoom": int(os.getenv("MAP_MAX_ZOOM", "19")),
        "settle_delay_ms": int(os.getenv("MAP_SETTLE_DELAY_MS", "300")),
        "fit_padding_px": int(os.getenv("MAP_FIT_PADDING_PX", "30")),
    }


def get_database_url():
    """Get the SQLAlchemy database URL."""
    return os.getenv("DATABASE_URL", "sqlite:///navi_travel.db")


def get_export_config():
    """Get PDF export configuration."""
    return {
        "jpeg_quality": int(os.getenv("EXPORT_JPEG_QUALITY", "80")),
        "capture_scale": int(os.getenv("EXPORT_CAPTURE_SCALE", "2")),
    }


def get_port():
    """Get port configuration."""
    return int(os.getenv("PORT", 5000))


def get_websocket_config():
    """Get WebSocket configuration."""
    return {
        "ping_interval": int(os.getenv("WEBSOCKET_PING_INTERVAL", "25")),
        "ping_timeout": int(os.getenv("WEBSOCKET_PING_TIMEOUT", "60")),
        "cors_allowed_origins": os.getenv("WEBSOCKET_CORS_ORIGINS", "*").split(","),
    }


def validate_weather_config():
    """Validate that the weather service is usable."""
    config = get_openweather_config()
    if not config["api_key"]:
        raise ValueError("OPENWEATHER_API_KEY not set")
    if config["timeout"] <= 0:
        raise ValueError("WEATHER_TIMEOUT_SECONDS must be positive")
    return True

"""
Navi‑Travel – main application entry point

* Flask app + Socket.IO for the interactive itinerary map.
* No eventlet/gevent required; Socket.IO runs in threading mode so the map
  settle timers are plain ``threading.Timer`` objects.
* The Socket.IO namespace is `/travel/ws`; HTTP routes live under `/travel`.
"""

import os
import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from dotenv import load_dotenv

# --------------------------------------------------------------------------- #
# Environment & logging
# --------------------------------------------------------------------------- #
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from navi_travel.api.config import (  # noqa: E402
    get_database_url,
    get_port,
    get_websocket_config,
    validate_weather_config,
)
from navi_travel.api.db import make_session_factory  # noqa: E402
from navi_travel.api.export import ExportRegistry  # noqa: E402
from navi_travel.api.services.itinerary_service import ItineraryService  # noqa: E402
from navi_travel.api.services.map_session import get_map_session_manager  # noqa: E402
from navi_travel.routes import create_travel_blueprint, register_websocket_handlers  # noqa: E402


def create_app(database_url=None, map_sessions=None, weather_service=None, place_service=None):
    """Build the Flask app and its Socket.IO server.

    Args:
        database_url: SQLAlchemy URL; defaults to DATABASE_URL
        map_sessions: MapSessionManager; the shared one if omitted
        weather_service: Optional WeatherService override
        place_service: Optional PlaceService override

    Returns:
        (app, socketio)
    """
    # ----------------------------------------------------------------------- #
    # Flask initialisation
    # ----------------------------------------------------------------------- #
    app = Flask(__name__)

    flask_secret_key = os.getenv("FLASK_SECRET_KEY") or os.urandom(32).hex()
    if "FLASK_SECRET_KEY" not in os.environ:
        logger.warning("No FLASK_SECRET_KEY found. Generated a temporary key.")
    app.secret_key = flask_secret_key

    app.config.update(
        SESSION_COOKIE_SECURE=False,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        MAX_CONTENT_LENGTH=16 * 1024 * 1024,  # snapshots for PDF export
    )

    # CORS for local dev / cross‑origin front‑end requests
    CORS(app, origins="*", supports_credentials=True)

    try:
        validate_weather_config()
    except ValueError as e:
        logger.warning(f"Weather lookups will return placeholder readings: {e}")

    # ----------------------------------------------------------------------- #
    # Storage
    # ----------------------------------------------------------------------- #
    session_factory = make_session_factory(database_url or get_database_url())
    itinerary_service = ItineraryService(session_factory)
    app.extensions["navi_travel.itineraries"] = itinerary_service

    # ----------------------------------------------------------------------- #
    # Socket.IO – threading mode
    # ----------------------------------------------------------------------- #
    ws_config = get_websocket_config()
    socketio = SocketIO(
        app,
        cors_allowed_origins=ws_config["cors_allowed_origins"],
        async_mode="threading",
        ping_interval=ws_config["ping_interval"],
        ping_timeout=ws_config["ping_timeout"],
        logger=False,
        engineio_logger=False,
    )
    logger.info("Socket.IO initialised (async_mode=threading)")

    # ----------------------------------------------------------------------- #
    # Blueprints & WebSocket handlers
    # ----------------------------------------------------------------------- #
    map_sessions = map_sessions or get_map_session_manager()
    app.extensions["navi_travel.map_sessions"] = map_sessions

    exports = ExportRegistry()
    app.extensions["navi_travel.exports"] = exports

    app.register_blueprint(
        create_travel_blueprint(itinerary_service, weather_service, place_service, exports)
    )
    register_websocket_handlers(socketio, map_sessions)

    @app.route("/debug")
    def debug():
        """Simple JSON health endpoint."""
        return {
            "status": "ok",
            "socketio_initialized": True,
            "live_maps": map_sessions.live_map_count(),
            "endpoints": {
                "health": "/travel/health",
                "websocket_namespace": "/travel/ws",
            },
        }

    return app, socketio


app, socketio = create_app()

# --------------------------------------------------------------------------- #
# Local development runner ( `python main.py` )
# --------------------------------------------------------------------------- #
if __name__ == "__main__":
    port = get_port()
    logger.info("Starting travel app on http://localhost:%d", port)
    socketio.run(app, host="0.0.0.0", port=port, debug=False, allow_unsafe_werkzeug=True)

__all__ = ["app", "socketio", "create_app"]

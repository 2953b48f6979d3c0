# navi_travel/routes/travel.py
"""Travel routes and blueprint configuration."""

import base64
import binascii
import io
import json
import logging

from flask import Blueprint, Response, jsonify, request, send_file

from navi_travel.api.config import get_map_config
from navi_travel.api.errors import CaptureFailure, DataFetchFailure, TravelError
from navi_travel.api.export import ExportRegistry, ItineraryExport
from navi_travel.api.locations import DAY_COLORS, DEFAULT_CENTER, DEFAULT_ZOOM
from navi_travel.api.models import ItineraryDetails, itinerary_to_list, parse_itinerary
from navi_travel.api.services.map_service import MapService
from navi_travel.api.services.place_service import PlaceService
from navi_travel.api.services.weather_service import WeatherService

logger = logging.getLogger(__name__)

USER_HEADER = "X-User-Id"
EXPORT_HEADER = "X-Export-Id"


def _error(message, status):
    return jsonify({"error": message}), status


def _travel_error(e: TravelError):
    status = 500 if isinstance(e, DataFetchFailure) else 400
    return jsonify(e.to_dict()), status


def _json_object():
    """The request body, which must be a JSON object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def _itinerary_payload(data):
    """Accept either a bare list of days or ``{"itinerary": [...]}``."""
    if isinstance(data, dict):
        data = data.get("itinerary", data.get("days"))
    return parse_itinerary(data)


def _decode_data_url(value: str) -> bytes:
    """Decode a ``data:image/...;base64,`` URL or a bare base64 string."""
    if not isinstance(value, str):
        raise ValueError("snapshot must be a base64 string or data URL")
    if "," in value and value.startswith("data:"):
        value = value.split(",", 1)[1]
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CaptureFailure("Could not read the itinerary snapshot") from e


def create_travel_blueprint(itinerary_service, weather_service=None, place_service=None, exports=None):
    """Create and configure the travel blueprint.

    Args:
        itinerary_service: ItineraryService bound to the app's database
        weather_service: Optional WeatherService (defaults to OpenWeatherMap)
        place_service: Optional PlaceService
        exports: Optional ExportRegistry for cancellable downloads

    Returns:
        Configured Flask Blueprint
    """
    weather_service = weather_service or WeatherService()
    place_service = place_service or PlaceService()
    exports = exports if exports is not None else ExportRegistry()

    travel_bp = Blueprint("travel", __name__, url_prefix="/travel")

    def current_user_id():
        return request.headers.get(USER_HEADER, "").strip() or None

    def serialize_itinerary(result):
        return {
            "details": result["details"].to_dict(),
            "days": PlaceService.with_fallback_images(result["days"]),
        }

    @travel_bp.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "travel"})

    @travel_bp.route("/api/config")
    def api_config():
        """Return map configuration for the frontend."""
        config = get_map_config()
        lon, lat = DEFAULT_CENTER
        return jsonify({
            "center": {"lat": lat, "lng": lon},
            "zoom": DEFAULT_ZOOM,
            "tile_url": config["tile_url"],
            "attribution": config["attribution"],
            "max_zoom": config["max_zoom"],
            "day_colors": list(DAY_COLORS),
        })

    # ------------------------------------------------------------------ #
    # Saved itineraries
    # ------------------------------------------------------------------ #
    @travel_bp.route("/api/itineraries", methods=["GET", "POST"])
    def api_itineraries():
        """List the caller's itineraries or save a new one."""
        user_id = current_user_id()
        if not user_id:
            return _error("Authentication required", 401)

        try:
            if request.method == "GET":
                itineraries = itinerary_service.fetch_itineraries(user_id)
                return jsonify([item.to_dict() for item in itineraries])

            data = _json_object()
            details = ItineraryDetails.from_dict(data.get("details") or {})
            days = parse_itinerary(data.get("days"))
            saved = itinerary_service.save_itinerary(user_id, details, days)
            return jsonify({"details": saved.to_dict(), "days": itinerary_to_list(days)}), 201
        except ValueError as e:
            return _error(str(e), 400)
        except TravelError as e:
            return _travel_error(e)

    @travel_bp.route("/api/itineraries/<itinerary_id>", methods=["GET", "PUT", "DELETE"])
    def api_itinerary(itinerary_id):
        """Fetch, update or delete one itinerary."""
        user_id = current_user_id()
        if not user_id:
            return _error("Authentication required", 401)

        try:
            if request.method == "GET":
                result = itinerary_service.fetch_itinerary_by_id(user_id, itinerary_id)
                if result is None:
                    return _error("Itinerary not found", 404)
                return jsonify(serialize_itinerary(result))

            if request.method == "DELETE":
                if not itinerary_service.delete_itinerary(user_id, itinerary_id):
                    return _error("Itinerary not found", 404)
                return jsonify({"deleted": True, "id": itinerary_id})

            data = _json_object()
            details = ItineraryDetails.from_dict(data.get("details") or {})
            days = parse_itinerary(data.get("days"))
            updated = itinerary_service.update_itinerary(user_id, itinerary_id, details, days)
            if updated is None:
                return _error("Itinerary not found", 404)
            return jsonify({"details": updated.to_dict(), "days": itinerary_to_list(days)})
        except ValueError as e:
            return _error(str(e), 400)
        except TravelError as e:
            return _travel_error(e)

    # ------------------------------------------------------------------ #
    # Map
    # ------------------------------------------------------------------ #
    @travel_bp.route("/api/map/markers", methods=["POST"])
    def api_map_markers():
        """Resolve an itinerary to coloured, day-grouped markers."""
        try:
            days = _itinerary_payload(request.get_json(silent=True))
        except ValueError as e:
            return _error(str(e), 400)

        markers = MapService.build_markers(days)
        return jsonify({
            "markers": [marker.to_dict() for marker in markers],
            "bounds": MapService.calculate_bounds(markers),
            "unique_locations": len(MapService.unique_locations(days)),
        })

    @travel_bp.route("/api/map/render", methods=["POST"])
    def api_map_render():
        """Render an itinerary map as a standalone HTML page."""
        try:
            days = _itinerary_payload(request.get_json(silent=True))
            markers = MapService.build_markers(days)
            map_ = MapService.build_map(markers)
        except ValueError as e:
            return _error(str(e), 400)
        except TravelError as e:
            return _travel_error(e)
        return Response(MapService.render_html(map_), mimetype="text/html")

    # ------------------------------------------------------------------ #
    # Weather & places
    # ------------------------------------------------------------------ #
    @travel_bp.route("/api/weather")
    def api_weather():
        """Current weather; a placeholder reading if the lookup fails."""
        location = request.args.get("location", "").strip()
        return jsonify(weather_service.get_weather(location).to_dict())

    @travel_bp.route("/api/places/card", methods=["POST"])
    def api_place_card():
        """Build a place card, swapping in a fallback image when needed."""
        try:
            return jsonify(place_service.build_card(_json_object()))
        except ValueError as e:
            return _error(str(e), 400)

    # ------------------------------------------------------------------ #
    # PDF export
    # ------------------------------------------------------------------ #
    def send_export(export):
        export_id = request.headers.get(EXPORT_HEADER, "").strip() or None
        with exports.track(export_id, export):
            document = export.run()
        if document is None:
            return _error("Export cancelled", 409)
        return send_file(
            io.BytesIO(document.content),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=document.filename,
        )

    @travel_bp.route("/api/export/pdf", methods=["POST"])
    def api_export_pdf():
        """Export an itinerary (and optional client snapshot) as a PDF."""
        try:
            if request.files or request.form:
                title = request.form.get("title", "").strip()
                days = parse_itinerary(json.loads(request.form.get("itinerary") or "[]"))
                upload = request.files.get("snapshot")
                snapshot = upload.read() if upload else None
            else:
                data = _json_object()
                title = str(data.get("title") or "").strip()
                days = parse_itinerary(data.get("itinerary"))
                snapshot = _decode_data_url(data["snapshot"]) if data.get("snapshot") is not None else None

            if not title:
                return _error("title is required", 400)

            return send_export(ItineraryExport(title, days, snapshot=snapshot))
        except ValueError as e:
            return _error(str(e), 400)
        except TravelError as e:
            logger.error(f"Error downloading itinerary: {e.message}")
            return _error(f"Failed to download itinerary: {e.message}", 400)

    @travel_bp.route("/api/export/<export_id>", methods=["DELETE"])
    def api_cancel_export(export_id):
        """Cancel a download started with the same X-Export-Id header."""
        if not exports.cancel(export_id):
            return _error("Export not found", 404)
        return jsonify({"cancelled": True, "id": export_id})

    @travel_bp.route("/api/itineraries/<itinerary_id>/pdf")
    def api_itinerary_pdf(itinerary_id):
        """Export a saved itinerary as a PDF."""
        user_id = current_user_id()
        if not user_id:
            return _error("Authentication required", 401)

        try:
            result = itinerary_service.fetch_itinerary_by_id(user_id, itinerary_id)
            if result is None:
                return _error("Itinerary not found", 404)
            return send_export(ItineraryExport(result["details"].title, result["days"]))
        except TravelError as e:
            logger.error(f"Error downloading itinerary: {e.message}")
            status = 500 if isinstance(e, DataFetchFailure) else 400
            return _error(f"Failed to download itinerary: {e.message}", status)

    return travel_bp


__all__ = ['create_travel_blueprint']

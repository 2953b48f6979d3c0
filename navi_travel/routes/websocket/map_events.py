# navi_travel/routes/websocket/map_events.py
"""WebSocket handlers for the itinerary map dialog."""

import logging

from flask import request

from navi_travel.api.errors import RenderSurfaceMissing
from navi_travel.api.models import parse_itinerary

from .base import BaseWebSocketHandler

logger = logging.getLogger(__name__)


class SocketSurface:
    """A connected browser tab acting as the map's rendering surface."""

    def __init__(self, handler, sid):
        self.handler = handler
        self.sid = sid

    def mount(self, html, marker_count, unique_locations):
        delivered = self.handler.emit_to_client(
            'map_rendered',
            {
                'html': html,
                'marker_count': marker_count,
                'unique_locations': unique_locations,
            },
            room=self.sid,
        )
        if not delivered:
            raise RenderSurfaceMissing("Map container not found")

    def unmount(self):
        self.handler.emit_to_client('map_closed', {}, room=self.sid)


class MapHandler(BaseWebSocketHandler):
    """Handles map dialog open/close events."""

    def surface_lookup(self, sid):
        def lookup():
            if sid not in self.clients:
                return None
            return SocketSurface(self, sid)
        return lookup

    def error_reporter(self, sid):
        def report(message):
            self.emit_to_client('map_error', {'message': message, 'event': 'map_open'}, room=sid)
        return report

    def register_handlers(self):
        """Register map-related event handlers."""

        @self.socketio.on('map_open', namespace=self.namespace)
        def handle_map_open(data=None):
            """The map dialog became visible."""
            sid = request.sid
            payload = data if isinstance(data, dict) else {}
            try:
                itinerary = parse_itinerary(payload.get('itinerary'))
            except ValueError as e:
                self.handle_error(str(e), 'map_open')
                return

            self.log_event('map_open', {'days': len(itinerary)})
            map_session = self.map_sessions.open(
                sid, itinerary, self.surface_lookup(sid), on_error=self.error_reporter(sid)
            )
            # The client reports its container is already laid out
            if payload.get('immediate'):
                map_session.render_now()
            logger.debug(f"Map session {sid} is {map_session.state.value}")

        @self.socketio.on('map_close', namespace=self.namespace)
        def handle_map_close(data=None):
            """The map dialog was hidden."""
            self.log_event('map_close')
            self.map_sessions.hide(request.sid)

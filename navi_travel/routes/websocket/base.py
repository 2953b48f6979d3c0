# navi_travel/routes/websocket/base.py
"""Base WebSocket handler with common functionality."""

import logging
import threading

from flask import request
from flask_socketio import emit

logger = logging.getLogger(__name__)

NAMESPACE = "/travel/ws"


class ClientRegistry:
    """Socket.IO client ids currently connected to the namespace."""

    def __init__(self):
        self._sids = set()
        self._lock = threading.Lock()

    def add(self, sid):
        with self._lock:
            self._sids.add(sid)

    def discard(self, sid):
        with self._lock:
            self._sids.discard(sid)

    def __contains__(self, sid):
        with self._lock:
            return sid in self._sids

    def __len__(self):
        with self._lock:
            return len(self._sids)


class BaseWebSocketHandler:
    """Base class for WebSocket handlers with common functionality."""

    def __init__(self, socketio, clients, map_sessions, namespace=NAMESPACE):
        self.socketio = socketio
        self.clients = clients
        self.map_sessions = map_sessions
        self.namespace = namespace

    def emit_to_client(self, event, data, room=None):
        """Send ``event`` to one client (``room`` is its sid) or the caller.

        Returns False when the emit failed; the error is logged here.
        """
        try:
            if room:
                self.socketio.emit(event, data, to=room, namespace=self.namespace)
            else:
                emit(event, data, namespace=self.namespace)
        except Exception as e:
            logger.error(f"Could not send {event} to {room or 'caller'}: {e}")
            return False
        return True

    def log_event(self, event_name, data=None):
        """Log WebSocket events consistently."""
        if data:
            logger.info(f"[WS] {event_name} - Client: {request.sid}, Data: {data}")
        else:
            logger.info(f"[WS] {event_name} - Client: {request.sid}")

    def handle_error(self, message, event_name=""):
        """Log an error and tell the client, without dropping the connection."""
        logger.error(f"[WS] Error in {event_name} - Client: {request.sid}, Error: {message}")
        self.emit_to_client('map_error', {'message': message, 'event': event_name})

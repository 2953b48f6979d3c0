# navi_travel/routes/websocket/connection.py
"""WebSocket connection and disconnection handlers."""

import logging
import time

from flask import request

from .base import BaseWebSocketHandler

logger = logging.getLogger(__name__)


class ConnectionHandler(BaseWebSocketHandler):
    """Handles WebSocket connection lifecycle events."""

    def register_handlers(self):
        """Register connection-related event handlers."""

        @self.socketio.on('connect', namespace=self.namespace)
        def handle_connect(auth=None):
            """Handle WebSocket connection from browser."""
            self.clients.add(request.sid)
            self.log_event('connect')
            self.emit_to_client('connected', {'session_id': request.sid, 'status': 'connected'})

        @self.socketio.on('disconnect', namespace=self.namespace)
        def handle_disconnect(*args):
            """Tear down the client's map; its surface is gone."""
            sid = request.sid
            self.clients.discard(sid)
            self.map_sessions.remove(sid)
            logger.info(f"🔌 WebSocket disconnected, map session {sid} disposed")

        @self.socketio.on('ping', namespace=self.namespace)
        def handle_ping():
            """Handle ping for connection testing."""
            self.emit_to_client('pong', {'timestamp': time.time()})

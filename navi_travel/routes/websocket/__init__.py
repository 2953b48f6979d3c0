# navi_travel/routes/websocket/__init__.py
"""WebSocket route handlers initialization."""

import logging

from .base import NAMESPACE, ClientRegistry
from .connection import ConnectionHandler
from .map_events import MapHandler

logger = logging.getLogger(__name__)


def register_websocket_handlers(socketio, map_sessions):
    """Register all WebSocket event handlers with SocketIO.

    Args:
        socketio: Flask-SocketIO instance
        map_sessions: MapSessionManager holding one map per client

    Returns:
        The ClientRegistry tracking connected clients
    """
    logger.info("Registering WebSocket handlers...")

    clients = ClientRegistry()
    try:
        connection_handler = ConnectionHandler(socketio, clients, map_sessions, NAMESPACE)
        map_handler = MapHandler(socketio, clients, map_sessions, NAMESPACE)

        logger.info(f"Registering connection handler for namespace: {NAMESPACE}")
        connection_handler.register_handlers()

        logger.info(f"Registering map handler for namespace: {NAMESPACE}")
        map_handler.register_handlers()

        logger.info("✅ WebSocket handlers registered successfully")

    except Exception as e:
        logger.error(f"❌ Failed to register WebSocket handlers: {e}")
        logger.exception("WebSocket registration error:")
        raise

    return clients


__all__ = ['register_websocket_handlers', 'NAMESPACE']

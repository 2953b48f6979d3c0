# navi_travel/routes/__init__.py
from navi_travel.routes.travel import create_travel_blueprint
from navi_travel.routes.websocket import NAMESPACE, register_websocket_handlers

__all__ = ['create_travel_blueprint', 'register_websocket_handlers', 'NAMESPACE']

import io
import os

# In-memory database for every test; must be set before the app is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("FLASK_SECRET_KEY", "test-secret")
os.environ.setdefault("OPENWEATHER_API_KEY", "test-key")

import pytest
from PIL import Image

from navi_travel.api.db import make_session_factory
from navi_travel.api.models import parse_itinerary
from navi_travel.api.services.itinerary_service import ItineraryService
from navi_travel.api.services.map_session import MapSessionManager


class ManualTimer:
    """Stands in for threading.Timer; fires only when the test says so."""

    def __init__(self, interval, function, args=()):
        self.interval = interval
        self.function = function
        self.args = args
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        # Runs even if cancelled: a timer can lose the race with cancel().
        self.function(*self.args)


class ManualTimerFactory:
    def __init__(self):
        self.timers = []

    def __call__(self, interval, function, args=()):
        timer = ManualTimer(interval, function, args)
        self.timers.append(timer)
        return timer

    def fire_all(self):
        for timer in list(self.timers):
            timer.fire()


class ImmediateTimer(ManualTimer):
    """Fires as soon as it is started."""

    def start(self):
        self.started = True
        if not self.cancelled:
            self.fire()


class FakeSurface:
    def __init__(self):
        self.mounted = []
        self.unmounts = 0

    def mount(self, html, marker_count, unique_locations):
        self.mounted.append((html, marker_count, unique_locations))

    def unmount(self):
        self.unmounts += 1


SAMPLE_ITINERARY = [
    {
        "day": 1,
        "activities": [
            {"time": "09:00", "title": "Morning walk", "location": "Vashi"},
            {"time": "13:00", "title": "Lunch", "location": "Unknown Place XYZ"},
        ],
    },
    {
        "day": 2,
        "activities": [
            {"time": "10:00", "title": "Fort visit", "location": "Belapur Fort", "category": "Historical Sites"},
        ],
    },
]


@pytest.fixture
def itinerary_payload():
    return [dict(day, activities=[dict(a) for a in day["activities"]]) for day in SAMPLE_ITINERARY]


@pytest.fixture
def itinerary(itinerary_payload):
    return parse_itinerary(itinerary_payload)


@pytest.fixture
def timer_factory():
    return ManualTimerFactory()


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def session_factory():
    return make_session_factory("sqlite://")


@pytest.fixture
def itinerary_service(session_factory):
    return ItineraryService(session_factory)


@pytest.fixture
def png_bytes():
    def make(width=210, height=561, color="white"):
        buffer = io.BytesIO()
        Image.new("RGB", (width, height), color).save(buffer, format="PNG")
        return buffer.getvalue()
    return make


@pytest.fixture
def app_and_socketio():
    from main import create_app

    map_sessions = MapSessionManager(timer_factory=ImmediateTimer, settle_delay=0)
    app, socketio = create_app(database_url="sqlite://", map_sessions=map_sessions)
    app.config["TESTING"] = True
    return app, socketio


@pytest.fixture
def app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture
def socketio(app_and_socketio):
    return app_and_socketio[1]


@pytest.fixture
def client(app):
    return app.test_client()

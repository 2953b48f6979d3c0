# navi_travel/api/services/map_session.py
"""Lifecycle management for the interactive itinerary map."""

import enum
import logging
import random
import threading
from typing import Callable, Dict, Optional, Protocol, Sequence

from navi_travel.api.config import get_map_config
from navi_travel.api.errors import RenderSurfaceMissing, TravelError
from navi_travel.api.models import ItineraryDay
from navi_travel.api.services.map_service import MapService, load_map_library

logger = logging.getLogger(__name__)


class MapState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    LOADING_DEPENDENCIES = "loading_dependencies"
    READY = "ready"
    RENDERING = "rendering"
    RENDERED = "rendered"
    DISPOSED = "disposed"
    ERRORED = "errored"


class RenderSurface(Protocol):
    """Where a rendered map is shown (e.g. a connected browser tab)."""

    def mount(self, html: str, marker_count: int, unique_locations: int) -> None:
        ...

    def unmount(self) -> None:
        ...


class MapHandle:
    """The single live map instance of a session, bound to its surface."""

    def __init__(self, map_, surface: RenderSurface):
        self.map = map_
        self.surface = surface
        self.disposed = False

    def dispose(self):
        """Unbind from the surface and release the map. Idempotent."""
        if self.disposed:
            return
        self.disposed = True
        try:
            self.surface.unmount()
        finally:
            self.map = None


class MapSession:
    """Owns one map dialog: dependency load, settle delay, render, dispose.

    All state changes happen under ``self.lock``. Every ``show()`` bumps
    ``generation``; a settle timer only renders if its generation is still
    current, so a ``hide()`` or a newer ``show()`` always wins over a timer
    that has not rendered yet.
    """

    def __init__(
        self,
        session_id: str,
        itinerary: Sequence[ItineraryDay],
        surface_lookup: Callable[[], Optional[RenderSurface]],
        settle_delay: Optional[float] = None,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
        dependency_loader: Callable[[], object] = load_map_library,
        rng: Optional[random.Random] = None,
        on_error: Optional[Callable[[str], None]] = None,
    ):
        if settle_delay is None:
            settle_delay = get_map_config()["settle_delay_ms"] / 1000.0

        self.session_id = session_id
        self.itinerary = list(itinerary)
        self.surface_lookup = surface_lookup
        self.settle_delay = settle_delay
        self.timer_factory = timer_factory
        self.dependency_loader = dependency_loader
        self.rng = rng
        self.on_error = on_error

        self.state = MapState.UNINITIALIZED
        self.error: Optional[str] = None
        self.handle: Optional[MapHandle] = None
        self.generation = 0
        self._timer = None
        self._dependencies_loaded = False

        self.lock = threading.RLock()

    @property
    def has_live_map(self) -> bool:
        return self.handle is not None and not self.handle.disposed

    def set_itinerary(self, itinerary: Sequence[ItineraryDay]):
        with self.lock:
            self.itinerary = list(itinerary)

    def show(self) -> MapState:
        """The map dialog became visible."""
        with self.lock:
            if self.state is MapState.ERRORED:
                logger.info(f"Map session {self.session_id} errored earlier; not rendering")
                return self.state

            if not self._dependencies_loaded:
                self.state = MapState.LOADING_DEPENDENCIES
                try:
                    self.dependency_loader()
                except TravelError as e:
                    self._fail(e.message)
                    return self.state
                self._dependencies_loaded = True
                self.state = MapState.READY

            self._cancel_timer()
            self.generation += 1
            self.state = MapState.RENDERING

            timer = self.timer_factory(self.settle_delay, self._on_settled, args=(self.generation,))
            timer.daemon = True
            self._timer = timer
            timer.start()
            logger.debug(f"Map session {self.session_id} waiting {self.settle_delay:.2f}s to render")
            return self.state

    def hide(self) -> MapState:
        """The map dialog was closed; cancel any pending render and dispose."""
        with self.lock:
            self._cancel_timer()
            self.generation += 1
            had_map = self.has_live_map
            self._dispose_handle()
            if self.state is not MapState.ERRORED:
                self.state = MapState.DISPOSED
            if had_map:
                logger.info(f"Cleaning up map on dialog close ({self.session_id})")
            return self.state

    def close(self):
        """Tear down the session (client went away)."""
        self.hide()
        logger.info(f"Map session {self.session_id} closed")

    def render_now(self):
        """Skip the settle delay. Used when the surface is known to be laid out."""
        with self.lock:
            generation = self.generation
        self._on_settled(generation)

    def _on_settled(self, generation: int):
        with self.lock:
            if generation != self.generation or self.state is not MapState.RENDERING:
                logger.debug(f"Stale render attempt for map session {self.session_id} ignored")
                return
            self._timer = None

            surface = self.surface_lookup()
            if surface is None:
                self._fail(RenderSurfaceMissing("Map container not found").message)
                return

            # At most one live map: drop the previous one before building anew
            self._dispose_handle()

            handle = None
            try:
                markers = MapService.build_markers(self.itinerary, rng=self.rng)
                map_ = MapService.build_map(markers)
                handle = MapHandle(map_, surface)
                self.handle = handle
                surface.mount(
                    MapService.render_html(map_),
                    len(markers),
                    len(MapService.unique_locations(self.itinerary)),
                )
            except Exception as e:
                logger.exception(f"Error initializing map for session {self.session_id}")
                if handle is not None:
                    handle.dispose()
                self.handle = None
                message = e.message if isinstance(e, TravelError) else str(e) or "Unknown error"
                if not message.startswith("Could not load the map"):
                    message = f"Could not load the map: {message}"
                self._fail(message)
                return

            self.state = MapState.RENDERED
            logger.info(f"Map rendered for session {self.session_id} with {len(markers)} markers")

    def _fail(self, message: str):
        self._cancel_timer()
        self._dispose_handle()
        self.state = MapState.ERRORED
        self.error = message
        logger.error(f"Map session {self.session_id} failed: {message}")
        if self.on_error is not None:
            self.on_error(message)

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _dispose_handle(self):
        if self.handle is not None:
            handle, self.handle = self.handle, None
            handle.dispose()


class MapSessionManager:
    """Keeps one MapSession per connected client."""

    def __init__(self, **session_options):
        self.sessions: Dict[str, MapSession] = {}
        self.session_options = session_options
        self.lock = threading.Lock()

    def open(
        self,
        session_id: str,
        itinerary: Sequence[ItineraryDay],
        surface_lookup: Callable[[], Optional[RenderSurface]],
        on_error: Optional[Callable[[str], None]] = None,
    ) -> MapSession:
        """Show the map for a client, creating its session on first use."""
        with self.lock:
            map_session = self.sessions.get(session_id)
            if map_session is None:
                map_session = MapSession(
                    session_id, itinerary, surface_lookup, on_error=on_error, **self.session_options
                )
                self.sessions[session_id] = map_session
                logger.info(f"Created map session {session_id}")
            else:
                map_session.set_itinerary(itinerary)
                map_session.surface_lookup = surface_lookup
                map_session.on_error = on_error

        map_session.show()
        return map_session

    def get(self, session_id: str) -> Optional[MapSession]:
        with self.lock:
            return self.sessions.get(session_id)

    def hide(self, session_id: str) -> Optional[MapSession]:
        map_session = self.get(session_id)
        if map_session:
            map_session.hide()
        return map_session

    def remove(self, session_id: str):
        with self.lock:
            map_session = self.sessions.pop(session_id, None)
        if map_session:
            map_session.close()
            logger.info(f"Removed map session {session_id}")

    def live_map_count(self) -> int:
        with self.lock:
            return sum(1 for s in self.sessions.values() if s.has_live_map)


# Global map session manager instance
_session_manager = None


def get_map_session_manager() -> MapSessionManager:
    """Get the global MapSessionManager instance."""
    global _session_manager
    if _session_manager is None:
        _session_manager = MapSessionManager()
    return _session_manager

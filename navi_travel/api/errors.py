# navi_travel/api/errors.py
"""Error kinds surfaced to users as non-fatal messages."""

from __future__ import annotations


class TravelError(Exception):
    """Base class for recoverable travel-planner failures.

    ``message`` is the user-facing text; ``title`` is the short heading the
    front-end shows above it.
    """

    title = "Something went wrong"

    def __init__(self, message: str, title: str | None = None):
        super().__init__(message)
        self.message = message
        if title:
            self.title = title

    def to_dict(self) -> dict:
        return {"error": self.message, "title": self.title}


class DependencyLoadFailure(TravelError):
    """The map base library could not be loaded."""

    title = "Map unavailable"


class RenderSurfaceMissing(TravelError):
    """The map container was gone when the render step ran."""

    title = "Map unavailable"


class CaptureFailure(TravelError):
    """The itinerary snapshot was missing or could not be decoded."""

    title = "Failed to download itinerary"


class DataFetchFailure(TravelError):
    """A weather or storage call failed."""

    title = "Error fetching data"


__all__ = [
    "TravelError",
    "DependencyLoadFailure",
    "RenderSurfaceMissing",
    "CaptureFailure",
    "DataFetchFailure",
]

"""Shared data structures for itinerary planning.

Keeping the itinerary dataclasses in one module lets the resolver, the
map service, the storage layer and the exporter share a single
source-of-truth definition without importing each other.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

Coordinate = Tuple[float, float]  # (longitude, latitude)


@dataclass(frozen=True)
class ItineraryActivity:
    """A single activity on one day of a trip."""

    time: str
    title: str
    location: str  # free text, e.g. "Inorbit Mall, Vashi"
    description: str = ""
    image: Optional[str] = None
    category: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ItineraryActivity":
        return cls(
            time=str(data.get("time") or ""),
            title=str(data.get("title") or ""),
            location=str(data.get("location") or ""),
            description=str(data.get("description") or ""),
            image=data.get("image") or None,
            category=str(data.get("category") or ""),
        )

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "title": self.title,
            "location": self.location,
            "description": self.description,
            "image": self.image,
            "category": self.category,
        }


@dataclass(frozen=True)
class ItineraryDay:
    """One day of an itinerary; ``day`` is 1-based."""

    day: int
    activities: Tuple[ItineraryActivity, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ItineraryDay":
        items = data.get("activities") or []
        if not isinstance(items, (list, tuple)):
            raise ValueError(f"Activities of day {data.get('day')!r} must be a list")
        if not all(isinstance(item, dict) for item in items):
            raise ValueError(f"Each activity of day {data.get('day')!r} must be an object")
        activities = tuple(ItineraryActivity.from_dict(item) for item in items)
        return cls(day=int(data["day"]), activities=activities)

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "activities": [activity.to_dict() for activity in self.activities],
        }


# An itinerary is the list of its days, ordered by ``day`` ascending.
Itinerary = List[ItineraryDay]


def parse_itinerary(payload: Optional[Sequence[Dict[str, Any]]]) -> Itinerary:
    """Build an itinerary from its JSON form.

    Raises:
        ValueError: on a malformed day, a non-positive day number or a
            day number used twice.
    """
    if payload is None:
        return []
    if not isinstance(payload, (list, tuple)):
        raise ValueError("Itinerary must be a list of days")

    days: Itinerary = []
    seen = set()
    for entry in payload:
        if not isinstance(entry, dict) or "day" not in entry:
            raise ValueError("Each itinerary day needs a 'day' number")
        try:
            day = ItineraryDay.from_dict(entry)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid itinerary day {entry.get('day')!r}: {exc}") from exc
        if day.day < 1:
            raise ValueError(f"Day numbers start at 1, got {day.day}")
        if day.day in seen:
            raise ValueError(f"Day {day.day} appears more than once")
        seen.add(day.day)
        days.append(day)

    days.sort(key=lambda d: d.day)
    return days


def itinerary_to_list(days: Sequence[ItineraryDay]) -> List[dict]:
    return [day.to_dict() for day in days]


@dataclass(frozen=True)
class ResolvedMarker:
    """A positioned, styled map point for one activity. Never persisted."""

    day_index: int
    coordinate: Coordinate
    color: str
    label: str
    popup_text: str
    title: str = ""
    time: str = ""
    location: str = ""

    @property
    def lat_lng(self) -> List[float]:
        lon, lat = self.coordinate
        return [lat, lon]

    def to_dict(self) -> dict:
        lon, lat = self.coordinate
        return {
            "day": self.day_index,
            "lng": lon,
            "lat": lat,
            "color": self.color,
            "label": self.label,
            "popup": self.popup_text,
            "title": self.title,
            "time": self.time,
            "location": self.location,
        }


@dataclass
class SavedItinerary:
    """Header row of a stored itinerary."""

    id: str
    title: str
    days: int
    start_date: Optional[datetime] = None
    pace: Optional[str] = None
    budget: Optional[str] = None
    interests: Optional[List[str]] = None
    transportation: Optional[str] = None
    include_food: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "days": self.days,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "pace": self.pace,
            "budget": self.budget,
            "interests": self.interests,
            "transportation": self.transportation,
            "include_food": self.include_food,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass
class ItineraryDetails:
    """The editable header fields sent when saving or updating."""

    title: str
    days: int
    pace: str = ""
    budget: str = ""
    interests: List[str] = field(default_factory=list)
    transportation: str = ""
    include_food: bool = False
    start_date: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ItineraryDetails":
        if not isinstance(data, dict):
            raise ValueError("Itinerary details must be an object")
        title = str(data.get("title") or "").strip()
        if not title:
            raise ValueError("Itinerary title is required")
        try:
            days = int(data.get("days") or 0)
        except (TypeError, ValueError) as exc:
            raise ValueError("Itinerary days must be a number") from exc
        if days < 1:
            raise ValueError("Itinerary must span at least one day")

        start_date = data.get("start_date")
        if isinstance(start_date, str) and start_date:
            start_date = datetime.fromisoformat(start_date.replace("Z", "+00:00"))
        elif not isinstance(start_date, datetime):
            start_date = None

        return cls(
            title=title,
            days=days,
            pace=str(data.get("pace") or ""),
            budget=str(data.get("budget") or ""),
            interests=list(data.get("interests") or []),
            transportation=str(data.get("transportation") or ""),
            include_food=bool(data.get("include_food")),
            start_date=start_date,
        )


@dataclass
class WeatherReading:
    """Current conditions for a place, or the placeholder on failure."""

    location: str
    condition: str
    category: str
    temperature: int
    humidity: int
    wind_speed: int  # km/h
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "location": self.location,
            "condition": self.condition,
            "category": self.category,
            "temperature": self.temperature,
            "humidity": self.humidity,
            "wind_speed": self.wind_speed,
            "error": self.error,
        }

from datetime import datetime
from unittest import mock

import pytest
from sqlalchemy.exc import OperationalError

from navi_travel.api.errors import DataFetchFailure
from navi_travel.api.models import ItineraryDetails, parse_itinerary
from navi_travel.api.services.itinerary_service import ItineraryService


def details(title="Weekend in Vashi", days=2, **extra):
    data = {"title": title, "days": days, "pace": "relaxed", "interests": ["food", "parks"]}
    data.update(extra)
    return ItineraryDetails.from_dict(data)


def test_save_and_fetch_roundtrip(itinerary_service, itinerary):
    saved = itinerary_service.save_itinerary("user-1", details(), itinerary)

    result = itinerary_service.fetch_itinerary_by_id("user-1", saved.id)

    assert result["details"].title == "Weekend in Vashi"
    assert result["details"].interests == ["food", "parks"]
    assert result["days"] == itinerary


def test_activities_come_back_ordered_by_day_then_time(itinerary_service):
    days = parse_itinerary([
        {"day": 2, "activities": [{"time": "08:00", "title": "c", "location": "Nerul"}]},
        {"day": 1, "activities": [
            {"time": "15:00", "title": "b", "location": "Vashi"},
            {"time": "09:00", "title": "a", "location": "Vashi"},
        ]},
    ])
    saved = itinerary_service.save_itinerary("user-1", details(), days)
    result = itinerary_service.fetch_itinerary_by_id("user-1", saved.id)

    titles = [[a.title for a in day.activities] for day in result["days"]]
    assert titles == [["a", "b"], ["c"]]


def test_itineraries_are_scoped_to_their_owner(itinerary_service, itinerary):
    saved = itinerary_service.save_itinerary("user-1", details(), itinerary)

    assert itinerary_service.fetch_itinerary_by_id("user-2", saved.id) is None
    assert itinerary_service.fetch_itineraries("user-2") == []
    assert not itinerary_service.delete_itinerary("user-2", saved.id)


def test_fetch_itineraries_most_recently_updated_first(itinerary_service, itinerary):
    first = itinerary_service.save_itinerary("user-1", details("First"), itinerary)
    itinerary_service.save_itinerary("user-1", details("Second"), itinerary)
    itinerary_service.update_itinerary("user-1", first.id, details("First again"), itinerary)

    titles = [item.title for item in itinerary_service.fetch_itineraries("user-1")]
    assert titles[0] == "First again"
    assert sorted(titles) == ["First again", "Second"]


def test_update_replaces_activities(itinerary_service, itinerary):
    saved = itinerary_service.save_itinerary("user-1", details(), itinerary)
    new_days = parse_itinerary([
        {"day": 1, "activities": [{"time": "10:00", "title": "Only stop", "location": "Airoli"}]},
    ])

    updated = itinerary_service.update_itinerary(
        "user-1", saved.id, details("Short trip", days=1, start_date="2024-03-05"), new_days
    )
    result = itinerary_service.fetch_itinerary_by_id("user-1", saved.id)

    assert updated.title == "Short trip"
    assert result["details"].start_date.date() == datetime(2024, 3, 5).date()
    assert result["days"] == new_days


def test_update_missing_returns_none(itinerary_service, itinerary):
    assert itinerary_service.update_itinerary("user-1", "nope", details(), itinerary) is None


def test_delete_removes_itinerary(itinerary_service, itinerary):
    saved = itinerary_service.save_itinerary("user-1", details(), itinerary)

    assert itinerary_service.delete_itinerary("user-1", saved.id)
    assert itinerary_service.fetch_itinerary_by_id("user-1", saved.id) is None
    assert itinerary_service.fetch_itineraries("user-1") == []


def test_database_errors_become_fetch_failures():
    broken = mock.Mock()
    broken.scalars.side_effect = OperationalError("SELECT", {}, Exception("db down"))
    service = ItineraryService(lambda: broken)

    with pytest.raises(DataFetchFailure) as excinfo:
        service.fetch_itineraries("user-1")

    assert excinfo.value.title == "Error fetching itineraries"
    broken.rollback.assert_called_once()
    broken.close.assert_called_once()


def test_details_validation():
    with pytest.raises(ValueError):
        ItineraryDetails.from_dict({"title": "", "days": 1})
    with pytest.raises(ValueError):
        ItineraryDetails.from_dict({"title": "Trip", "days": 0})

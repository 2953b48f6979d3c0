# navi_travel/api/services/itinerary_service.py
"""Service layer for saving and loading itineraries."""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from navi_travel.api.db import ItineraryActivityRecord, UserItinerary
from navi_travel.api.errors import DataFetchFailure
from navi_travel.api.models import (
    ItineraryActivity,
    ItineraryDay,
    ItineraryDetails,
    SavedItinerary,
)

logger = logging.getLogger(__name__)


def _to_saved(row: UserItinerary) -> SavedItinerary:
    return SavedItinerary(
        id=row.id,
        title=row.title,
        days=row.days,
        start_date=row.start_date,
        pace=row.pace,
        budget=row.budget,
        interests=list(row.interests) if row.interests is not None else None,
        transportation=row.transportation,
        include_food=row.include_food,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _activity_rows(itinerary_id: str, days: Sequence[ItineraryDay]) -> List[ItineraryActivityRecord]:
    return [
        ItineraryActivityRecord(
            itinerary_id=itinerary_id,
            day=day.day,
            time=activity.time,
            title=activity.title,
            location=activity.location,
            description=activity.description or None,
            image=activity.image or None,
            category=activity.category or None,
        )
        for day in days
        for activity in day.activities
    ]


def group_activities(rows: Sequence[ItineraryActivityRecord]) -> List[ItineraryDay]:
    """Group activity rows (already ordered by day, time) into days."""
    grouped: Dict[int, List[ItineraryActivity]] = {}
    for row in rows:
        grouped.setdefault(row.day, []).append(
            ItineraryActivity(
                time=row.time,
                title=row.title,
                location=row.location,
                description=row.description or "",
                image=row.image,
                category=row.category or "",
            )
        )
    return [
        ItineraryDay(day=day, activities=tuple(activities))
        for day, activities in sorted(grouped.items())
    ]


class ItineraryService:
    """Handles itinerary persistence for a signed-in user."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def _session(self, failure_title: str):
        session: Session = self.session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"{failure_title}: {e}")
            raise DataFetchFailure(str(e), title=failure_title) from e
        finally:
            session.close()

    def fetch_itineraries(self, user_id: str) -> List[SavedItinerary]:
        """All itineraries of a user, most recently updated first."""
        logger.info(f"Fetching itineraries for user: {user_id}")
        with self._session("Error fetching itineraries") as session:
            rows = session.scalars(
                select(UserItinerary)
                .where(UserItinerary.user_id == user_id)
                .order_by(UserItinerary.updated_at.desc())
            ).all()
            return [_to_saved(row) for row in rows]

    def fetch_itinerary_by_id(self, user_id: str, itinerary_id: str) -> Optional[Dict[str, object]]:
        """Get one itinerary with its days.

        Returns:
            ``{"details": SavedItinerary, "days": [ItineraryDay, ...]}`` or
            None if the user has no itinerary with that id.
        """
        with self._session("Error fetching itinerary") as session:
            row = session.scalars(
                select(UserItinerary).where(
                    UserItinerary.id == itinerary_id,
                    UserItinerary.user_id == user_id,
                )
            ).first()
            if row is None:
                return None

            activities = session.scalars(
                select(ItineraryActivityRecord)
                .where(ItineraryActivityRecord.itinerary_id == itinerary_id)
                .order_by(
                    ItineraryActivityRecord.day.asc(),
                    ItineraryActivityRecord.time.asc(),
                    ItineraryActivityRecord.id.asc(),
                )
            ).all()

            return {"details": _to_saved(row), "days": group_activities(activities)}

    def save_itinerary(
        self,
        user_id: str,
        details: ItineraryDetails,
        days: Sequence[ItineraryDay],
    ) -> SavedItinerary:
        """Insert the itinerary header, then one row per activity."""
        logger.info(f"Saving itinerary '{details.title}' for user {user_id}")
        with self._session("Error saving itinerary") as session:
            row = UserItinerary(
                user_id=user_id,
                title=details.title,
                days=details.days,
                start_date=details.start_date,
                pace=details.pace,
                budget=details.budget,
                interests=details.interests,
                transportation=details.transportation,
                include_food=details.include_food,
            )
            session.add(row)
            session.flush()

            activity_rows = _activity_rows(row.id, days)
            session.add_all(activity_rows)
            logger.info(f"Saving {len(activity_rows)} activities for itinerary {row.id}")
            session.flush()
            return _to_saved(row)

    def update_itinerary(
        self,
        user_id: str,
        itinerary_id: str,
        details: ItineraryDetails,
        days: Sequence[ItineraryDay],
    ) -> Optional[SavedItinerary]:
        """Update the header and replace all activities.

        Returns:
            The updated itinerary, or None if it does not belong to the user.
        """
        logger.info(f"Updating itinerary {itinerary_id} for user {user_id}")
        with self._session("Error updating itinerary") as session:
            row = session.scalars(
                select(UserItinerary).where(
                    UserItinerary.id == itinerary_id,
                    UserItinerary.user_id == user_id,
                )
            ).first()
            if row is None:
                return None

            row.title = details.title
            row.days = details.days
            row.start_date = details.start_date
            row.pace = details.pace
            row.budget = details.budget
            row.interests = details.interests
            row.transportation = details.transportation
            row.include_food = details.include_food
            row.updated_at = datetime.now(timezone.utc)

            row.activities.clear()
            session.flush()
            row.activities.extend(_activity_rows(itinerary_id, days))
            session.flush()
            return _to_saved(row)

    def delete_itinerary(self, user_id: str, itinerary_id: str) -> bool:
        """Delete an itinerary and its activities. False if not found."""
        with self._session("Error deleting itinerary") as session:
            row = session.scalars(
                select(UserItinerary).where(
                    UserItinerary.id == itinerary_id,
                    UserItinerary.user_id == user_id,
                )
            ).first()
            if row is None:
                return False
            session.delete(row)
            logger.info(f"Deleted itinerary {itinerary_id}")
            return True

# navi_travel/api/db.py
"""SQLAlchemy models for saved itineraries."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship, sessionmaker
from sqlalchemy.pool import StaticPool


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class UserItinerary(Base):
    __tablename__ = "user_itineraries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    title: Mapped[str] = mapped_column(String(255))
    days: Mapped[int] = mapped_column(Integer)
    start_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    pace: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    budget: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    interests: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    transportation: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    include_food: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    activities: Mapped[List["ItineraryActivityRecord"]] = relationship(
        back_populates="itinerary", cascade="all, delete-orphan"
    )


class ItineraryActivityRecord(Base):
    __tablename__ = "itinerary_activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    itinerary_id: Mapped[str] = mapped_column(
        ForeignKey("user_itineraries.id", ondelete="CASCADE"), index=True
    )
    day: Mapped[int] = mapped_column(Integer)
    time: Mapped[str] = mapped_column(String(32))
    title: Mapped[str] = mapped_column(String(255))
    location: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    itinerary: Mapped[UserItinerary] = relationship(back_populates="activities")


def make_engine(url: str) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across threads."""
    if url == "sqlite://" or (url.startswith("sqlite") and ":memory:" in url):
        return create_engine(
            url, connect_args={"check_same_thread": False}, poolclass=StaticPool
        )
    return create_engine(url)


def init_db(engine: Engine) -> None:
    """Create all tables. Called once at startup."""
    Base.metadata.create_all(engine)


def make_session_factory(url: str) -> sessionmaker:
    engine = make_engine(url)
    init_db(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)

"""
Pytest configuration and fixtures for Pickup tests.

Provides database session fixtures, store fixtures and event factories.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Generator, Optional

import pytest
import sqlalchemy as sa
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pickup.config import Settings
from pickup.integrations.base import (
    ActivityType,
    EventCreator,
    EventDraft,
    EventLocation,
    PickupEvent,
)
from pickup.integrations.database import SQLAlchemyEventStore, SQLAlchemySocialGraph
from pickup.models import Base
from pickup.services import UserDirectory


# Configure SQLite to enforce foreign key constraints in tests
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key constraints for SQLite connections."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


NOW = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Create a clean database session for each test.

    Uses an in-memory SQLite database shared across threads (StaticPool) so
    that TestClient requests see the same tables.

    Yields:
        Session: SQLAlchemy session for database operations
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.rollback()
        session.close()
        with engine.begin() as connection:
            connection.execute(sa.text("PRAGMA foreign_keys=OFF"))
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def settings() -> Settings:
    """Settings that ignore any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def now() -> datetime:
    """Fixed 'current time' for timing-dependent tests."""
    return NOW


@pytest.fixture
def event_store(db_session: Session) -> SQLAlchemyEventStore:
    return SQLAlchemyEventStore(db_session)


@pytest.fixture
def social_graph(db_session: Session) -> SQLAlchemySocialGraph:
    return SQLAlchemySocialGraph(db_session)


@pytest.fixture
def directory(db_session: Session) -> UserDirectory:
    return UserDirectory(db_session)


@pytest.fixture
def registered_users(directory: UserDirectory, db_session: Session) -> dict:
    """
    Register alice, bob and carol.

    Returns:
        dict mapping uid to UserProfile
    """
    profiles = {
        uid: directory.register(uid, f"{uid}@virginia.edu", display_name=uid.title())
        for uid in ("alice", "bob", "carol")
    }
    db_session.commit()
    return profiles


@pytest.fixture
def make_event() -> Callable[..., PickupEvent]:
    """
    Factory for PickupEvent records.

    Defaults to a public Sports event created by 'creator' at NOW, ending an
    hour later, with the creator as the only participant.
    """

    def _make(
        id: str = "evt-1",
        creator_id: Optional[str] = "creator",
        participants: Optional[list[str]] = None,
        is_private: bool = False,
        invited: Optional[list[str]] = None,
        max_participants: Optional[int] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        activity: ActivityType = ActivityType.SPORTS,
        subtype: Optional[str] = "Basketball",
        title: str = "Pickup basketball",
    ) -> PickupEvent:
        if participants is None:
            participants = [creator_id] if creator_id else []
        return PickupEvent(
            id=id,
            title=title,
            activity=activity,
            subtype=subtype,
            location=EventLocation(
                name="Memorial Gym",
                address="210 Emmet St S",
                latitude=38.0336,
                longitude=-78.5080,
            ),
            creator=EventCreator(user_id=creator_id, display_name="Creator"),
            created_at=NOW,
            start_time=start_time,
            end_time=end_time or NOW + timedelta(hours=1),
            participants=list(participants),
            max_participants=max_participants,
            is_private=is_private,
            invited=list(invited or []),
        )

    return _make


@pytest.fixture
def make_draft() -> Callable[..., EventDraft]:
    """Factory for EventDraft records with valid defaults."""

    def _make(**overrides) -> EventDraft:
        values = dict(
            title="Spikeball on the Lawn",
            activity=ActivityType.SPORTS,
            subtype="Spikeball",
            location=EventLocation(
                name="The Lawn",
                address="The Lawn, Charlottesville",
                latitude=38.0356,
                longitude=-78.5034,
            ),
        )
        values.update(overrides)
        return EventDraft(**values)

    return _make

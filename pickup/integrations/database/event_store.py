"""
EventStore implementation backed by SQLAlchemy.

Rows that fail conversion are logged and skipped so that a single malformed
record never reaches, or aborts, the visibility filter.
"""

import logging
from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from pickup.exceptions import (
    AlreadyMemberError,
    EventNotFoundError,
    InvalidEventError,
    StoreUnavailableError,
)
from pickup.integrations.base import EventStatus, EventStore, PickupEvent
from pickup.integrations.database.adapter import DatabaseAdapter, parse_event_id
from pickup.models import Event, EventParticipant, as_utc

logger = logging.getLogger(__name__)


class SQLAlchemyEventStore(EventStore):
    """EventStore over a request-scoped SQLAlchemy session."""

    def __init__(self, session: Session):
        self._session = session
        self._adapter = DatabaseAdapter()

    def _convert_all(self, rows: Sequence[Event]) -> list[PickupEvent]:
        events = []
        for row in rows:
            try:
                events.append(self._adapter.to_pickup_event(row))
            except InvalidEventError as e:
                logger.warning(f"Skipping malformed event row: {e.message}")
        return events

    def _load_row(self, event_id: str) -> Optional[Event]:
        parsed = parse_event_id(event_id)
        if parsed is None:
            return None
        stmt = (
            select(Event)
            .where(Event.id == parsed)
            .options(selectinload(Event.participants))
        )
        return self._session.scalar(stmt)

    def list_active(self, now_cutoff: datetime) -> Sequence[PickupEvent]:
        stmt = (
            select(Event)
            .where(
                and_(
                    Event.status == EventStatus.ACTIVE.value,
                    Event.end_time > as_utc(now_cutoff),
                )
            )
            .options(selectinload(Event.participants))
            .order_by(Event.end_time.asc())
        )
        try:
            rows = self._session.scalars(stmt).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list active events: {e}")
            raise StoreUnavailableError("Could not load events", e) from e
        return self._convert_all(rows)

    def list_past(self, now_cutoff: datetime) -> Sequence[PickupEvent]:
        stmt = (
            select(Event)
            .where(Event.end_time <= as_utc(now_cutoff))
            .options(selectinload(Event.participants))
            .order_by(Event.end_time.desc())
        )
        try:
            rows = self._session.scalars(stmt).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list past events: {e}")
            raise StoreUnavailableError("Could not load events", e) from e
        return self._convert_all(rows)

    def get(self, event_id: str) -> Optional[PickupEvent]:
        try:
            row = self._load_row(event_id)
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Could not load event {event_id}", e) from e
        if row is None:
            return None
        try:
            return self._adapter.to_pickup_event(row)
        except InvalidEventError as e:
            logger.warning(f"Ignoring malformed event row: {e.message}")
            return None

    def create(self, event: PickupEvent) -> str:
        row = self._adapter.to_event_row(event)
        try:
            self._session.add(row)
            self._session.flush()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise StoreUnavailableError("Could not create event", e) from e
        return str(row.id)

    def update_participants(self, event_id: str, participants: list[str]) -> None:
        """
        Replace the roster.

        Only the difference is written: removed users are deleted, new users
        inserted, and positions renumbered. A concurrent join of the same user
        surfaces as AlreadyMemberError via the unique constraint.
        """
        row = self._load_row(event_id)
        if row is None:
            raise EventNotFoundError(event_id)

        wanted = list(dict.fromkeys(participants))
        existing = {p.user_id: p for p in row.participants}

        try:
            for user_id, entry in existing.items():
                if user_id not in wanted:
                    row.participants.remove(entry)

            for position, user_id in enumerate(wanted):
                entry = existing.get(user_id)
                if entry is None:
                    row.participants.append(
                        EventParticipant(user_id=user_id, position=position)
                    )
                else:
                    entry.position = position

            self._session.flush()
        except IntegrityError as e:
            self._session.rollback()
            new_users = [uid for uid in wanted if uid not in existing]
            raise AlreadyMemberError(event_id, new_users[0] if new_users else "") from e
        except SQLAlchemyError as e:
            self._session.rollback()
            raise StoreUnavailableError(f"Could not update event {event_id}", e) from e

    def delete(self, event_id: str) -> bool:
        try:
            row = self._load_row(event_id)
            if row is None:
                return False
            # Roster rows go with it via delete-orphan cascade
            self._session.delete(row)
            self._session.flush()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise StoreUnavailableError(f"Could not delete event {event_id}", e) from e
        return True

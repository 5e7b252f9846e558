"""
Tests for the SQLAlchemy event store.

Runs against in-memory SQLite.
"""

import uuid
from datetime import timedelta

import pytest
from sqlalchemy import func, select

from pickup.exceptions import EventNotFoundError, InvalidEventError
from pickup.integrations.base import ActivityType
from pickup.integrations.database import DatabaseAdapter
from pickup.models import Event, EventParticipant
from pickup.services import membership


@pytest.fixture
def store_event(event_store, make_draft, now):
    """Create an event through the store and return the stored record."""

    def _store(creator="alice", **draft_overrides):
        event = membership.new_event(make_draft(**draft_overrides), creator, creator.title(), now)
        return event_store.get(event_store.create(event))

    return _store


class TestCreateAndGet:

    def test_round_trip(self, store_event, now):
        stored = store_event(max_participants=8, description="Bring a ball")

        assert stored.id
        assert stored.title == "Spikeball on the Lawn"
        assert stored.activity == ActivityType.SPORTS
        assert stored.participants == ["alice"]
        assert stored.max_participants == 8
        assert stored.description == "Bring a ball"
        assert stored.end_time == now + timedelta(hours=1)
        assert stored.end_time.tzinfo is not None

    def test_private_event_keeps_invites(self, store_event):
        stored = store_event(is_private=True, invited=["bob"])

        assert stored.is_private
        assert stored.invited == ["bob"]

    def test_get_unknown_id(self, event_store):
        assert event_store.get(str(uuid.uuid4())) is None

    def test_get_garbage_id(self, event_store):
        assert event_store.get("not-a-uuid") is None


class TestListing:

    def test_active_sorted_by_end_time(self, store_event, event_store, now):
        late = store_event(title="Late", duration_minutes=120)
        soon = store_event(title="Soon", duration_minutes=30)

        events = event_store.list_active(now)

        assert [e.id for e in events] == [soon.id, late.id]

    def test_expired_events_move_to_past(self, store_event, event_store, now):
        short = store_event(title="Short", duration_minutes=30)
        long = store_event(title="Long", duration_minutes=90)
        later = now + timedelta(hours=1)

        assert [e.id for e in event_store.list_active(later)] == [long.id]
        assert [e.id for e in event_store.list_past(later)] == [short.id]

    def test_end_time_equal_to_cutoff_is_past(self, store_event, event_store, now):
        event = store_event(duration_minutes=60)
        cutoff = now + timedelta(minutes=60)

        assert event_store.list_active(cutoff) == []
        assert [e.id for e in event_store.list_past(cutoff)] == [event.id]

    def test_past_sorted_most_recent_first(self, store_event, event_store, now):
        first = store_event(title="First", duration_minutes=10)
        second = store_event(title="Second", duration_minutes=20)

        events = event_store.list_past(now + timedelta(hours=1))

        assert [e.id for e in events] == [second.id, first.id]

    def test_malformed_rows_are_skipped(self, store_event, event_store, db_session, now, caplog):
        good = store_event()
        db_session.add(
            Event(
                title="Orphan",
                activity=ActivityType.STUDY.value,
                location_name="Clemons Library",
                location_address="",
                latitude=38.036,
                longitude=-78.506,
                creator_id=None,
                creator_name="",
                start_time=now,
                end_time=now + timedelta(hours=1),
                duration_minutes=60,
                status="active",
                is_private=False,
                invited=[],
            )
        )
        db_session.flush()

        with caplog.at_level("WARNING"):
            events = event_store.list_active(now)

        assert [e.id for e in events] == [good.id]
        assert "no creator" in caplog.text

    def test_unknown_activity_is_skipped(self, store_event, event_store, db_session, now):
        stored = store_event()
        row = db_session.get(Event, uuid.UUID(stored.id))
        row.activity = "Quidditch"
        db_session.flush()

        assert event_store.list_active(now) == []
        assert event_store.get(stored.id) is None


class TestUpdateParticipants:

    def test_join_persists(self, store_event, event_store):
        event = store_event()

        event_store.update_participants(event.id, ["alice", "bob"])

        assert event_store.get(event.id).participants == ["alice", "bob"]

    def test_leave_persists(self, store_event, event_store):
        event = store_event()
        event_store.update_participants(event.id, ["alice", "bob", "carol"])

        event_store.update_participants(event.id, ["alice", "carol"])

        assert event_store.get(event.id).participants == ["alice", "carol"]

    def test_rejoin_after_leave(self, store_event, event_store):
        event = store_event()
        event_store.update_participants(event.id, ["alice", "bob"])
        event_store.update_participants(event.id, ["alice"])

        event_store.update_participants(event.id, ["alice", "bob"])

        assert event_store.get(event.id).participants == ["alice", "bob"]

    def test_duplicate_ids_collapsed(self, store_event, event_store, db_session):
        event = store_event()

        event_store.update_participants(event.id, ["alice", "bob", "bob"])

        count = db_session.scalar(select(func.count()).select_from(EventParticipant))
        assert count == 2

    def test_unknown_event(self, event_store):
        with pytest.raises(EventNotFoundError):
            event_store.update_participants(str(uuid.uuid4()), ["alice"])


class TestDelete:

    def test_delete_removes_event_and_roster(self, store_event, event_store, db_session):
        event = store_event()
        event_store.update_participants(event.id, ["alice", "bob"])

        assert event_store.delete(event.id) is True

        assert event_store.get(event.id) is None
        assert db_session.scalar(select(func.count()).select_from(EventParticipant)) == 0

    def test_delete_unknown(self, event_store):
        assert event_store.delete(str(uuid.uuid4())) is False


class TestAdapter:

    def test_row_with_end_before_start_rejected(self, make_event, now):
        row = DatabaseAdapter.to_event_row(
            make_event(start_time=now, end_time=now - timedelta(minutes=5))
        )
        row.id = uuid.uuid4()

        with pytest.raises(InvalidEventError):
            DatabaseAdapter.to_pickup_event(row)

    def test_row_roster_positions(self, make_event):
        row = DatabaseAdapter.to_event_row(make_event(participants=["a", "b", "a", "c"]))

        assert [(p.user_id, p.position) for p in row.participants] == [
            ("a", 0), ("b", 1), ("c", 2)
        ]

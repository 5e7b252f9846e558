"""
Unit tests for join / leave / delete rules and event creation.
"""

from datetime import timedelta, timezone

import pytest

from pickup.exceptions import (
    AlreadyMemberError,
    AuthenticationRequiredError,
    EventFullError,
    InvalidEventError,
    NotMemberError,
    NotOwnerError,
)
from pickup.integrations.base import ActivityType, EventLocation, EventStatus
from pickup.services import membership


class TestJoin:

    def test_join_appends_user(self, make_event):
        event = make_event(participants=["creator"])

        updated = membership.join(event, "u1")

        assert updated.participants == ["creator", "u1"]

    def test_join_does_not_mutate_input(self, make_event):
        event = make_event(participants=["creator"])

        membership.join(event, "u1")

        assert event.participants == ["creator"]

    def test_already_member(self, make_event):
        event = make_event(participants=["creator", "u1"])

        with pytest.raises(AlreadyMemberError):
            membership.join(event, "u1")

    def test_event_full(self, make_event):
        event = make_event(participants=["creator", "u1"], max_participants=2)

        with pytest.raises(EventFullError) as exc_info:
            membership.join(event, "u2")

        assert exc_info.value.max_participants == 2

    def test_last_seat(self, make_event):
        event = make_event(participants=["creator"], max_participants=2)

        updated = membership.join(event, "u1")

        assert updated.is_full
        assert len(updated.participants) == updated.max_participants

    def test_join_then_leave_restores_event(self, make_event):
        event = make_event(participants=["creator", "a"], max_participants=5)

        assert membership.leave(membership.join(event, "u"), "u") == event


class TestLeave:

    def test_leave_removes_user(self, make_event):
        event = make_event(participants=["creator", "u1", "u2"])

        updated = membership.leave(event, "u1")

        assert updated.participants == ["creator", "u2"]

    def test_not_member(self, make_event):
        event = make_event(participants=["creator"])

        with pytest.raises(NotMemberError):
            membership.leave(event, "u1")

    def test_creator_can_leave(self, make_event):
        event = make_event(creator_id="creator", participants=["creator", "u1"])

        updated = membership.leave(event, "creator")

        assert updated.participants == ["u1"]
        assert updated.creator_id == "creator"


class TestDelete:

    def test_creator_may_delete(self, make_event):
        event = make_event(id="evt-9", creator_id="creator")

        assert membership.delete(event, "creator") == "evt-9"

    def test_other_user_may_not(self, make_event):
        event = make_event(creator_id="creator")

        with pytest.raises(NotOwnerError):
            membership.delete(event, "u1")

    def test_event_without_creator_cannot_be_deleted(self, make_event):
        event = make_event(creator_id=None, participants=["u1"])

        with pytest.raises(NotOwnerError):
            membership.delete(event, "u1")


class TestNewEvent:
    """Test the creation path."""

    def test_creator_is_first_participant(self, make_draft, now):
        event = membership.new_event(make_draft(), "alice", "Alice", now)

        assert event.id == ""
        assert event.participants == ["alice"]
        assert event.creator.display_name == "Alice"
        assert event.status == EventStatus.ACTIVE

    def test_default_duration(self, make_draft, now):
        event = membership.new_event(make_draft(), "alice", "Alice", now)

        assert event.start_time == now
        assert event.end_time == now + timedelta(minutes=60)
        assert event.duration_minutes == 60

    def test_configured_default_duration(self, make_draft, now):
        event = membership.new_event(
            make_draft(), "alice", "Alice", now, default_duration_minutes=90
        )

        assert event.end_time == now + timedelta(minutes=90)

    def test_duration_from_draft(self, make_draft, now):
        start = now + timedelta(hours=1)
        draft = make_draft(start_time=start, duration_minutes=45)

        event = membership.new_event(draft, "alice", "Alice", now)

        assert event.end_time == start + timedelta(minutes=45)

    def test_duration_derived_from_times(self, make_draft, now):
        draft = make_draft(start_time=now, end_time=now + timedelta(hours=2))

        event = membership.new_event(draft, "alice", "Alice", now)

        assert event.duration_minutes == 120

    def test_requires_creator(self, make_draft, now):
        with pytest.raises(AuthenticationRequiredError):
            membership.new_event(make_draft(), None, "", now)

    def test_end_before_start(self, make_draft, now):
        draft = make_draft(start_time=now, end_time=now - timedelta(minutes=1))

        with pytest.raises(InvalidEventError):
            membership.new_event(draft, "alice", "Alice", now)

    def test_end_equal_to_start(self, make_draft, now):
        draft = make_draft(start_time=now, end_time=now)

        with pytest.raises(InvalidEventError):
            membership.new_event(draft, "alice", "Alice", now)

    def test_naive_and_aware_times_mix(self, make_draft, now):
        naive_start = (now + timedelta(hours=1)).replace(tzinfo=None)
        draft = make_draft(start_time=naive_start, end_time=now + timedelta(hours=3))

        event = membership.new_event(draft, "alice", "Alice", now)

        assert event.start_time == now + timedelta(hours=1)
        assert event.start_time.tzinfo is not None
        assert event.duration_minutes == 120

    def test_naive_end_before_aware_start(self, make_draft, now):
        naive_end = now.replace(tzinfo=None)
        draft = make_draft(start_time=now + timedelta(hours=1), end_time=naive_end)

        with pytest.raises(InvalidEventError):
            membership.new_event(draft, "alice", "Alice", now)

    def test_offset_times_normalized_to_utc(self, make_draft, now):
        eastern = timezone(timedelta(hours=-5))
        draft = make_draft(start_time=now.astimezone(eastern))

        event = membership.new_event(draft, "alice", "Alice", now)

        assert event.start_time == now
        assert event.start_time.utcoffset() == timedelta(0)

    def test_too_long(self, make_draft, now):
        draft = make_draft(duration_minutes=3 * 60)

        with pytest.raises(InvalidEventError):
            membership.new_event(draft, "alice", "Alice", now, max_duration_minutes=120)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"title": "   "},
            {"max_participants": 0},
            {"duration_minutes": 0},
            {"location": EventLocation("Gym", "", 91.0, 0.0)},
            {"location": EventLocation("Gym", "", 0.0, -181.0)},
            {"location": EventLocation(" ", "", 0.0, 0.0)},
            {"subtype": "Quidditch"},
        ],
    )
    def test_invalid_drafts(self, make_draft, now, overrides):
        with pytest.raises(InvalidEventError):
            membership.new_event(make_draft(**overrides), "alice", "Alice", now)

    def test_invites_deduplicated_without_creator(self, make_draft, now):
        draft = make_draft(is_private=True, invited=["bob", "alice", "bob", "carol"])

        event = membership.new_event(draft, "alice", "Alice", now)

        assert event.is_private
        assert event.invited == ["bob", "carol"]

    def test_non_sports_subtype_is_free_text(self, make_draft, now):
        draft = make_draft(activity=ActivityType.CLUB, subtype="Chess Society")

        assert membership.new_event(draft, "alice", "Alice", now).subtype == "Chess Society"

    def test_title_trimmed(self, make_draft, now):
        event = membership.new_event(make_draft(title="  Chess club  "), "alice", "Alice", now)

        assert event.title == "Chess club"

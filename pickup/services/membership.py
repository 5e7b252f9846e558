"""
Membership transitions for pickup events.

Pure functions that validate a command against an event and return the next
value. They never mutate their input and never touch the store; the caller
persists the result.
"""

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

from pickup.exceptions import (
    AlreadyMemberError,
    AuthenticationRequiredError,
    EventFullError,
    InvalidEventError,
    NotMemberError,
    NotOwnerError,
)
from pickup.integrations.base import (
    SPORTS_SUBTYPES,
    ActivityType,
    EventCreator,
    EventDraft,
    EventStatus,
    PickupEvent,
)
from pickup.models import as_utc


def join(event: PickupEvent, user_id: str) -> PickupEvent:
    """
    Add `user_id` to the roster.

    Raises:
        AlreadyMemberError: If the user already joined
        EventFullError: If the event is at capacity
    """
    if event.has_participant(user_id):
        raise AlreadyMemberError(event.id, user_id)
    if event.is_full:
        raise EventFullError(event.id, event.max_participants)
    return replace(event, participants=[*event.participants, user_id])


def leave(event: PickupEvent, user_id: str) -> PickupEvent:
    """
    Remove `user_id` from the roster.

    The creator is not special-cased: a creator who leaves is simply removed.

    Raises:
        NotMemberError: If the user is not a participant
    """
    if not event.has_participant(user_id):
        raise NotMemberError(event.id, user_id)
    return replace(
        event,
        participants=[uid for uid in event.participants if uid != user_id],
    )


def delete(event: PickupEvent, requester_id: str) -> str:
    """
    Authorize deleting `event`.

    Returns:
        ID of the event the store should remove

    Raises:
        NotOwnerError: If the requester did not create the event
    """
    if not event.creator_id or requester_id != event.creator_id:
        raise NotOwnerError(event.id, requester_id)
    return event.id


def _validate_draft(draft: EventDraft) -> None:
    if not draft.title or not draft.title.strip():
        raise InvalidEventError("Event title is required")

    location = draft.location
    if not location.name or not location.name.strip():
        raise InvalidEventError("Location name is required")
    if not -90.0 <= location.latitude <= 90.0:
        raise InvalidEventError(f"Latitude {location.latitude} is out of range")
    if not -180.0 <= location.longitude <= 180.0:
        raise InvalidEventError(f"Longitude {location.longitude} is out of range")

    if draft.max_participants is not None and draft.max_participants < 1:
        raise InvalidEventError("max_participants must be at least 1")
    if draft.duration_minutes is not None and draft.duration_minutes <= 0:
        raise InvalidEventError("duration_minutes must be positive")

    if draft.activity == ActivityType.SPORTS and draft.subtype:
        if draft.subtype not in SPORTS_SUBTYPES:
            raise InvalidEventError(f"Unknown sport '{draft.subtype}'")


def new_event(
    draft: EventDraft,
    creator_id: Optional[str],
    creator_name: str,
    now: datetime,
    default_duration_minutes: int = 60,
    max_duration_minutes: Optional[int] = None,
) -> PickupEvent:
    """
    Build an unsaved event from a draft.

    The creator becomes the first participant. When no end time is given,
    the event lasts `duration_minutes` (or the default) from its start.

    Raises:
        AuthenticationRequiredError: If there is no creator
        InvalidEventError: If the draft fails validation
    """
    if not creator_id:
        raise AuthenticationRequiredError("User must be logged in to create an event")

    _validate_draft(draft)

    start = as_utc(draft.start_time) or now
    if draft.end_time is not None:
        end = as_utc(draft.end_time)
    else:
        end = start + timedelta(minutes=draft.duration_minutes or default_duration_minutes)

    if end <= start:
        raise InvalidEventError("Event end time must be after its start time")

    duration = int((end - start).total_seconds() // 60)
    if max_duration_minutes is not None and duration > max_duration_minutes:
        raise InvalidEventError(
            f"Event cannot last longer than {max_duration_minutes} minutes"
        )

    invited = [uid for uid in dict.fromkeys(draft.invited) if uid != creator_id]

    return PickupEvent(
        id="",
        title=draft.title.strip(),
        activity=draft.activity,
        subtype=draft.subtype,
        location=draft.location,
        creator=EventCreator(user_id=creator_id, display_name=creator_name),
        created_at=now,
        start_time=start,
        end_time=end,
        duration_minutes=duration,
        participants=[creator_id],
        max_participants=draft.max_participants,
        description=draft.description,
        status=EventStatus.ACTIVE,
        is_private=draft.is_private,
        invited=invited,
    )

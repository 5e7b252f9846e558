"""
Mapping between database rows and normalized records.

Handles:
- UTC normalization of timestamps (SQLite returns naive datetimes)
- Activity enum parsing
- Rejection of malformed rows (missing creator, end not after start)
"""

import uuid
from typing import Optional

from pickup.exceptions import InvalidEventError
from pickup.integrations.base import (
    ActivityType,
    EventCreator,
    EventLocation,
    EventStatus,
    FriendRequestRecord,
    PickupEvent,
    UserProfile,
)
from pickup.models import Event, EventParticipant, FriendRequest, User, as_utc


class DatabaseAdapter:
    """Maps between SQLAlchemy rows and store records."""

    @staticmethod
    def to_pickup_event(row: Event) -> PickupEvent:
        """
        Convert an Event row to a PickupEvent.

        Raises:
            InvalidEventError: If the row is malformed
        """
        if not row.creator_id:
            raise InvalidEventError(f"Event {row.id} has no creator")

        try:
            activity = ActivityType(row.activity)
        except ValueError as e:
            raise InvalidEventError(f"Event {row.id} has unknown activity '{row.activity}'") from e

        try:
            status = EventStatus(row.status)
        except ValueError as e:
            raise InvalidEventError(f"Event {row.id} has unknown status '{row.status}'") from e

        created_at = as_utc(row.created_at)
        start_time = as_utc(row.start_time)
        end_time = as_utc(row.end_time)
        if end_time <= (start_time or created_at):
            raise InvalidEventError(f"Event {row.id} ends before it starts")

        participants = list(dict.fromkeys(p.user_id for p in row.participants))

        return PickupEvent(
            id=str(row.id),
            title=row.title,
            activity=activity,
            subtype=row.subtype,
            location=EventLocation(
                name=row.location_name,
                address=row.location_address or "",
                latitude=row.latitude,
                longitude=row.longitude,
            ),
            creator=EventCreator(user_id=row.creator_id, display_name=row.creator_name or ""),
            created_at=created_at,
            start_time=start_time,
            end_time=end_time,
            duration_minutes=row.duration_minutes,
            participants=participants,
            max_participants=row.max_participants,
            description=row.description,
            status=status,
            is_private=row.is_private,
            invited=list(row.invited or []),
        )

    @staticmethod
    def to_event_row(event: PickupEvent) -> Event:
        """Build a new Event row (with roster) from an unsaved PickupEvent."""
        row = Event(
            title=event.title,
            activity=event.activity.value,
            subtype=event.subtype,
            description=event.description,
            location_name=event.location.name,
            location_address=event.location.address,
            latitude=event.location.latitude,
            longitude=event.location.longitude,
            creator_id=event.creator_id,
            creator_name=event.creator.display_name,
            created_at=as_utc(event.created_at),
            start_time=as_utc(event.start_time),
            end_time=as_utc(event.end_time),
            duration_minutes=event.duration_minutes,
            max_participants=event.max_participants,
            status=event.status.value,
            is_private=event.is_private,
            invited=list(event.invited),
        )
        row.participants = [
            EventParticipant(user_id=user_id, position=position)
            for position, user_id in enumerate(dict.fromkeys(event.participants))
        ]
        return row

    @staticmethod
    def to_user_profile(row: User) -> UserProfile:
        return UserProfile(
            uid=row.uid,
            email=row.email,
            display_name=row.display_name,
            photo_url=row.photo_url,
        )

    @staticmethod
    def to_friend_request(row: FriendRequest) -> FriendRequestRecord:
        return FriendRequestRecord(
            from_user_id=row.from_user_id,
            to_user_id=row.to_user_id,
            created_at=as_utc(row.created_at),
            status=row.status,
        )


def parse_event_id(event_id: str) -> Optional[uuid.UUID]:
    """Parse an external event ID; None when it is not a valid UUID."""
    try:
        return uuid.UUID(str(event_id))
    except ValueError:
        return None

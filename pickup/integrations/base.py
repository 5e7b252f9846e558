"""
Store protocols and normalized record types.

Defines the records the core logic works on and the interfaces of the
collaborators that persist them (event store, social graph). Backends map
their own row formats to these records and reject malformed ones.
"""

from abc import abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Protocol, Sequence


class ActivityType(str, Enum):
    """Top-level activity categories."""

    SPORTS = "Sports"
    CLUB = "Club"
    ENTERTAINMENT = "Entertainment"
    STUDY = "Study"
    OTHER = "Other"


SPORTS_SUBTYPES = (
    "Basketball",
    "Soccer",
    "Football",
    "Spikeball",
    "Ultimate Frisbee",
    "Pickleball",
    "Tennis",
    "Volleyball",
    "Badminton",
    "Other",
)


class EventStatus(str, Enum):
    """Persisted lifecycle status. Only 'active' is ever written."""

    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


@dataclass
class EventLocation:
    name: str
    address: str
    latitude: float
    longitude: float


@dataclass
class EventCreator:
    user_id: Optional[str]
    display_name: str = ""


@dataclass
class PickupEvent:
    """
    Normalized pickup event.

    This is the format used by the timing, visibility and membership logic,
    mapped from backend rows by the store. An empty `id` means the event has
    not been stored yet.
    """

    id: str
    title: str
    activity: ActivityType
    location: EventLocation
    creator: EventCreator
    created_at: datetime
    end_time: datetime
    start_time: Optional[datetime] = None
    duration_minutes: int = 60
    participants: list[str] = field(default_factory=list)
    subtype: Optional[str] = None
    max_participants: Optional[int] = None
    description: Optional[str] = None
    status: EventStatus = EventStatus.ACTIVE
    is_private: bool = False
    invited: list[str] = field(default_factory=list)

    @property
    def creator_id(self) -> Optional[str]:
        return self.creator.user_id

    @property
    def effective_start(self) -> datetime:
        """Start time, falling back to creation time."""
        return self.start_time or self.created_at

    @property
    def is_full(self) -> bool:
        return (
            self.max_participants is not None
            and len(self.participants) >= self.max_participants
        )

    def has_participant(self, user_id: str) -> bool:
        return user_id in self.participants


@dataclass
class EventDraft:
    """
    Request to create a new event.

    Used as input to the membership creation path. Either `end_time` or
    `duration_minutes` may be given; the missing one is derived.
    """

    title: str
    activity: ActivityType
    location: EventLocation
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    subtype: Optional[str] = None
    max_participants: Optional[int] = None
    description: Optional[str] = None
    is_private: bool = False
    invited: list[str] = field(default_factory=list)


@dataclass
class UserProfile:
    """Public profile of a user, as shown in friend lists."""

    uid: str
    email: str
    display_name: str
    photo_url: Optional[str] = None


@dataclass
class FriendRequestRecord:
    """A pending friend request."""

    from_user_id: str
    to_user_id: str
    created_at: datetime
    status: str = "pending"


# Signature of the friendship lookup the visibility filter depends on.
IsFriend = Callable[[str, str], bool]


class EventStore(Protocol):
    """
    Protocol for event storage backends.

    Implementations:
    - SQLAlchemyEventStore: Uses the local database
    """

    @abstractmethod
    def list_active(self, now_cutoff: datetime) -> Sequence[PickupEvent]:
        """
        Get events that are active and end after `now_cutoff`.

        Returns:
            Events ordered by end time, ascending
        """
        ...

    @abstractmethod
    def list_past(self, now_cutoff: datetime) -> Sequence[PickupEvent]:
        """
        Get events that ended at or before `now_cutoff`.

        Returns:
            Events ordered by end time, most recent first
        """
        ...

    @abstractmethod
    def get(self, event_id: str) -> Optional[PickupEvent]:
        """Get a single event, or None if missing or malformed."""
        ...

    @abstractmethod
    def create(self, event: PickupEvent) -> str:
        """Persist a new event and return its assigned ID."""
        ...

    @abstractmethod
    def update_participants(self, event_id: str, participants: list[str]) -> None:
        """Replace the participant roster in a single update."""
        ...

    @abstractmethod
    def delete(self, event_id: str) -> bool:
        """
        Remove an event.

        Returns:
            True if deleted, False if not found
        """
        ...


class SocialGraph(Protocol):
    """
    Protocol for friendship storage.

    Implementations:
    - SQLAlchemySocialGraph: Uses the local database
    """

    @abstractmethod
    def is_friend(self, user_a: str, user_b: str) -> bool:
        """Symmetric friendship check."""
        ...

    @abstractmethod
    def has_pending_request(self, from_user_id: str, to_user_id: str) -> bool:
        ...

    @abstractmethod
    def send_request(self, from_user_id: str, to_user_id: str) -> FriendRequestRecord:
        ...

    @abstractmethod
    def accept_request(self, from_user_id: str, to_user_id: str) -> None:
        """Turn a pending request into a friendship and remove the request."""
        ...

    @abstractmethod
    def reject_request(self, from_user_id: str, to_user_id: str) -> None:
        """Remove a pending request without creating a friendship."""
        ...

    @abstractmethod
    def cancel_request(self, from_user_id: str, to_user_id: str) -> None:
        """Withdraw a request the sender no longer wants."""
        ...

    @abstractmethod
    def remove_friend(self, user_id: str, friend_id: str) -> None:
        ...

    @abstractmethod
    def list_friends(self, user_id: str) -> list[str]:
        ...

    @abstractmethod
    def list_pending_requests(self, user_id: str) -> list[FriendRequestRecord]:
        """Requests received by `user_id`."""
        ...

    @abstractmethod
    def list_sent_requests(self, user_id: str) -> list[FriendRequestRecord]:
        """Requests sent by `user_id`."""
        ...

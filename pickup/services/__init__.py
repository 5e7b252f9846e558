"""
Service layer for Pickup events.

Provides the event logic and the use cases built on it:
- Timing labels (upcoming / active / expired)
- Visibility of private events to friends, participants and invitees
- Join / leave / delete rules and event creation
- Friend requests and the user directory
"""

from pickup.services.timing import (
    EXPIRED_LABEL,
    EventTiming,
    TimingPhase,
    compute_timing,
    event_timing,
    format_duration,
    is_expired,
)
from pickup.services.visibility import can_view, filter_by_activity, visible_events
from pickup.services.event_service import EventService
from pickup.services.friend_service import FriendRequestView, FriendService, SendOutcome
from pickup.services.users import UserDirectory, normalize_email

__all__ = [
    # Timing
    "EXPIRED_LABEL",
    "EventTiming",
    "TimingPhase",
    "compute_timing",
    "event_timing",
    "format_duration",
    "is_expired",
    # Visibility
    "can_view",
    "filter_by_activity",
    "visible_events",
    # Use cases
    "EventService",
    "FriendRequestView",
    "FriendService",
    "SendOutcome",
    "UserDirectory",
    "normalize_email",
]

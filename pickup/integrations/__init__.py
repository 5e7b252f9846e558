"""
Storage integrations for the Pickup events service.

Provides the abstraction layer between the core logic and its backing stores.
"""

from pickup.integrations.base import (
    ActivityType,
    EventStatus,
    EventStore,
    PickupEvent,
    SocialGraph,
)

__all__ = ["ActivityType", "EventStatus", "EventStore", "PickupEvent", "SocialGraph"]

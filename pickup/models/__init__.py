"""
SQLAlchemy models for the Pickup events service.

This module exports all database models for easy importing and
ensures Alembic can discover them for migrations.
"""

from pickup.models.base import Base, BaseModel, GUID, get_json_type, utc_now, as_utc

from pickup.models.users import User
from pickup.models.events import Event, EventParticipant
from pickup.models.friends import Friendship, FriendRequest, friendship_key

__all__ = [
    # Base classes
    "Base",
    "BaseModel",
    "GUID",
    "get_json_type",
    "utc_now",
    "as_utc",
    # Users
    "User",
    # Events
    "Event",
    "EventParticipant",
    # Social graph
    "Friendship",
    "FriendRequest",
    "friendship_key",
]

"""
Event and EventParticipant models.

Entities:
- Event: A short-lived pickup activity listing anchored to a location
- EventParticipant: Ordered roster entry linking a user id to an event
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pickup.models.base import BaseModel, get_json_type


class Event(BaseModel):
    """
    A pickup event listing.

    Expiry is derived from `end_time` at read time; `status` is written as
    'active' on creation and is not swept afterwards.
    """

    __tablename__ = "events"

    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        doc="Event title"
    )

    activity: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        doc="Category: 'Sports', 'Club', 'Entertainment', 'Study', 'Other'"
    )

    subtype: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        doc="Free-text subtype (e.g. 'Basketball' for Sports)"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        doc="Free-text description"
    )

    # Location
    location_name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        doc="Place name (e.g. 'North Grounds Rec Center')"
    )

    location_address: Mapped[str] = mapped_column(
        String(300),
        nullable=False,
        default="",
        doc="Street address"
    )

    latitude: Mapped[float] = mapped_column(Float, nullable=False)

    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    # Creator
    creator_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        doc="User ID of the creator; NULL rows are treated as malformed"
    )

    creator_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default="",
        doc="Creator display name at creation time"
    )

    # Timing
    start_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="Explicit start time (UTC); falls back to created_at"
    )

    end_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        doc="Expiry time (UTC)"
    )

    duration_minutes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=60,
    )

    # Membership and privacy
    max_participants: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        doc="Capacity; NULL means unlimited"
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="active",
        doc="Status: 'active', 'expired', 'cancelled'"
    )

    is_private: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        doc="Visible only to creator, participants, invitees and creator's friends"
    )

    invited: Mapped[list] = mapped_column(
        get_json_type(),
        nullable=False,
        default=list,
        doc="Explicit invite list (user IDs)"
    )

    participants: Mapped[list["EventParticipant"]] = relationship(
        "EventParticipant",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="EventParticipant.position",
        doc="Ordered roster"
    )

    __table_args__ = (
        Index("idx_event_end_time", "end_time"),
        Index("idx_event_status_end", "status", "end_time"),
        Index("idx_event_creator", "creator_id"),
        Index("idx_event_activity", "activity"),
    )

    def __repr__(self) -> str:
        return f"<Event(title='{self.title}', end='{self.end_time}', status='{self.status}')>"


class EventParticipant(BaseModel):
    """
    Roster entry for one user in one event.

    `position` keeps the join order stable across reads.
    """

    __tablename__ = "event_participants"

    event_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
    )

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    event: Mapped["Event"] = relationship(
        "Event",
        back_populates="participants",
    )

    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_participant"),
        Index("idx_participant_event", "event_id"),
        Index("idx_participant_user", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<EventParticipant(event_id={self.event_id}, user_id='{self.user_id}')>"

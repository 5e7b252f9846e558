"""
Pydantic request and response models for the Pickup events API.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pickup.integrations.base import (
    ActivityType,
    EventDraft,
    EventLocation,
    FriendRequestRecord,
    PickupEvent,
    UserProfile,
)
from pickup.services.timing import event_timing


# =============================================================================
# Request Models
# =============================================================================


class LocationModel(BaseModel):
    """Where an event takes place."""

    name: str = Field(..., min_length=1, max_length=200, description="Place name")
    address: str = Field(default="", max_length=300, description="Street address")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    @field_validator("name")
    @classmethod
    def validate_name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Location name cannot be empty")
        return v.strip()


class CreateEventRequest(BaseModel):
    """Request to create a pickup event."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=100,
        examples=["3v3 at the rec center"],
    )
    activity: ActivityType = Field(..., description="Activity category")
    subtype: Optional[str] = Field(
        None,
        max_length=50,
        description="Sport or other subtype, e.g. Basketball",
    )
    location: LocationModel
    start_time: Optional[datetime] = Field(
        None,
        description="Start time (ISO 8601); defaults to now",
    )
    end_time: Optional[datetime] = Field(
        None,
        description="End time (ISO 8601); derived from duration when omitted",
    )
    duration_minutes: Optional[int] = Field(
        None,
        ge=1,
        description="Length of the event when end_time is omitted",
    )
    max_participants: Optional[int] = Field(None, ge=1)
    description: Optional[str] = Field(None, max_length=1000)
    is_private: bool = Field(
        default=False,
        description="Only friends of the creator, participants and invitees can see it",
    )
    invited: list[str] = Field(default_factory=list, description="User IDs invited")

    @field_validator("title")
    @classmethod
    def validate_title_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()

    def to_draft(self) -> EventDraft:
        return EventDraft(
            title=self.title,
            activity=self.activity,
            location=EventLocation(
                name=self.location.name,
                address=self.location.address,
                latitude=self.location.latitude,
                longitude=self.location.longitude,
            ),
            start_time=self.start_time,
            end_time=self.end_time,
            duration_minutes=self.duration_minutes,
            subtype=self.subtype,
            max_participants=self.max_participants,
            description=self.description,
            is_private=self.is_private,
            invited=list(self.invited),
        )


class RegisterUserRequest(BaseModel):
    """Profile of the calling user, mirrored from the auth provider."""

    email: str = Field(..., min_length=3, max_length=255)
    display_name: Optional[str] = Field(None, max_length=100)
    photo_url: Optional[str] = Field(None, max_length=500)


# =============================================================================
# Response Models
# =============================================================================


class TimingResponse(BaseModel):
    phase: Literal["upcoming", "active", "expired"]
    label: str = Field(..., description="e.g. 'Starts in 1h 30m', '20m left', 'Expired'")


class EventResponse(BaseModel):
    """Event data in responses."""

    id: str
    title: str
    activity: ActivityType
    subtype: Optional[str] = None
    description: Optional[str] = None
    location: LocationModel
    creator_id: Optional[str] = None
    creator_name: str = ""
    created_at: datetime
    start_time: datetime = Field(..., description="Start time, or creation time if unset")
    end_time: datetime
    duration_minutes: int
    participants: list[str] = Field(default_factory=list)
    participant_count: int
    max_participants: Optional[int] = None
    is_full: bool
    is_private: bool
    status: str
    timing: TimingResponse

    @classmethod
    def from_event(cls, event: PickupEvent, now: datetime) -> "EventResponse":
        timing = event_timing(event, now)
        return cls(
            id=event.id,
            title=event.title,
            activity=event.activity,
            subtype=event.subtype,
            description=event.description,
            location=LocationModel(
                name=event.location.name,
                address=event.location.address,
                latitude=event.location.latitude,
                longitude=event.location.longitude,
            ),
            creator_id=event.creator_id,
            creator_name=event.creator.display_name,
            created_at=event.created_at,
            start_time=event.effective_start,
            end_time=event.end_time,
            duration_minutes=event.duration_minutes,
            participants=list(event.participants),
            participant_count=len(event.participants),
            max_participants=event.max_participants,
            is_full=event.is_full,
            is_private=event.is_private,
            status=event.status.value,
            timing=TimingResponse(phase=timing.phase.value, label=timing.label),
        )


class EventListResponse(BaseModel):
    events: list[EventResponse] = Field(..., description="List of events")
    total: int = Field(..., description="Number of events returned")


class DeleteEventResponse(BaseModel):
    """Response for event deletion."""

    success: bool = Field(..., description="Whether deletion was successful")
    event_id: str = Field(..., description="ID of deleted event")
    message: str = Field(..., description="Status message")


class UserResponse(BaseModel):
    uid: str
    email: str
    display_name: str
    photo_url: Optional[str] = None

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserResponse":
        return cls(
            uid=profile.uid,
            email=profile.email,
            display_name=profile.display_name,
            photo_url=profile.photo_url,
        )


class FriendListResponse(BaseModel):
    friends: list[UserResponse]
    total: int


class FriendRequestResponse(BaseModel):
    """A pending request, with the profile of the other user when known."""

    from_user_id: str
    to_user_id: str
    status: str
    created_at: datetime
    user: Optional[UserResponse] = None

    @classmethod
    def from_record(
        cls,
        record: FriendRequestRecord,
        profile: Optional[UserProfile] = None,
    ) -> "FriendRequestResponse":
        return cls(
            from_user_id=record.from_user_id,
            to_user_id=record.to_user_id,
            status=record.status,
            created_at=record.created_at,
            user=UserResponse.from_profile(profile) if profile else None,
        )


class FriendRequestListResponse(BaseModel):
    requests: list[FriendRequestResponse]
    total: int


class SendFriendRequestResponse(BaseModel):
    outcome: Literal["sent", "accepted"] = Field(
        ...,
        description="'accepted' when the other user had already sent a request",
    )
    message: str


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Error information for failed requests."""

    error_type: str = Field(..., description="Type of error, e.g. not_found")
    message: str = Field(..., description="Human-readable error message")
    retryable: bool = Field(default=False, description="Whether request can be retried")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_type": "membership_error",
                "message": "Event 1b9d6bcd is full (10 participants)",
                "retryable": False,
            }
        }
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy"] = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    database_connected: bool = Field(..., description="Database connection status")

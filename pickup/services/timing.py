"""
Event timing calculator.

Classifies an event as upcoming, active or expired relative to `now` and
renders the countdown label shown next to it ("Starts in 1h 30m", "20m left").

Pure functions only: callers that refresh the label periodically own the timer.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pickup.integrations.base import PickupEvent


class TimingPhase(str, Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    EXPIRED = "expired"


@dataclass(frozen=True)
class EventTiming:
    """Derived timing state of an event at a given instant."""

    phase: TimingPhase
    label: str


EXPIRED_LABEL = "Expired"


def split_hours_minutes(remaining: timedelta) -> tuple[int, int]:
    """
    Decompose a duration into whole hours and leftover whole minutes.

    Negative durations clamp to (0, 0).
    """
    total_minutes = max(0, int(remaining.total_seconds()) // 60)
    return divmod(total_minutes, 60)


def format_duration(remaining: timedelta) -> str:
    """
    Format a duration as '1h 30m', '2h' or '45m'.

    Hours are omitted when zero; minutes are omitted when hours are present
    and minutes are zero.
    """
    hours, minutes = split_hours_minutes(remaining)
    if hours > 0:
        return f"{hours}h {minutes}m" if minutes > 0 else f"{hours}h"
    return f"{minutes}m"


def compute_timing(
    now: datetime,
    start_time: Optional[datetime],
    end_time: datetime,
) -> EventTiming:
    """
    Compute the timing phase and label of an event.

    Args:
        now: Current instant
        start_time: Event start; None means the event started immediately
        end_time: Event expiry

    Returns:
        EventTiming with phase and human-readable label
    """
    if end_time <= now:
        return EventTiming(TimingPhase.EXPIRED, EXPIRED_LABEL)

    if start_time is not None and start_time > now:
        return EventTiming(
            TimingPhase.UPCOMING,
            f"Starts in {format_duration(start_time - now)}",
        )

    return EventTiming(
        TimingPhase.ACTIVE,
        f"{format_duration(end_time - now)} left",
    )


def event_timing(event: PickupEvent, now: datetime) -> EventTiming:
    """Timing of a stored event, using created_at when no start time was given."""
    return compute_timing(now, event.effective_start, event.end_time)


def is_expired(event: PickupEvent, now: datetime) -> bool:
    return event.end_time <= now

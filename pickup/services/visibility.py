"""
Event visibility filter.

Decides which events a viewer may see:
- Public events are visible to everyone, signed in or not
- Private events are visible to their creator, participants, invitees and
  the creator's friends
- Private events without an identifiable creator are never shown

Friendship is looked up through an injected `is_friend` callable, at most
once per private event, and only when no cheaper rule already grants access.
"""

import logging
from typing import Iterable, Optional

from pickup.exceptions import SocialGraphError
from pickup.integrations.base import IsFriend, PickupEvent

logger = logging.getLogger(__name__)


def can_view(
    viewer: Optional[str],
    event: PickupEvent,
    is_friend: IsFriend,
) -> bool:
    """
    Check whether `viewer` may see `event`.

    Args:
        viewer: User ID of the viewer, or None when signed out
        event: Candidate event
        is_friend: Symmetric friendship lookup

    Returns:
        True if the event is visible to the viewer
    """
    if not event.is_private:
        return True

    if viewer is None:
        return False

    creator_id = event.creator_id
    if not creator_id:
        logger.warning(f"Hiding private event {event.id}: creator cannot be resolved")
        return False

    if viewer == creator_id or viewer in event.participants or viewer in event.invited:
        return True

    try:
        return is_friend(viewer, creator_id)
    except SocialGraphError as e:
        logger.warning(
            f"Hiding private event {event.id}: friendship lookup failed for "
            f"{viewer} -> {creator_id}: {e}"
        )
        return False


def visible_events(
    viewer: Optional[str],
    events: Iterable[PickupEvent],
    is_friend: IsFriend,
) -> list[PickupEvent]:
    """
    Reduce an event collection to what `viewer` may see.

    Input order is preserved.
    """
    return [event for event in events if can_view(viewer, event, is_friend)]


def filter_by_activity(
    events: Iterable[PickupEvent],
    activity: Optional[str],
) -> list[PickupEvent]:
    """
    Keep events whose category or subtype matches `activity` (case-insensitive).

    `None`, empty and "all" keep everything.
    """
    events = list(events)
    wanted = (activity or "").strip().lower()
    if not wanted or wanted == "all":
        return events

    return [
        event for event in events
        if event.activity.value.lower() == wanted
        or (event.subtype or "").lower() == wanted
    ]

"""
Event service - use cases over the event store and social graph.

Each operation loads canonical state from the store, applies the pure
timing/visibility/membership logic, and writes back at most one change.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from pickup.config import Settings, get_settings
from pickup.exceptions import AuthenticationRequiredError, EventNotFoundError
from pickup.integrations.base import EventDraft, EventStore, PickupEvent, SocialGraph
from pickup.models import utc_now
from pickup.services import membership
from pickup.services.visibility import can_view, filter_by_activity, visible_events

logger = logging.getLogger(__name__)


class EventService:
    """
    Pickup event operations for a single request.

    Args:
        store: Event store backend
        social_graph: Friendship lookups for private events
        settings: Application settings (defaults to get_settings())
        clock: Source of the current time (defaults to UTC now)
    """

    def __init__(
        self,
        store: EventStore,
        social_graph: SocialGraph,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = store
        self._social_graph = social_graph
        self._settings = settings or get_settings()
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def list_visible(
        self,
        viewer: Optional[str],
        now: Optional[datetime] = None,
        activity: Optional[str] = None,
    ) -> list[PickupEvent]:
        """
        Active events the viewer may see, soonest-ending first.

        Args:
            viewer: Viewer user ID, None when signed out
            now: Cutoff instant (defaults to the clock)
            activity: Optional category/subtype filter
        """
        now = now or self.now()
        events = self._store.list_active(now)
        events = filter_by_activity(events, activity)
        return visible_events(viewer, events, self._social_graph.is_friend)

    def list_past(
        self,
        viewer: Optional[str],
        now: Optional[datetime] = None,
    ) -> list[PickupEvent]:
        """Expired events the viewer may see, most recent first."""
        now = now or self.now()
        return visible_events(viewer, self._store.list_past(now), self._social_graph.is_friend)

    def get_visible(self, viewer: Optional[str], event_id: str) -> PickupEvent:
        """
        Get one event.

        Raises:
            EventNotFoundError: If missing or hidden from the viewer
        """
        event = self._store.get(event_id)
        if event is None or not can_view(viewer, event, self._social_graph.is_friend):
            raise EventNotFoundError(event_id)
        return event

    def create(
        self,
        creator_id: Optional[str],
        creator_name: str,
        draft: EventDraft,
    ) -> PickupEvent:
        """Validate and store a new event; the creator is its first participant."""
        event = membership.new_event(
            draft,
            creator_id=creator_id,
            creator_name=creator_name,
            now=self.now(),
            default_duration_minutes=self._settings.default_event_duration_minutes,
            max_duration_minutes=self._settings.max_event_duration_minutes,
        )
        event_id = self._store.create(event)
        logger.info(f"User {creator_id} created event {event_id} '{event.title}'")

        stored = self._store.get(event_id)
        if stored is None:
            raise EventNotFoundError(event_id)
        return stored

    def join(self, event_id: str, user_id: Optional[str]) -> PickupEvent:
        """
        Add the user to an event they can see.

        Raises:
            AuthenticationRequiredError: If signed out
            EventNotFoundError: If missing or hidden
            AlreadyMemberError, EventFullError: From the membership rules
        """
        if not user_id:
            raise AuthenticationRequiredError("User must be logged in to join events")

        event = self.get_visible(user_id, event_id)
        updated = membership.join(event, user_id)
        self._store.update_participants(event_id, updated.participants)
        logger.info(f"User {user_id} joined event {event_id}")
        return updated

    def leave(self, event_id: str, user_id: Optional[str]) -> PickupEvent:
        """
        Remove the user from an event.

        Raises:
            AuthenticationRequiredError: If signed out
            EventNotFoundError: If missing or hidden
            NotMemberError: If the user had not joined
        """
        if not user_id:
            raise AuthenticationRequiredError("User must be logged in to leave events")

        event = self.get_visible(user_id, event_id)
        updated = membership.leave(event, user_id)
        self._store.update_participants(event_id, updated.participants)
        logger.info(f"User {user_id} left event {event_id}")
        return updated

    def delete(self, event_id: str, requester_id: Optional[str]) -> str:
        """
        Delete an event owned by the requester.

        Raises:
            AuthenticationRequiredError: If signed out
            EventNotFoundError: If missing or hidden
            NotOwnerError: If the requester is not the creator
        """
        if not requester_id:
            raise AuthenticationRequiredError("User must be logged in to delete events")

        event = self.get_visible(requester_id, event_id)
        doomed = membership.delete(event, requester_id)
        if not self._store.delete(doomed):
            raise EventNotFoundError(event_id)
        logger.info(f"User {requester_id} deleted event {event_id}")
        return doomed

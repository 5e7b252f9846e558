"""
Friend service - friend requests and friend lists.

Wraps the social graph with the request rules:
- No requests to yourself, to existing friends, or duplicated
- Sending to someone who already asked you accepts their request instead
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pickup.exceptions import (
    AlreadyFriendsError,
    AuthenticationRequiredError,
    FriendRequestExistsError,
    SelfFriendRequestError,
    UserNotFoundError,
)
from pickup.integrations.base import FriendRequestRecord, SocialGraph, UserProfile
from pickup.services.users import UserDirectory

logger = logging.getLogger(__name__)


class SendOutcome(str, Enum):
    SENT = "sent"
    ACCEPTED = "accepted"


@dataclass
class FriendRequestView:
    """A pending request with the other user's profile attached."""

    request: FriendRequestRecord
    user: Optional[UserProfile]


def _require_user(user_id: Optional[str]) -> str:
    if not user_id:
        raise AuthenticationRequiredError()
    return user_id


class FriendService:
    """Friend operations on behalf of the current user."""

    def __init__(self, social_graph: SocialGraph, directory: UserDirectory):
        self._graph = social_graph
        self._directory = directory

    def send_request(self, sender_id: Optional[str], recipient_id: str) -> SendOutcome:
        """
        Send a friend request.

        Returns:
            SendOutcome.ACCEPTED if a reverse request existed and was accepted,
            SendOutcome.SENT otherwise

        Raises:
            SelfFriendRequestError, AlreadyFriendsError, FriendRequestExistsError,
            UserNotFoundError
        """
        sender_id = _require_user(sender_id)
        if sender_id == recipient_id:
            raise SelfFriendRequestError(sender_id)
        if self._directory.get(recipient_id) is None:
            raise UserNotFoundError(recipient_id)
        if self._graph.is_friend(sender_id, recipient_id):
            raise AlreadyFriendsError(sender_id, recipient_id)
        if self._graph.has_pending_request(sender_id, recipient_id):
            raise FriendRequestExistsError(sender_id, recipient_id)

        if self._graph.has_pending_request(recipient_id, sender_id):
            self._graph.accept_request(recipient_id, sender_id)
            logger.info(f"Auto-accepted reverse friend request {recipient_id} -> {sender_id}")
            return SendOutcome.ACCEPTED

        self._graph.send_request(sender_id, recipient_id)
        logger.info(f"Friend request sent {sender_id} -> {recipient_id}")
        return SendOutcome.SENT

    def accept_request(self, recipient_id: Optional[str], sender_id: str) -> None:
        recipient_id = _require_user(recipient_id)
        self._graph.accept_request(sender_id, recipient_id)
        logger.info(f"Friend request accepted {sender_id} -> {recipient_id}")

    def reject_request(self, recipient_id: Optional[str], sender_id: str) -> None:
        recipient_id = _require_user(recipient_id)
        self._graph.reject_request(sender_id, recipient_id)
        logger.info(f"Friend request rejected {sender_id} -> {recipient_id}")

    def cancel_request(self, sender_id: Optional[str], recipient_id: str) -> None:
        sender_id = _require_user(sender_id)
        self._graph.cancel_request(sender_id, recipient_id)
        logger.info(f"Friend request cancelled {sender_id} -> {recipient_id}")

    def remove_friend(self, user_id: Optional[str], friend_id: str) -> None:
        user_id = _require_user(user_id)
        self._graph.remove_friend(user_id, friend_id)
        logger.info(f"Friendship removed {user_id} <-> {friend_id}")

    def list_friends(self, user_id: Optional[str]) -> list[UserProfile]:
        """
        Friends of the user with their profiles.

        Signed-out callers get an empty list. Friends without a profile are
        left out, as they cannot be displayed.
        """
        if not user_id:
            return []
        friend_ids = self._graph.list_friends(user_id)
        profiles = self._directory.get_many(friend_ids)
        return [profiles[uid] for uid in friend_ids if uid in profiles]

    def list_pending_requests(self, user_id: Optional[str]) -> list[FriendRequestView]:
        """Requests received by the user, with sender profiles."""
        if not user_id:
            return []
        requests = self._graph.list_pending_requests(user_id)
        profiles = self._directory.get_many(r.from_user_id for r in requests)
        return [FriendRequestView(r, profiles.get(r.from_user_id)) for r in requests]

    def list_sent_requests(self, user_id: Optional[str]) -> list[FriendRequestView]:
        """Requests sent by the user, with recipient profiles."""
        if not user_id:
            return []
        requests = self._graph.list_sent_requests(user_id)
        profiles = self._directory.get_many(r.to_user_id for r in requests)
        return [FriendRequestView(r, profiles.get(r.to_user_id)) for r in requests]

    def find_user_by_email(self, email: str) -> Optional[UserProfile]:
        return self._directory.find_by_email(email)

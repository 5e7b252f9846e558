"""
SocialGraph implementation backed by SQLAlchemy.

Friendships are stored once per unordered pair; see Friendship.between().
"""

import logging
from typing import Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from pickup.exceptions import (
    AlreadyFriendsError,
    FriendRequestExistsError,
    FriendRequestNotFoundError,
    FriendshipNotFoundError,
    SocialGraphError,
)
from pickup.integrations.base import FriendRequestRecord, SocialGraph
from pickup.integrations.database.adapter import DatabaseAdapter
from pickup.models import FriendRequest, Friendship, friendship_key

logger = logging.getLogger(__name__)


class SQLAlchemySocialGraph(SocialGraph):
    """SocialGraph over a request-scoped SQLAlchemy session."""

    def __init__(self, session: Session):
        self._session = session
        self._adapter = DatabaseAdapter()

    def _find_friendship(self, user_a: str, user_b: str) -> Optional[Friendship]:
        low, high = friendship_key(user_a, user_b)
        stmt = select(Friendship).where(
            and_(Friendship.user_low_id == low, Friendship.user_high_id == high)
        )
        return self._session.scalar(stmt)

    def _find_request(self, from_user_id: str, to_user_id: str) -> Optional[FriendRequest]:
        stmt = select(FriendRequest).where(
            and_(
                FriendRequest.from_user_id == from_user_id,
                FriendRequest.to_user_id == to_user_id,
                FriendRequest.status == "pending",
            )
        )
        return self._session.scalar(stmt)

    def is_friend(self, user_a: str, user_b: str) -> bool:
        if user_a == user_b:
            return False
        try:
            return self._find_friendship(user_a, user_b) is not None
        except SQLAlchemyError as e:
            raise SocialGraphError(f"Friendship lookup failed for {user_a}/{user_b}", e) from e

    def has_pending_request(self, from_user_id: str, to_user_id: str) -> bool:
        try:
            return self._find_request(from_user_id, to_user_id) is not None
        except SQLAlchemyError as e:
            raise SocialGraphError("Friend request lookup failed", e) from e

    def send_request(self, from_user_id: str, to_user_id: str) -> FriendRequestRecord:
        request = FriendRequest(from_user_id=from_user_id, to_user_id=to_user_id)
        try:
            self._session.add(request)
            self._session.flush()
        except IntegrityError as e:
            self._session.rollback()
            raise FriendRequestExistsError(from_user_id, to_user_id) from e
        except SQLAlchemyError as e:
            self._session.rollback()
            raise SocialGraphError("Could not send friend request", e) from e
        return self._adapter.to_friend_request(request)

    def accept_request(self, from_user_id: str, to_user_id: str) -> None:
        try:
            request = self._find_request(from_user_id, to_user_id)
            if request is None:
                raise FriendRequestNotFoundError(from_user_id, to_user_id)
            self._session.delete(request)
            self._session.add(Friendship.between(from_user_id, to_user_id))
            self._session.flush()
        except IntegrityError as e:
            # The other side's auto-accept won the race
            self._session.rollback()
            raise AlreadyFriendsError(to_user_id, from_user_id) from e
        except SQLAlchemyError as e:
            self._session.rollback()
            raise SocialGraphError("Could not accept friend request", e) from e

    def reject_request(self, from_user_id: str, to_user_id: str) -> None:
        try:
            request = self._find_request(from_user_id, to_user_id)
            if request is None:
                raise FriendRequestNotFoundError(from_user_id, to_user_id)
            self._session.delete(request)
            self._session.flush()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise SocialGraphError("Could not remove friend request", e) from e

    def cancel_request(self, from_user_id: str, to_user_id: str) -> None:
        self.reject_request(from_user_id, to_user_id)

    def remove_friend(self, user_id: str, friend_id: str) -> None:
        try:
            friendship = self._find_friendship(user_id, friend_id)
            if friendship is None:
                raise FriendshipNotFoundError(user_id, friend_id)
            self._session.delete(friendship)
            self._session.flush()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise SocialGraphError("Could not remove friend", e) from e

    def list_friends(self, user_id: str) -> list[str]:
        stmt = (
            select(Friendship)
            .where(
                or_(
                    Friendship.user_low_id == user_id,
                    Friendship.user_high_id == user_id,
                )
            )
            .order_by(Friendship.created_at)
        )
        try:
            friendships = self._session.scalars(stmt).all()
        except SQLAlchemyError as e:
            raise SocialGraphError(f"Could not list friends of {user_id}", e) from e
        return [friendship.other(user_id) for friendship in friendships]

    def _list_requests(self, *conditions) -> list[FriendRequestRecord]:
        stmt = (
            select(FriendRequest)
            .where(and_(FriendRequest.status == "pending", *conditions))
            .order_by(FriendRequest.created_at)
        )
        try:
            rows = self._session.scalars(stmt).all()
        except SQLAlchemyError as e:
            raise SocialGraphError("Could not list friend requests", e) from e
        return [self._adapter.to_friend_request(row) for row in rows]

    def list_pending_requests(self, user_id: str) -> list[FriendRequestRecord]:
        return self._list_requests(FriendRequest.to_user_id == user_id)

    def list_sent_requests(self, user_id: str) -> list[FriendRequestRecord]:
        return self._list_requests(FriendRequest.from_user_id == user_id)

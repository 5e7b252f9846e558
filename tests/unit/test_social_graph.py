"""
Tests for the SQLAlchemy social graph.
"""

import pytest
from sqlalchemy import func, select

from pickup.exceptions import (
    AlreadyFriendsError,
    FriendRequestExistsError,
    FriendRequestNotFoundError,
    FriendshipNotFoundError,
)
from pickup.models import FriendRequest, Friendship


class TestFriendship:

    def test_strangers_are_not_friends(self, social_graph):
        assert social_graph.is_friend("alice", "bob") is False

    def test_accept_creates_symmetric_friendship(self, social_graph):
        social_graph.send_request("alice", "bob")

        social_graph.accept_request("alice", "bob")

        assert social_graph.is_friend("alice", "bob")
        assert social_graph.is_friend("bob", "alice")

    def test_accept_removes_request(self, social_graph):
        social_graph.send_request("alice", "bob")
        social_graph.accept_request("alice", "bob")

        assert social_graph.has_pending_request("alice", "bob") is False
        assert social_graph.list_pending_requests("bob") == []

    def test_friendship_stored_once(self, social_graph, db_session):
        social_graph.send_request("zed", "amy")
        social_graph.accept_request("zed", "amy")

        friendship = db_session.scalar(select(Friendship))
        assert (friendship.user_low_id, friendship.user_high_id) == ("amy", "zed")

    def test_user_is_not_own_friend(self, social_graph):
        assert social_graph.is_friend("alice", "alice") is False

    def test_list_friends_from_both_sides(self, social_graph):
        social_graph.send_request("alice", "bob")
        social_graph.accept_request("alice", "bob")
        social_graph.send_request("carol", "alice")
        social_graph.accept_request("carol", "alice")

        assert sorted(social_graph.list_friends("alice")) == ["bob", "carol"]
        assert social_graph.list_friends("bob") == ["alice"]

    def test_remove_friend(self, social_graph):
        social_graph.send_request("alice", "bob")
        social_graph.accept_request("alice", "bob")

        social_graph.remove_friend("bob", "alice")

        assert social_graph.is_friend("alice", "bob") is False

    def test_remove_non_friend(self, social_graph):
        with pytest.raises(FriendshipNotFoundError):
            social_graph.remove_friend("alice", "bob")

    def test_duplicate_friendship_is_conflict(self, social_graph, db_session):
        """Accepting when the pair is already friends hits the unique constraint."""
        db_session.add(Friendship.between("alice", "bob"))
        db_session.add(FriendRequest(from_user_id="bob", to_user_id="alice"))
        db_session.commit()

        with pytest.raises(AlreadyFriendsError):
            social_graph.accept_request("bob", "alice")

        assert db_session.scalar(select(func.count()).select_from(Friendship)) == 1


class TestRequests:

    def test_send_request(self, social_graph):
        record = social_graph.send_request("alice", "bob")

        assert record.from_user_id == "alice"
        assert record.to_user_id == "bob"
        assert record.status == "pending"
        assert social_graph.has_pending_request("alice", "bob")
        assert social_graph.has_pending_request("bob", "alice") is False

    def test_duplicate_request(self, social_graph, db_session):
        social_graph.send_request("alice", "bob")
        db_session.commit()

        with pytest.raises(FriendRequestExistsError):
            social_graph.send_request("alice", "bob")

    def test_pending_and_sent_lists(self, social_graph):
        social_graph.send_request("alice", "bob")
        social_graph.send_request("carol", "bob")

        received = social_graph.list_pending_requests("bob")
        assert sorted(r.from_user_id for r in received) == ["alice", "carol"]
        assert [r.to_user_id for r in social_graph.list_sent_requests("alice")] == ["bob"]
        assert social_graph.list_sent_requests("bob") == []

    def test_reject_request(self, social_graph):
        social_graph.send_request("alice", "bob")

        social_graph.reject_request("alice", "bob")

        assert social_graph.list_pending_requests("bob") == []
        assert social_graph.is_friend("alice", "bob") is False

    def test_cancel_request(self, social_graph):
        social_graph.send_request("alice", "bob")

        social_graph.cancel_request("alice", "bob")

        assert social_graph.list_sent_requests("alice") == []

    @pytest.mark.parametrize("action", ["accept_request", "reject_request", "cancel_request"])
    def test_missing_request(self, social_graph, action):
        with pytest.raises(FriendRequestNotFoundError):
            getattr(social_graph, action)("alice", "bob")

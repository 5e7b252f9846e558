"""
Friendship and FriendRequest models.

Entities:
- Friendship: Unordered pair of user IDs, stored once as (low, high)
- FriendRequest: Directed pending request from one user to another
"""

from sqlalchemy import CheckConstraint, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pickup.models.base import BaseModel


def friendship_key(user_a: str, user_b: str) -> tuple[str, str]:
    """Order-independent key for a pair of users."""
    return (user_a, user_b) if user_a <= user_b else (user_b, user_a)


class Friendship(BaseModel):
    """
    Symmetric friendship between two users.

    The pair is normalised with friendship_key() so that concurrent
    auto-accepts from both sides collide on the unique constraint instead of
    producing two rows.
    """

    __tablename__ = "friendships"

    user_low_id: Mapped[str] = mapped_column(String(255), nullable=False)

    user_high_id: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_low_id", "user_high_id", name="uq_friendship_pair"),
        CheckConstraint("user_low_id < user_high_id", name="ck_friendship_ordered"),
        Index("idx_friendship_low", "user_low_id"),
        Index("idx_friendship_high", "user_high_id"),
    )

    @classmethod
    def between(cls, user_a: str, user_b: str) -> "Friendship":
        low, high = friendship_key(user_a, user_b)
        return cls(user_low_id=low, user_high_id=high)

    def other(self, user_id: str) -> str:
        """Return the friend of `user_id` in this pair."""
        return self.user_high_id if user_id == self.user_low_id else self.user_low_id

    def __repr__(self) -> str:
        return f"<Friendship('{self.user_low_id}' <-> '{self.user_high_id}')>"


class FriendRequest(BaseModel):
    """Pending friend request from `from_user_id` to `to_user_id`."""

    __tablename__ = "friend_requests"

    from_user_id: Mapped[str] = mapped_column(String(255), nullable=False)

    to_user_id: Mapped[str] = mapped_column(String(255), nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="pending",
        doc="Only 'pending' is stored; accepted and rejected requests are deleted"
    )

    __table_args__ = (
        UniqueConstraint("from_user_id", "to_user_id", name="uq_friend_request_pair"),
        Index("idx_friend_request_to", "to_user_id", "status"),
        Index("idx_friend_request_from", "from_user_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<FriendRequest('{self.from_user_id}' -> '{self.to_user_id}', status='{self.status}')>"

"""
User profile model.

Profiles mirror accounts owned by the external auth provider. The `uid` is the
provider's user id and is what every other table references.
"""

from typing import Optional

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from pickup.models.base import BaseModel


class User(BaseModel):
    """
    Public profile of an authenticated user.

    Used to display friends and requests and to look users up by email.
    """

    __tablename__ = "users"

    uid: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        doc="External user ID from frontend authentication"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        doc="Email address (stored lower-case)"
    )

    display_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        doc="Name shown to other users"
    )

    photo_url: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        doc="Avatar URL hosted by the upload service"
    )

    __table_args__ = (
        Index("idx_user_email", "email"),
    )

    def __repr__(self) -> str:
        return f"<User(uid='{self.uid}', email='{self.email}')>"

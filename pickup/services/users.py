"""
User directory.

Stores the public profile of each user known to the auth provider so that
friend lists and email lookup can show names. Accounts themselves live with
the auth provider; this table is only a mirror.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from pickup.exceptions import EmailInUseError, InvalidProfileError, StoreUnavailableError
from pickup.integrations.base import UserProfile
from pickup.integrations.database.adapter import DatabaseAdapter
from pickup.models import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserDirectory:
    """Profile lookups and registration over a SQLAlchemy session."""

    def __init__(self, session: Session):
        self._session = session
        self._adapter = DatabaseAdapter()

    def _row(self, uid: str) -> Optional[User]:
        return self._session.scalar(select(User).where(User.uid == uid))

    def register(
        self,
        uid: str,
        email: str,
        display_name: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> UserProfile:
        """
        Create or update the profile for `uid`.

        The display name defaults to the email address, as the sign-up form does.
        """
        email = normalize_email(email)
        if not email or "@" not in email:
            raise InvalidProfileError(f"Invalid email address: {email!r}")

        name = (display_name or "").strip() or email

        try:
            user = self._row(uid)
            if user is None:
                user = User(uid=uid, email=email, display_name=name, photo_url=photo_url)
                self._session.add(user)
                logger.info(f"Registered user {uid}")
            else:
                user.email = email
                user.display_name = name
                if photo_url is not None:
                    user.photo_url = photo_url
            self._session.flush()
        except IntegrityError as e:
            self._session.rollback()
            raise EmailInUseError(email) from e
        except SQLAlchemyError as e:
            self._session.rollback()
            raise StoreUnavailableError("Could not save user profile", e) from e

        return self._adapter.to_user_profile(user)

    def get(self, uid: str) -> Optional[UserProfile]:
        user = self._row(uid)
        return self._adapter.to_user_profile(user) if user else None

    def find_by_email(self, email: str) -> Optional[UserProfile]:
        user = self._session.scalar(
            select(User).where(User.email == normalize_email(email))
        )
        return self._adapter.to_user_profile(user) if user else None

    def get_many(self, uids: Iterable[str]) -> dict[str, UserProfile]:
        """Profiles keyed by uid; unknown uids are left out."""
        uids = list(uids)
        if not uids:
            return {}
        users = self._session.scalars(select(User).where(User.uid.in_(uids))).all()
        return {user.uid: self._adapter.to_user_profile(user) for user in users}

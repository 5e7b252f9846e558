"""
FastAPI dependency injection providers.

Provides database sessions, the calling user and request-scoped services.
"""

import logging
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from pickup.config import Settings, get_settings
from pickup.database import get_db
from pickup.exceptions import AuthenticationRequiredError
from pickup.integrations.database import SQLAlchemyEventStore, SQLAlchemySocialGraph
from pickup.services import EventService, FriendService, UserDirectory

logger = logging.getLogger(__name__)


def get_db_session(db: Session = Depends(get_db)) -> Session:
    """
    Dependency injection for database session.

    Tests override `get_db` to run against their own session.
    """
    return db


def get_current_user_id(
    x_user_id: Optional[str] = Header(None, description="Signed-in user ID"),
) -> Optional[str]:
    """
    Identify the caller from the X-User-ID header.

    Returns:
        User ID, or None for a signed-out viewer
    """
    if x_user_id is None:
        return None
    return x_user_id.strip() or None


def require_user_id(user_id: Optional[str] = Depends(get_current_user_id)) -> str:
    """
    Like get_current_user_id, for endpoints that need a signed-in user.

    Raises:
        AuthenticationRequiredError: If the header is missing
    """
    if user_id is None:
        raise AuthenticationRequiredError()
    return user_id


def get_user_directory(db: Session = Depends(get_db_session)) -> UserDirectory:
    return UserDirectory(db)


def get_event_service(
    db: Session = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> EventService:
    return EventService(
        store=SQLAlchemyEventStore(db),
        social_graph=SQLAlchemySocialGraph(db),
        settings=settings,
    )


def get_friend_service(
    db: Session = Depends(get_db_session),
    directory: UserDirectory = Depends(get_user_directory),
) -> FriendService:
    return FriendService(SQLAlchemySocialGraph(db), directory)

"""
User profile API routes.

Accounts live with the auth provider; clients register the signed-in user's
profile here so others can find them by email and see their name.
"""

import logging

from fastapi import APIRouter, Depends, Query

from pickup.api.dependencies import get_user_directory, require_user_id
from pickup.api.models import RegisterUserRequest, UserResponse
from pickup.exceptions import UserNotFoundError
from pickup.services import UserDirectory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserResponse)
def register_user(
    request: RegisterUserRequest,
    user_id: str = Depends(require_user_id),
    directory: UserDirectory = Depends(get_user_directory),
) -> UserResponse:
    """Create or update the caller's profile."""
    profile = directory.register(
        user_id,
        email=request.email,
        display_name=request.display_name,
        photo_url=request.photo_url,
    )
    return UserResponse.from_profile(profile)


@router.get("/me", response_model=UserResponse)
def get_me(
    user_id: str = Depends(require_user_id),
    directory: UserDirectory = Depends(get_user_directory),
) -> UserResponse:
    profile = directory.get(user_id)
    if profile is None:
        raise UserNotFoundError(user_id)
    return UserResponse.from_profile(profile)


@router.get("/lookup", response_model=UserResponse)
def lookup_user(
    email: str = Query(..., min_length=3, description="Exact email address"),
    user_id: str = Depends(require_user_id),
    directory: UserDirectory = Depends(get_user_directory),
) -> UserResponse:
    """Find a user by email, for sending a friend request."""
    profile = directory.find_by_email(email)
    if profile is None:
        raise UserNotFoundError(email)
    return UserResponse.from_profile(profile)

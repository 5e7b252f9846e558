"""
Friend API routes.

Friendships decide who can see a user's private events. Requests are
directed; friendships are symmetric.
"""

import logging

from fastapi import APIRouter, Depends

from pickup.api.dependencies import get_friend_service, require_user_id
from pickup.api.models import (
    FriendListResponse,
    FriendRequestListResponse,
    FriendRequestResponse,
    MessageResponse,
    SendFriendRequestResponse,
    UserResponse,
)
from pickup.services import FriendService, SendOutcome

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/friends", tags=["Friends"])


@router.get("", response_model=FriendListResponse)
def list_friends(
    user_id: str = Depends(require_user_id),
    service: FriendService = Depends(get_friend_service),
) -> FriendListResponse:
    friends = service.list_friends(user_id)
    return FriendListResponse(
        friends=[UserResponse.from_profile(p) for p in friends],
        total=len(friends),
    )


@router.get("/requests", response_model=FriendRequestListResponse)
def list_received_requests(
    user_id: str = Depends(require_user_id),
    service: FriendService = Depends(get_friend_service),
) -> FriendRequestListResponse:
    """Pending requests sent to the caller."""
    views = service.list_pending_requests(user_id)
    return FriendRequestListResponse(
        requests=[FriendRequestResponse.from_record(v.request, v.user) for v in views],
        total=len(views),
    )


@router.get("/requests/sent", response_model=FriendRequestListResponse)
def list_sent_requests(
    user_id: str = Depends(require_user_id),
    service: FriendService = Depends(get_friend_service),
) -> FriendRequestListResponse:
    """Pending requests the caller has sent."""
    views = service.list_sent_requests(user_id)
    return FriendRequestListResponse(
        requests=[FriendRequestResponse.from_record(v.request, v.user) for v in views],
        total=len(views),
    )


@router.post("/requests/{recipient_id}", response_model=SendFriendRequestResponse)
def send_friend_request(
    recipient_id: str,
    user_id: str = Depends(require_user_id),
    service: FriendService = Depends(get_friend_service),
) -> SendFriendRequestResponse:
    """
    Send a friend request.

    If the recipient already sent the caller a request, that request is
    accepted instead and the outcome is 'accepted'.
    """
    outcome = service.send_request(user_id, recipient_id)
    if outcome is SendOutcome.ACCEPTED:
        message = f"You and {recipient_id} are now friends"
    else:
        message = f"Friend request sent to {recipient_id}"
    return SendFriendRequestResponse(outcome=outcome.value, message=message)


@router.post("/requests/{sender_id}/accept", response_model=MessageResponse)
def accept_friend_request(
    sender_id: str,
    user_id: str = Depends(require_user_id),
    service: FriendService = Depends(get_friend_service),
) -> MessageResponse:
    service.accept_request(user_id, sender_id)
    return MessageResponse(message=f"You and {sender_id} are now friends")


@router.post("/requests/{sender_id}/reject", response_model=MessageResponse)
def reject_friend_request(
    sender_id: str,
    user_id: str = Depends(require_user_id),
    service: FriendService = Depends(get_friend_service),
) -> MessageResponse:
    service.reject_request(user_id, sender_id)
    return MessageResponse(message="Friend request rejected")


@router.delete("/requests/{recipient_id}", response_model=MessageResponse)
def cancel_friend_request(
    recipient_id: str,
    user_id: str = Depends(require_user_id),
    service: FriendService = Depends(get_friend_service),
) -> MessageResponse:
    """Withdraw a request the caller sent."""
    service.cancel_request(user_id, recipient_id)
    return MessageResponse(message="Friend request cancelled")


@router.delete("/{friend_id}", response_model=MessageResponse)
def remove_friend(
    friend_id: str,
    user_id: str = Depends(require_user_id),
    service: FriendService = Depends(get_friend_service),
) -> MessageResponse:
    service.remove_friend(user_id, friend_id)
    return MessageResponse(message=f"Removed {friend_id} from friends")

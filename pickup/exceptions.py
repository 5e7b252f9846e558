"""
Exceptions raised by the Pickup events service.

Every exception carries an HTTP status code and a retryable flag so the API
layer can render it without knowing each type.
"""


class PickupError(Exception):
    """Base exception for all service errors."""

    status_code: int = 500
    error_type: str = "internal_error"
    retryable: bool = False

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


# =============================================================================
# Membership
# =============================================================================


class MembershipError(PickupError):
    """A join, leave or delete precondition was not met."""

    status_code = 409
    error_type = "membership_error"


class AlreadyMemberError(MembershipError):
    """User tried to join an event they are already part of."""

    def __init__(self, event_id: str, user_id: str):
        super().__init__(f"User {user_id} has already joined event {event_id}")
        self.event_id = event_id
        self.user_id = user_id


class EventFullError(MembershipError):
    """Event has reached max_participants."""

    def __init__(self, event_id: str, max_participants: int):
        super().__init__(
            f"Event {event_id} is full ({max_participants} participants)"
        )
        self.event_id = event_id
        self.max_participants = max_participants


class NotMemberError(MembershipError):
    """User tried to leave an event they never joined."""

    status_code = 400

    def __init__(self, event_id: str, user_id: str):
        super().__init__(f"User {user_id} is not a participant of event {event_id}")
        self.event_id = event_id
        self.user_id = user_id


class NotOwnerError(MembershipError):
    """Only the creator may delete an event."""

    status_code = 403

    def __init__(self, event_id: str, user_id: str):
        super().__init__(f"User {user_id} did not create event {event_id}")
        self.event_id = event_id
        self.user_id = user_id


# =============================================================================
# Events
# =============================================================================


class InvalidEventError(PickupError):
    """
    Event data failed validation.

    Causes:
    - Blank title
    - End time not after start time
    - Coordinates out of range
    - Non-positive capacity or duration
    """

    status_code = 422
    error_type = "validation_error"


class EventNotFoundError(PickupError):
    """Event does not exist or is not visible to the viewer."""

    status_code = 404
    error_type = "not_found"

    def __init__(self, event_id: str):
        super().__init__(f"Event {event_id} not found")
        self.event_id = event_id


class AuthenticationRequiredError(PickupError):
    """Operation needs a signed-in user."""

    status_code = 401
    error_type = "authentication_required"

    def __init__(self, message: str = "User must be logged in"):
        super().__init__(message)


# =============================================================================
# Social graph
# =============================================================================


class FriendshipError(PickupError):
    """Base class for friend request and friendship errors."""

    status_code = 409
    error_type = "friendship_error"


class SelfFriendRequestError(FriendshipError):
    status_code = 400

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} cannot send a friend request to themselves")


class AlreadyFriendsError(FriendshipError):
    def __init__(self, user_id: str, friend_id: str):
        super().__init__(f"Users {user_id} and {friend_id} are already friends")


class FriendRequestExistsError(FriendshipError):
    def __init__(self, from_user_id: str, to_user_id: str):
        super().__init__(
            f"Friend request from {from_user_id} to {to_user_id} already sent"
        )


class FriendRequestNotFoundError(FriendshipError):
    status_code = 404
    error_type = "not_found"

    def __init__(self, from_user_id: str, to_user_id: str):
        super().__init__(
            f"No pending friend request from {from_user_id} to {to_user_id}"
        )


class FriendshipNotFoundError(FriendshipError):
    status_code = 404
    error_type = "not_found"

    def __init__(self, user_id: str, friend_id: str):
        super().__init__(f"Users {user_id} and {friend_id} are not friends")


class InvalidProfileError(PickupError):
    status_code = 422
    error_type = "validation_error"


class EmailInUseError(PickupError):
    status_code = 409
    error_type = "email_in_use"

    def __init__(self, email: str):
        super().__init__(f"Email {email} is already registered to another user")


class UserNotFoundError(PickupError):
    status_code = 404
    error_type = "not_found"

    def __init__(self, identifier: str):
        super().__init__(f"User {identifier} not found")


# =============================================================================
# Collaborator failures
# =============================================================================


class StoreUnavailableError(PickupError):
    """
    Event store could not complete the operation.

    Retryable; the request left no partial changes behind.
    """

    status_code = 503
    error_type = "store_unavailable"
    retryable = True


class SocialGraphError(PickupError):
    """
    Friendship lookup or update failed.

    The visibility filter treats a failed lookup as "not a friend".
    """

    status_code = 503
    error_type = "social_graph_unavailable"
    retryable = True

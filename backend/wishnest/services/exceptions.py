"""
Service Exceptions

Every error raised by the service layer carries an ErrorKind. The API
layer maps kinds to HTTP status codes in one place (wishnest.api.errors);
services never build transport payloads themselves.
"""
from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    INVALID_CREDENTIALS = "invalid_credentials"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    UNEXPECTED = "unexpected"


class WishNestError(Exception):
    """Base exception for service errors"""
    kind: ErrorKind = ErrorKind.UNEXPECTED
    default_message: str = "Unexpected error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# === Invalid input ===

class InvalidInputError(WishNestError):
    """Raised when a field is malformed or out of range"""
    kind = ErrorKind.INVALID_INPUT
    default_message = "Invalid input"


class InvalidPayloadError(InvalidInputError):
    """Raised when a nested payload (e.g. alternate) has the wrong shape"""
    default_message = "Invalid payload"


class InvalidTargetError(InvalidInputError):
    """Raised when a friend request targets oneself"""
    default_message = "You cannot friend yourself"


class UnknownTargetError(InvalidTargetError):
    """Raised when a friend request targets a user that does not exist"""
    kind = ErrorKind.NOT_FOUND
    default_message = "User not found"


# === Authentication ===

class InvalidCredentialsError(WishNestError):
    """Raised on login failure, without saying which part was wrong"""
    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid credentials"


# === Not found ===

class NotFoundError(WishNestError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class WishlistNotFoundError(NotFoundError):
    default_message = "Wishlist not found"


class ItemNotFoundError(NotFoundError):
    default_message = "Item not found"


class RequestNotFoundError(NotFoundError):
    default_message = "Request not found"


class RelationshipNotFoundError(NotFoundError):
    default_message = "No relationship found"


# === Forbidden ===

class ForbiddenError(WishNestError):
    kind = ErrorKind.FORBIDDEN
    default_message = "Not allowed"


class NotFriendsError(ForbiddenError):
    """Raised when a viewer is neither the owner nor an accepted friend"""
    default_message = "Not allowed (not friends)"


class NotRecipientError(ForbiddenError):
    """Raised when someone other than the recipient answers a request"""
    default_message = "Only the recipient can answer this request"


# === Conflict ===

class ConflictError(WishNestError):
    kind = ErrorKind.CONFLICT
    default_message = "Conflict"


class DuplicateUserError(ConflictError):
    default_message = "Email or username already exists"


class AlreadyFriendsError(ConflictError):
    default_message = "You are already friends"


class RequestAlreadyPendingError(ConflictError):
    default_message = "Request already pending"


class NotPendingError(ConflictError):
    default_message = "Request is not pending"


class AlreadyReservedError(ConflictError):
    default_message = "Item is already reserved"


class NotReservedError(ConflictError):
    default_message = "Item is not reserved"

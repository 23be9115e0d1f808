"""
Error types raised by the API layer.

``ApiError`` subclasses are produced only by the request executor from
transport and status outcomes. Resource clients wrap them in a
``ServiceError`` subclass that names what was being fetched or changed.
"""
from typing import Optional


class ApiError(Exception):
    """Base class for request executor failures."""

    default_message = "An unknown error occurred"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class InvalidURLError(ApiError):
    default_message = "Invalid URL provided"

    def __init__(self, url: Optional[str] = None):
        self.url = url
        super().__init__(f"Invalid URL provided: {url}" if url else None)


class NoDataError(ApiError):
    default_message = "No data received from server"


class DecodingError(ApiError):
    def __init__(self, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(f"Failed to decode response: {cause}")


class ServerError(ApiError):
    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Server error ({status_code}): {message or 'Unknown error'}")


class NetworkError(ApiError):
    def __init__(self, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(f"Network error: {cause}")


class UnauthorizedError(ApiError):
    default_message = "Authentication required"


class ForbiddenError(ApiError):
    default_message = "Access forbidden"


class NotFoundError(ApiError):
    default_message = "Resource not found"


class RequestTimeoutError(ApiError):
    default_message = "Request timed out"


class UnknownError(ApiError):
    def __init__(self, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__()


# ----------------------------------------------------------------------
# Service errors
# ----------------------------------------------------------------------

class ServiceError(Exception):
    """A resource client failure wrapping the underlying error."""

    def __init__(self, message: str, error: Exception):
        super().__init__(message)
        self.error = error


class AuthError(ServiceError):
    def __init__(self, operation: str, error: Exception):
        self.operation = operation
        super().__init__(f"Failed to {operation}: {error}", error)


class CardSetsError(ServiceError):
    def __init__(self, series: str, error: Exception):
        self.series = series
        super().__init__(f"Failed to fetch sets for {series}: {error}", error)


class CardsError(ServiceError):
    def __init__(self, set_id: str, error: Exception):
        self.set_id = set_id
        super().__init__(f"Failed to fetch cards for set {set_id}: {error}", error)


class CollectionError(ServiceError):
    ADD = "add"
    DELETE = "delete"
    FETCH = "fetch"

    def __init__(self, operation: str, message: str, error: Exception,
                 card_id: Optional[str] = None,
                 entry_id: Optional[int] = None,
                 user_id: Optional[int] = None):
        self.operation = operation
        self.card_id = card_id
        self.entry_id = entry_id
        self.user_id = user_id
        super().__init__(message, error)

    @classmethod
    def add_failed(cls, card_id: str, error: Exception) -> "CollectionError":
        return cls(cls.ADD, f"Failed to add card {card_id} to collection: {error}",
                   error, card_id=card_id)

    @classmethod
    def delete_failed(cls, entry_id: int, error: Exception) -> "CollectionError":
        return cls(cls.DELETE, f"Failed to remove entry {entry_id} from collection: {error}",
                   error, entry_id=entry_id)

    @classmethod
    def fetch_failed(cls, user_id: int, error: Exception) -> "CollectionError":
        return cls(cls.FETCH, f"Failed to fetch collection for user {user_id}: {error}",
                   error, user_id=user_id)


def unwrap_error(error: Exception) -> Exception:
    """Return the executor-level error behind a service error."""
    while isinstance(error, ServiceError):
        error = error.error
    return error

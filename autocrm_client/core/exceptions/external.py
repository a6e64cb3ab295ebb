"""
External API-related exceptions.
"""

from typing import Optional


class ExternalAPIError(Exception):
    """Base exception for CRM API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(ExternalAPIError):
    """Raised when the API cannot be reached or the request timed out."""
    pass


class AuthError(ExternalAPIError):
    """Raised on 401/403; the caller must re-authenticate."""
    pass


class ServerError(ExternalAPIError):
    """Raised on 5xx responses or unreadable payloads."""
    pass


class NotFoundError(ExternalAPIError):
    """Raised when the requested resource does not exist."""
    pass


class QuotaExceededError(ExternalAPIError):
    """Raised when a time slot filled up before the booking was submitted."""
    pass


class RequestRejectedError(ExternalAPIError):
    """Raised when the API rejects a request with a client error."""
    pass

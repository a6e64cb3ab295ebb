"""
Custom exceptions for the AutoCRM client.
"""

from .booking import BookingFlowError, BookingValidationError, SlotUnavailableError
from .external import (
    ExternalAPIError,
    NetworkError,
    AuthError,
    ServerError,
    NotFoundError,
    QuotaExceededError,
    RequestRejectedError,
)
from .vehicle import VehicleValidationError

__all__ = [
    "BookingFlowError",
    "BookingValidationError",
    "SlotUnavailableError",
    "ExternalAPIError",
    "NetworkError",
    "AuthError",
    "ServerError",
    "NotFoundError",
    "QuotaExceededError",
    "RequestRejectedError",
    "VehicleValidationError",
]

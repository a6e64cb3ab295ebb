"""
Booking-related exceptions.
"""


class BookingFlowError(Exception):
    """Base exception for booking flow errors."""
    pass


class BookingValidationError(BookingFlowError):
    """Exception raised when a selection breaks the wizard's dependency chain."""
    pass


class SlotUnavailableError(BookingValidationError):
    """Exception raised when a fully booked time slot is selected."""
    pass

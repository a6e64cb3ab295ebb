"""
Booking-related enums.
"""

from enum import Enum


class BookingStep(int, Enum):
    """Ordered steps of the booking wizard."""

    SELECT_VEHICLE = 0
    CHOOSE_BRANCH = 1
    SELECT_SERVICE = 2
    SELECT_DATE_TIME = 3
    CONFIRMATION = 4

    @property
    def title(self) -> str:
        """Title shown in the step indicator."""
        return _STEP_TITLES[self]

    def next(self) -> "BookingStep":
        if self is BookingStep.CONFIRMATION:
            return self
        return BookingStep(self.value + 1)

    def previous(self) -> "BookingStep":
        if self is BookingStep.SELECT_VEHICLE:
            return self
        return BookingStep(self.value - 1)


_STEP_TITLES = {
    BookingStep.SELECT_VEHICLE: "Select Vehicle",
    BookingStep.CHOOSE_BRANCH: "Choose Branch",
    BookingStep.SELECT_SERVICE: "Select Service",
    BookingStep.SELECT_DATE_TIME: "Select Date & Time",
    BookingStep.CONFIRMATION: "Confirmation",
}


class StepOutcome(str, Enum):
    """Result of a wizard operation, as seen by the UI."""

    OK = "ok"
    STEP_INCOMPLETE = "step_incomplete"
    INVALID_SELECTION = "invalid_selection"
    AUTH_REQUIRED = "auth_required"
    NETWORK_ERROR = "network_error"
    SERVER_ERROR = "server_error"
    QUOTA_EXCEEDED = "quota_exceeded"
    REJECTED = "rejected"
    SUPERSEDED = "superseded"

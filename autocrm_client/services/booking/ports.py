"""
Collaborator interfaces consumed by the booking wizard.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from ...core.models.booking import BookingConfirmation, BookingRequest, TimeSlot


class AvailabilityFetcher(ABC):
    @abstractmethod
    async def fetch_time_slots(self, branch_id: int, date: date) -> list[TimeSlot]:
        """
        Return the slots of a branch on one date, ordered by start time.

        Raises NetworkError, AuthError or ServerError.
        """
        raise NotImplementedError


class BookingSubmitter(ABC):
    @abstractmethod
    async def submit_booking(self, request: BookingRequest) -> BookingConfirmation:
        """Create the booking. Raises QuotaExceededError if the slot filled up."""
        raise NotImplementedError

"""
Booking service for loading booking options and creating bookings.
"""

import logging
from datetime import date
from typing import List, Optional

from pydantic import ValidationError

from ...core.models.booking import (
    BookingConfirmation,
    BookingRequest,
    BookingSelectionState,
    Branch,
    ServiceOffering,
    TimeSlot,
)
from ...core.models.vehicle import Vehicle
from ...utils.date import DateUtils
from ...utils.validation import ValidationUtils
from ..external import ExternalAPIService
from .ports import AvailabilityFetcher, BookingSubmitter


logger = logging.getLogger(__name__)


class BookingService(AvailabilityFetcher, BookingSubmitter):
    """Service for handling vehicle service bookings over the CRM API."""

    def __init__(self, external_api: ExternalAPIService):
        self.external_api = external_api

    async def get_vehicles(self) -> List[Vehicle]:
        """Get the vehicles a booking can be made for."""
        items = await self.external_api.get_vehicles()
        return ValidationUtils.parse_records(Vehicle, items)

    async def get_branches(self) -> List[Branch]:
        items = await self.external_api.get_branches()
        return ValidationUtils.parse_records(Branch, items)

    async def get_service_types(self) -> List[ServiceOffering]:
        items = await self.external_api.get_service_types()
        return ValidationUtils.parse_records(ServiceOffering, items)

    async def fetch_time_slots(self, branch_id: int, date: date) -> List[TimeSlot]:
        """Get time slots for a branch on a date, ordered by start time."""
        items = await self.external_api.get_time_slots(branch_id, DateUtils.to_iso(date))
        slots = ValidationUtils.parse_records(TimeSlot, items)
        return sorted(slots, key=lambda slot: slot.start_time)

    async def submit_booking(self, request: BookingRequest) -> BookingConfirmation:
        """Create the final booking."""
        payload = request.to_payload()
        logger.info(
            "Submitting booking: branch=%s service=%s date=%s time=%s",
            request.branch_id,
            request.service_type_id,
            payload["appointmentDate"],
            request.appointment_time,
        )
        result = await self.external_api.create_booking(payload)
        try:
            return BookingConfirmation.model_validate(
                {k: v for k, v in result.items() if v is not None}
            )
        except ValidationError as e:
            # The booking exists; only the response body is unexpected
            logger.warning("Unexpected booking response %s: %s", result, e)
            return BookingConfirmation()

    def format_booking_summary(self, state: BookingSelectionState) -> Optional[str]:
        """Format a human-readable booking summary."""
        if not state.has_required_booking_info():
            return None

        return "\n".join([
            "Booking summary:",
            f"Vehicle: {state.vehicle.display_name}",
            f"Branch: {state.branch.name}",
            f"Service: {state.service.label}",
            f"Cost: {state.service.cost:.2f}",
            f"Date: {DateUtils.to_iso(state.date)}",
            f"Time: {state.time_slot}",
        ])

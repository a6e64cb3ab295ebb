"""
Booking-related data models.
"""

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..enums import BookingStep, StepOutcome
from ..exceptions import BookingValidationError
from .vehicle import Vehicle


class Branch(BaseModel):
    """Physical service location."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    address: Optional[str] = None


class ServiceOffering(BaseModel):
    """Bookable service type."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    label: str = Field(validation_alias=AliasChoices("label", "name"))
    # The API sends cost as a decimal string
    cost: float = Field(default=0.0, validation_alias=AliasChoices("cost", "price"))
    duration_minutes: int = Field(
        default=0,
        validation_alias=AliasChoices("duration_minutes", "durationMinutes"),
    )


class TimeSlot(BaseModel):
    """Bookable start time at a branch on one date."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    start_time: str = Field(
        validation_alias=AliasChoices("start_time", "startTime", "slot_time", "time")
    )
    is_available: bool = Field(
        default=True, validation_alias=AliasChoices("is_available", "isAvailable")
    )
    remaining_quota: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("remaining_quota", "remainingQuota"),
    )


class BookingRequest(BaseModel):
    """Payload for POST /bookings."""

    model_config = ConfigDict(frozen=True)

    vehicle_id: int = Field(serialization_alias="vehicleId")
    service_type_id: int = Field(serialization_alias="serviceTypeId")
    branch_id: int = Field(serialization_alias="branchId")
    appointment_date: dt.date = Field(serialization_alias="appointmentDate")
    appointment_time: str = Field(serialization_alias="appointmentTime")

    def to_payload(self) -> Dict[str, Any]:
        """Serialize with camelCase keys and a YYYY-MM-DD date."""
        return self.model_dump(by_alias=True, mode="json")


class BookingConfirmation(BaseModel):
    """Successful booking response."""

    model_config = ConfigDict(extra="allow")

    message: str = "Your appointment has been successfully scheduled."
    booking_id: Optional[Union[int, str]] = Field(
        default=None, validation_alias=AliasChoices("booking_id", "bookingId", "id")
    )


class WizardResult(BaseModel):
    """Outcome of one wizard operation."""

    outcome: StepOutcome
    step: BookingStep
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome == StepOutcome.OK


@dataclass
class BookingSelectionState:
    """Choices accumulated during one booking attempt."""

    # Selections, in dependency order
    vehicle: Optional[Vehicle] = None
    branch: Optional[Branch] = None
    service: Optional[ServiceOffering] = None
    date: Optional[dt.date] = None
    time_slot: Optional[str] = None

    # Result of the most recent slot fetch for (branch, date)
    available_slots: List[TimeSlot] = field(default_factory=list)
    slots_loading: bool = False

    # Set while the booking request is in flight
    submitting: bool = False

    # Flow guidance
    step: BookingStep = BookingStep.SELECT_VEHICLE

    # Versioning
    version: int = 0

    def find_slot(self, token: Optional[str]) -> Optional[TimeSlot]:
        """Return the fetched slot whose start time equals token."""
        if token is None:
            return None
        for slot in self.available_slots:
            if slot.start_time == token:
                return slot
        return None

    def selected_slot(self) -> Optional[TimeSlot]:
        return self.find_slot(self.time_slot)

    def is_consistent(self) -> bool:
        """Check the vehicle -> branch -> service -> date -> time slot chain."""
        if self.branch is None and any([self.service, self.date, self.time_slot]):
            return False
        if self.service is None and any([self.date, self.time_slot]):
            return False
        if self.date is None and self.time_slot is not None:
            return False
        return True

    def has_required_booking_info(self) -> bool:
        return all([self.vehicle, self.branch, self.service, self.date, self.time_slot])

    def to_request(self) -> BookingRequest:
        """Build the booking payload from a complete selection."""
        if not self.has_required_booking_info():
            raise BookingValidationError("Booking selection is incomplete")
        return BookingRequest(
            vehicle_id=self.vehicle.id,
            service_type_id=self.service.id,
            branch_id=self.branch.id,
            appointment_date=self.date,
            appointment_time=self.time_slot,
        )

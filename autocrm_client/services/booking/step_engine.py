"""
Step engine for managing booking wizard state.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, List, Optional

from ...core.enums import BookingStep, StepOutcome
from ...core.exceptions import BookingFlowError, BookingValidationError, SlotUnavailableError
from ...core.models.booking import BookingSelectionState, Branch, ServiceOffering, TimeSlot
from ...core.models.vehicle import Vehicle


logger = logging.getLogger(__name__)


class StepEngine:
    """Manage transitions and mutations on a BookingSelectionState."""

    _DOWNSTREAM_FIELDS: Dict[str, List[str]] = {
        "vehicle": [],
        "branch": ["service", "date", "time_slot", "available_slots", "slots_loading"],
        "service": ["date", "time_slot", "available_slots", "slots_loading"],
        "date": ["time_slot", "available_slots", "slots_loading"],
        "time_slot": [],
    }

    _FIELD_PREREQS: Dict[str, List[str]] = {
        "vehicle": [],
        "branch": ["vehicle"],
        "service": ["vehicle", "branch"],
        "date": ["vehicle", "branch", "service"],
        "time_slot": ["vehicle", "branch", "service", "date"],
    }

    _STEP_GUARDS: Dict[BookingStep, List[str]] = {
        BookingStep.SELECT_VEHICLE: ["vehicle"],
        BookingStep.CHOOSE_BRANCH: ["branch"],
        BookingStep.SELECT_SERVICE: ["service"],
        BookingStep.SELECT_DATE_TIME: ["date", "time_slot"],
    }

    _STEP_PROMPTS: Dict[BookingStep, str] = {
        BookingStep.SELECT_VEHICLE: "Please select a vehicle.",
        BookingStep.CHOOSE_BRANCH: "Please choose a branch.",
        BookingStep.SELECT_SERVICE: "Please select a service.",
        BookingStep.SELECT_DATE_TIME: "Please select a date and an available time slot.",
    }

    def __init__(self, state: BookingSelectionState) -> None:
        self.state = state

    @property
    def step(self) -> BookingStep:
        return self.state.step

    # Selections

    def select_vehicle(self, vehicle: Vehicle) -> bool:
        return self._select("vehicle", vehicle)

    def select_branch(self, branch: Branch) -> bool:
        return self._select("branch", branch)

    def select_service(self, service: ServiceOffering) -> bool:
        return self._select("service", service)

    def select_date(self, value: dt.date) -> bool:
        """Set the date. Re-picking the same date still drops the slot list."""
        return self._select("date", value, force=True)

    def select_time_slot(self, token: str) -> bool:
        """Pick one of the fetched, available slots."""
        self._validate_prereqs("time_slot")
        slot = self.state.find_slot(token)
        if slot is None:
            raise BookingValidationError(f"Time slot '{token}' is not in the current availability")
        if not slot.is_available:
            raise SlotUnavailableError(f"Time slot '{token}' is fully booked")
        return self._select("time_slot", token)

    def clear_time_slot(self) -> None:
        if self.state.time_slot is not None:
            self.state.time_slot = None
            self.state.version += 1

    def _select(self, name: str, value: Any, *, force: bool = False) -> bool:
        """Set a selection, clearing everything downstream of it if it changed."""
        if value is None:
            raise BookingValidationError(f"Cannot select an empty {name}")
        if self.state.step is BookingStep.CONFIRMATION:
            raise BookingValidationError("Booking is already confirmed")
        if self.state.submitting:
            raise BookingValidationError("A booking is being submitted")
        self._validate_prereqs(name)

        if not force and self._same(getattr(self.state, name), value):
            return False

        self.invalidate_downstream_fields(name)
        setattr(self.state, name, value)
        self.state.version += 1
        self._clamp_step()
        return True

    @staticmethod
    def _same(current: Any, new: Any) -> bool:
        if current is None:
            return False
        if hasattr(current, "id") and hasattr(new, "id"):
            return current.id == new.id
        return current == new

    def _validate_prereqs(self, name: str) -> None:
        for req in self._FIELD_PREREQS.get(name, []):
            if getattr(self.state, req) is None:
                raise BookingValidationError(f"Cannot set '{name}' before '{req}' is selected")

    def invalidate_downstream_fields(self, name: str) -> None:
        """Clear fields that depend on the given selection."""
        for field_name in self._DOWNSTREAM_FIELDS.get(name, []):
            if field_name == "available_slots":
                self.state.available_slots = []
            elif field_name == "slots_loading":
                self.state.slots_loading = False
            else:
                setattr(self.state, field_name, None)

    # Slot list

    def begin_slot_fetch(self) -> None:
        """Drop the current slot list while a new one is loading."""
        self.state.time_slot = None
        self.state.available_slots = []
        self.state.slots_loading = True

    def apply_slots(self, slots: List[TimeSlot]) -> None:
        """Replace the slot list with a fetch result."""
        self.state.available_slots = list(slots)
        self.state.slots_loading = False
        if self.state.selected_slot() is None:
            self.state.time_slot = None
        self.state.version += 1

    def clear_slots(self) -> None:
        self.state.available_slots = []
        self.state.time_slot = None
        self.state.slots_loading = False
        self.state.version += 1

    # Transitions

    def is_step_complete(self, step: Optional[BookingStep] = None) -> bool:
        """Check the guard for leaving the given (default: current) step."""
        step = self.state.step if step is None else step
        if step is BookingStep.CONFIRMATION:
            return True
        if any(getattr(self.state, name) is None for name in self._STEP_GUARDS[step]):
            return False
        if step is BookingStep.SELECT_DATE_TIME:
            slot = self.state.selected_slot()
            if slot is None or not slot.is_available:
                return False
            if self.state.slots_loading or self.state.submitting:
                return False
        return True

    def prompt_for(self, step: Optional[BookingStep] = None) -> Optional[str]:
        step = self.state.step if step is None else step
        return self._STEP_PROMPTS.get(step)

    def advance(self) -> StepOutcome:
        """Move to the next step if the current one is complete."""
        step = self.state.step
        if step is BookingStep.CONFIRMATION:
            return StepOutcome.OK
        if not self.is_step_complete(step):
            return StepOutcome.STEP_INCOMPLETE
        if step is BookingStep.SELECT_DATE_TIME:
            raise BookingFlowError("Confirmation is reached only by submitting the booking")
        self._move_to(step.next())
        return StepOutcome.OK

    def confirm(self) -> None:
        """Enter the terminal step after a successful submission."""
        if self.state.step is not BookingStep.SELECT_DATE_TIME or not self.is_step_complete():
            raise BookingFlowError("Cannot confirm an incomplete booking")
        self._move_to(BookingStep.CONFIRMATION)

    def back(self) -> bool:
        """Go back one step. No-op on the first and terminal steps and during submission."""
        step = self.state.step
        if step in (BookingStep.SELECT_VEHICLE, BookingStep.CONFIRMATION) or self.state.submitting:
            return False
        self._move_to(step.previous())
        return True

    def reset(self) -> None:
        prev_step = self.state.step
        version = self.state.version
        for name, default in BookingSelectionState.__dataclass_fields__.items():
            if name == "available_slots":
                self.state.available_slots = []
            else:
                setattr(self.state, name, default.default)
        self.state.version = version + 1
        if prev_step != self.state.step:
            self._log_step_transition(prev_step, self.state.step)

    def _clamp_step(self) -> None:
        """Pull the step back if a prerequisite of the current step was cleared."""
        for step in BookingStep:
            if step >= self.state.step:
                return
            if not all(getattr(self.state, name) is not None for name in self._STEP_GUARDS[step]):
                self._move_to(step)
                return

    def _move_to(self, step: BookingStep) -> None:
        prev_step = self.state.step
        self.state.step = step
        if prev_step != step:
            self._log_step_transition(prev_step, step)

    def _log_step_transition(self, from_step: BookingStep, to_step: BookingStep) -> None:
        logger.debug("booking step: %s -> %s", from_step.name, to_step.name)

"""
Tests for the booking step engine.
"""

from datetime import date

import pytest

from autocrm_client.core.enums import BookingStep, StepOutcome
from autocrm_client.core.exceptions import BookingFlowError, BookingValidationError, SlotUnavailableError
from autocrm_client.core.models import BookingSelectionState, TimeSlot
from autocrm_client.services.booking import StepEngine


D1 = date(2025, 6, 10)
D2 = date(2025, 6, 11)


@pytest.fixture
def full_state(vehicle, branch, service, slots):
    return BookingSelectionState(
        vehicle=vehicle,
        branch=branch,
        service=service,
        date=D1,
        time_slot="09:00",
        available_slots=list(slots),
        step=BookingStep.SELECT_DATE_TIME,
    )


class TestSelections:
    """Selection and invalidation rules."""

    def test_branch_change_clears_dependent_fields(self, full_state, other_branch):
        engine = StepEngine(full_state)
        assert engine.select_branch(other_branch) is True
        assert full_state.branch == other_branch
        assert full_state.service is None
        assert full_state.date is None
        assert full_state.time_slot is None
        assert full_state.available_slots == []
        assert full_state.is_consistent()

    def test_same_branch_keeps_dependent_fields(self, full_state, branch):
        engine = StepEngine(full_state)
        assert engine.select_branch(branch.model_copy()) is False
        assert full_state.service is not None
        assert full_state.time_slot == "09:00"

    def test_service_change_clears_date_and_slot_only(self, full_state, branch, other_service):
        engine = StepEngine(full_state)
        engine.select_service(other_service)
        assert full_state.branch == branch
        assert full_state.service == other_service
        assert full_state.date is None
        assert full_state.time_slot is None
        assert full_state.is_consistent()

    def test_date_change_clears_time_slot(self, full_state):
        engine = StepEngine(full_state)
        engine.select_date(D2)
        assert full_state.date == D2
        assert full_state.time_slot is None
        assert full_state.available_slots == []
        assert full_state.service is not None

    def test_vehicle_change_keeps_other_selections(self, full_state, vehicle):
        engine = StepEngine(full_state)
        engine.select_vehicle(vehicle.model_copy(update={"id": 8}))
        assert full_state.vehicle.id == 8
        assert full_state.branch is not None
        assert full_state.time_slot == "09:00"

    def test_service_before_branch_is_rejected(self, vehicle, service):
        state = BookingSelectionState(vehicle=vehicle)
        with pytest.raises(BookingValidationError):
            StepEngine(state).select_service(service)
        assert state.service is None

    def test_date_before_service_is_rejected(self, vehicle, branch):
        state = BookingSelectionState(vehicle=vehicle, branch=branch)
        with pytest.raises(BookingValidationError):
            StepEngine(state).select_date(D1)

    def test_time_slot_must_be_in_fetched_list(self, full_state):
        engine = StepEngine(full_state)
        with pytest.raises(BookingValidationError):
            engine.select_time_slot("11:00")
        assert full_state.time_slot == "09:00"

    def test_unavailable_time_slot_is_not_selectable(self, full_state):
        engine = StepEngine(full_state)
        with pytest.raises(SlotUnavailableError):
            engine.select_time_slot("10:00")
        assert full_state.time_slot == "09:00"

    def test_branch_change_pulls_step_back(self, full_state, other_branch):
        engine = StepEngine(full_state)
        engine.select_branch(other_branch)
        assert engine.step == BookingStep.SELECT_SERVICE

    def test_date_change_keeps_date_time_step(self, full_state):
        engine = StepEngine(full_state)
        engine.select_date(D2)
        assert engine.step == BookingStep.SELECT_DATE_TIME


class TestTransitions:
    """Step guards and navigation."""

    def test_initial_step(self):
        assert StepEngine(BookingSelectionState()).step == BookingStep.SELECT_VEHICLE

    def test_advance_without_vehicle_is_incomplete(self):
        state = BookingSelectionState()
        engine = StepEngine(state)
        assert engine.advance() == StepOutcome.STEP_INCOMPLETE
        assert engine.step == BookingStep.SELECT_VEHICLE
        assert state.version == 0

    def test_advance_through_selection_steps(self, vehicle, branch, service):
        state = BookingSelectionState()
        engine = StepEngine(state)

        engine.select_vehicle(vehicle)
        assert engine.advance() == StepOutcome.OK
        assert engine.step == BookingStep.CHOOSE_BRANCH

        assert engine.advance() == StepOutcome.STEP_INCOMPLETE
        engine.select_branch(branch)
        assert engine.advance() == StepOutcome.OK
        assert engine.step == BookingStep.SELECT_SERVICE

        engine.select_service(service)
        assert engine.advance() == StepOutcome.OK
        assert engine.step == BookingStep.SELECT_DATE_TIME

    def test_unavailable_selected_slot_blocks_advance(self, vehicle, branch, service):
        state = BookingSelectionState(
            vehicle=vehicle,
            branch=branch,
            service=service,
            date=D1,
            time_slot="10:00",
            available_slots=[TimeSlot(start_time="10:00", is_available=False, remaining_quota=0)],
            step=BookingStep.SELECT_DATE_TIME,
        )
        engine = StepEngine(state)
        assert engine.is_step_complete() is False
        assert engine.advance() == StepOutcome.STEP_INCOMPLETE
        assert engine.step == BookingStep.SELECT_DATE_TIME

    def test_loading_slots_blocks_advance(self, full_state):
        full_state.slots_loading = True
        assert StepEngine(full_state).is_step_complete() is False

    def test_date_time_step_requires_submission(self, full_state):
        engine = StepEngine(full_state)
        assert engine.is_step_complete() is True
        with pytest.raises(BookingFlowError):
            engine.advance()

    def test_confirm_enters_terminal_step(self, full_state):
        engine = StepEngine(full_state)
        engine.confirm()
        assert engine.step == BookingStep.CONFIRMATION
        assert engine.back() is False
        assert engine.step == BookingStep.CONFIRMATION

    def test_confirm_rejects_incomplete_selection(self, full_state):
        full_state.time_slot = None
        with pytest.raises(BookingFlowError):
            StepEngine(full_state).confirm()

    def test_selection_after_confirmation_is_rejected(self, full_state, other_branch):
        engine = StepEngine(full_state)
        engine.confirm()
        with pytest.raises(BookingValidationError):
            engine.select_branch(other_branch)

    def test_back_keeps_selections(self, full_state):
        engine = StepEngine(full_state)
        assert engine.back() is True
        assert engine.step == BookingStep.SELECT_SERVICE
        assert full_state.time_slot == "09:00"
        assert full_state.date == D1

    def test_back_on_first_step_is_noop(self):
        engine = StepEngine(BookingSelectionState())
        assert engine.back() is False
        assert engine.step == BookingStep.SELECT_VEHICLE

    def test_reset_clears_everything(self, full_state):
        engine = StepEngine(full_state)
        engine.reset()
        assert full_state.vehicle is None
        assert full_state.branch is None
        assert full_state.available_slots == []
        assert full_state.step == BookingStep.SELECT_VEHICLE

    def test_submission_in_flight_locks_selection(self, full_state, other_branch):
        full_state.submitting = True
        engine = StepEngine(full_state)

        assert engine.is_step_complete() is False
        with pytest.raises(BookingValidationError):
            engine.select_branch(other_branch)
        with pytest.raises(BookingValidationError):
            engine.select_date(D2)
        assert engine.back() is False
        assert full_state.branch.id == 1
        assert full_state.time_slot == "09:00"
        assert full_state.step == BookingStep.SELECT_DATE_TIME

    def test_prompt_for_step(self):
        engine = StepEngine(BookingSelectionState())
        assert "vehicle" in engine.prompt_for()
        assert engine.prompt_for(BookingStep.CONFIRMATION) is None


class TestSlotList:
    """Slot list replacement."""

    def test_apply_slots_replaces_list(self, full_state):
        engine = StepEngine(full_state)
        fresh = [TimeSlot(start_time="13:00", is_available=True, remaining_quota=1)]
        engine.apply_slots(fresh)
        assert full_state.available_slots == fresh
        assert full_state.time_slot is None
        assert full_state.slots_loading is False

    def test_begin_slot_fetch_marks_loading(self, full_state):
        engine = StepEngine(full_state)
        engine.begin_slot_fetch()
        assert full_state.slots_loading is True
        assert full_state.available_slots == []
        assert full_state.time_slot is None

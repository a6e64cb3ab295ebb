"""
Booking wizard controller.

Drives a single booking attempt: selections go through the StepEngine, date
changes trigger a slot fetch, and the final step submits the booking. Every
collaborator error is turned into a WizardResult here so the caller always
finds the wizard in a well-defined step.

Slot fetches follow last-request-wins: each fetch is tagged with the query it
was issued for, and a result whose query is no longer current is dropped.
"""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
from dataclasses import dataclass
from typing import List, Optional

from ...config import Settings, get_settings
from ...core.enums import BookingStep, StepOutcome
from ...core.exceptions import (
    AuthError,
    BookingFlowError,
    BookingValidationError,
    ExternalAPIError,
    NetworkError,
    QuotaExceededError,
    ServerError,
)
from ...core.models.booking import (
    BookingConfirmation,
    BookingRequest,
    BookingSelectionState,
    Branch,
    ServiceOffering,
    WizardResult,
)
from ...core.models.vehicle import Vehicle
from ...utils.date import DateUtils
from .ports import AvailabilityFetcher, BookingSubmitter
from .service import BookingService
from .step_engine import StepEngine


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotQuery:
    """Tag identifying one slot fetch."""

    branch_id: int
    date: dt.date
    seq: int


class BookingWizard:
    """Controller for the multi-step booking flow."""

    def __init__(
        self,
        fetcher: AvailabilityFetcher,
        submitter: BookingSubmitter,
        catalog: Optional[BookingService] = None,
        state: Optional[BookingSelectionState] = None,
        settings: Optional[Settings] = None,
        date_utils: Optional[DateUtils] = None,
    ):
        settings = settings or get_settings()
        self.fetcher = fetcher
        self.submitter = submitter
        self.catalog = catalog
        self.state = state or BookingSelectionState()
        self.engine = StepEngine(self.state)
        self.fetch_timeout = settings.slot_fetch_timeout
        self.date_utils = date_utils or DateUtils(settings.timezone)

        self.vehicles: List[Vehicle] = []
        self.branches: List[Branch] = []
        self.services: List[ServiceOffering] = []

        self.auth_required = False
        self.last_error: Optional[str] = None
        self.confirmation: Optional[BookingConfirmation] = None

        self._query: Optional[SlotQuery] = None
        self._seq = 0

    @classmethod
    def from_service(cls, booking_service: BookingService, **kwargs) -> "BookingWizard":
        """Build a wizard that uses one BookingService for every collaborator."""
        return cls(booking_service, booking_service, catalog=booking_service, **kwargs)

    @property
    def step(self) -> BookingStep:
        return self.state.step

    @property
    def is_fetching(self) -> bool:
        return self.state.slots_loading

    def _result(self, outcome: StepOutcome, message: Optional[str] = None) -> WizardResult:
        if outcome not in (StepOutcome.OK, StepOutcome.SUPERSEDED):
            self.last_error = message
        return WizardResult(outcome=outcome, step=self.state.step, message=message)

    # Options

    async def load_options(self) -> WizardResult:
        """
        Load the vehicles, branches and service types to choose from.

        A list that fails to load is left empty. If the customer owns exactly
        one vehicle it is preselected.
        """
        if self.catalog is None:
            raise BookingFlowError("No booking catalog configured")

        failures = []
        loaders = [
            ("vehicles", self.catalog.get_vehicles),
            ("branches", self.catalog.get_branches),
            ("services", self.catalog.get_service_types),
        ]
        for name, loader in loaders:
            try:
                setattr(self, name, await loader())
            except AuthError as e:
                return self._auth_failed(e)
            except ExternalAPIError as e:
                logger.error("Failed to load %s: %s", name, e)
                setattr(self, name, [])
                failures.append(name)

        if len(self.vehicles) == 1 and self.state.vehicle is None:
            self.engine.select_vehicle(self.vehicles[0])

        if failures:
            return self._result(
                StepOutcome.NETWORK_ERROR, f"Failed to load {', '.join(failures)}."
            )
        return self._result(StepOutcome.OK)

    # Selections

    def select_vehicle(self, vehicle: Vehicle) -> WizardResult:
        return self._apply(self.engine.select_vehicle, vehicle)

    def select_branch(self, branch: Branch) -> WizardResult:
        """Pick a branch. A different branch drops service, date and slots."""
        return self._apply(self.engine.select_branch, branch, supersedes_fetch=True)

    def select_service(self, service: ServiceOffering) -> WizardResult:
        return self._apply(self.engine.select_service, service, supersedes_fetch=True)

    def select_time_slot(self, token: str) -> WizardResult:
        return self._apply(self.engine.select_time_slot, token)

    def _apply(self, select, value, supersedes_fetch: bool = False) -> WizardResult:
        try:
            changed = select(value)
        except BookingValidationError as e:
            return self._result(StepOutcome.INVALID_SELECTION, str(e))
        if changed and supersedes_fetch:
            self._query = None
        return self._result(StepOutcome.OK)

    async def select_date(self, value: dt.date) -> WizardResult:
        """Pick a date and load its time slots."""
        if self.date_utils.is_past(value):
            return self._result(
                StepOutcome.INVALID_SELECTION, "Please select today or a future date."
            )
        try:
            self.engine.select_date(value)
        except BookingValidationError as e:
            return self._result(StepOutcome.INVALID_SELECTION, str(e))
        return await self._refresh_slots()

    async def refresh_slots(self) -> WizardResult:
        """Reload the slots for the current branch and date."""
        if self.state.branch is None or self.state.date is None:
            return self._result(StepOutcome.STEP_INCOMPLETE, self.engine.prompt_for())
        if self.state.submitting:
            return self._result(StepOutcome.INVALID_SELECTION, "A booking is being submitted")
        return await self._refresh_slots()

    async def _refresh_slots(self) -> WizardResult:
        self._seq += 1
        query = SlotQuery(self.state.branch.id, self.state.date, self._seq)
        self._query = query
        self.engine.begin_slot_fetch()

        error: Optional[ExternalAPIError] = None
        slots = []
        try:
            slots = await asyncio.wait_for(
                self.fetcher.fetch_time_slots(query.branch_id, query.date),
                timeout=self.fetch_timeout,
            )
        except asyncio.TimeoutError:
            error = NetworkError("Timed out loading time slots")
        except ExternalAPIError as e:
            error = e
        except BaseException:
            if self._is_current(query):
                self._query = None
                self.engine.clear_slots()
            raise

        if not self._is_current(query):
            logger.debug("Discarding stale time slots for %s", query)
            return self._result(StepOutcome.SUPERSEDED)
        self._query = None

        if error is None:
            self.engine.apply_slots(slots)
            self.last_error = None
            return self._result(StepOutcome.OK)

        self.engine.clear_slots()
        if isinstance(error, AuthError):
            return self._auth_failed(error)
        logger.warning(
            "Time slot fetch failed for branch=%s date=%s: %s",
            query.branch_id,
            query.date,
            error,
        )
        if isinstance(error, NetworkError):
            return self._result(
                StepOutcome.NETWORK_ERROR, "Unable to load time slots for this date."
            )
        return self._result(StepOutcome.SERVER_ERROR, "Unable to load time slots for this date.")

    def _is_current(self, query: SlotQuery) -> bool:
        return (
            self._query == query
            and self.state.branch is not None
            and self.state.branch.id == query.branch_id
            and self.state.date == query.date
        )

    def _auth_failed(self, error: AuthError) -> WizardResult:
        logger.warning("CRM API rejected credentials: %s", error)
        self.auth_required = True
        return self._result(StepOutcome.AUTH_REQUIRED, error.message)

    # Transitions

    async def advance(self) -> WizardResult:
        """Move forward; on the date/time step this submits the booking."""
        if self.state.step is not BookingStep.SELECT_DATE_TIME:
            outcome = self.engine.advance()
            message = self.engine.prompt_for() if outcome == StepOutcome.STEP_INCOMPLETE else None
            return self._result(outcome, message)

        if not self.engine.is_step_complete():
            return self._result(StepOutcome.STEP_INCOMPLETE, self.engine.prompt_for())
        return await self._submit()

    async def _submit(self) -> WizardResult:
        request = self.state.to_request()
        try:
            confirmation = await self._send(request)
        except QuotaExceededError as e:
            logger.info("Slot %s filled up before submission, refreshing", request.appointment_time)
            self.engine.clear_time_slot()
            await self.refresh_slots()
            return self._result(StepOutcome.QUOTA_EXCEEDED, e.message)
        except AuthError as e:
            return self._auth_failed(e)
        except NetworkError as e:
            return self._result(StepOutcome.NETWORK_ERROR, e.message)
        except ServerError as e:
            return self._result(StepOutcome.SERVER_ERROR, e.message)
        except ExternalAPIError as e:
            return self._result(StepOutcome.REJECTED, e.message)

        self.confirmation = confirmation
        self.last_error = None
        try:
            self.engine.confirm()
        except BookingFlowError:
            # Booked on the server, but the selection was reset meanwhile
            logger.warning("Booking %s created after the selection changed", confirmation.booking_id)
        return self._result(StepOutcome.OK, confirmation.message)

    async def _send(self, request: BookingRequest) -> BookingConfirmation:
        self.state.submitting = True
        try:
            return await self.submitter.submit_booking(request)
        finally:
            self.state.submitting = False

    def back(self) -> WizardResult:
        self.engine.back()
        return self._result(StepOutcome.OK)

    def reset(self) -> None:
        """Start over with an empty selection."""
        self._query = None
        self.engine.reset()
        self.confirmation = None
        self.last_error = None

    def reauthenticated(self) -> None:
        """Clear the re-authentication signal once the user signed in again."""
        self.auth_required = False

    def summary(self) -> Optional[str]:
        if self.catalog is None:
            return None
        return self.catalog.format_booking_summary(self.state)

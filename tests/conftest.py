"""
Pytest configuration and fixtures.
"""

import asyncio
from datetime import date
from typing import Dict, List

import pytest
from unittest.mock import Mock, AsyncMock

from autocrm_client.config import Settings
from autocrm_client.core.models import Branch, ServiceOffering, TimeSlot, Vehicle
from autocrm_client.services.booking import (
    AvailabilityFetcher,
    BookingService,
    BookingSubmitter,
    BookingWizard,
)
from autocrm_client.services.external import ExternalAPIService
from autocrm_client.utils.date import DateUtils


TODAY = date(2025, 6, 1)


class FixedDateUtils(DateUtils):
    """DateUtils with a frozen 'today'."""

    def __init__(self, today: date = TODAY):
        super().__init__("UTC")
        self._today = today

    def today(self) -> date:
        return self._today


class ControlledFetcher(AvailabilityFetcher):
    """Fetcher whose responses the test resolves by hand."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.pending: Dict[date, asyncio.Future] = {}

    async def fetch_time_slots(self, branch_id: int, date: date) -> List[TimeSlot]:
        self.calls.append((branch_id, date))
        future = asyncio.get_running_loop().create_future()
        self.pending[date] = future
        return await future


class StaticFetcher(AvailabilityFetcher):
    """Fetcher that answers every query from a list of results or errors."""

    def __init__(self, *results):
        self.calls: List[tuple] = []
        self.results = list(results)

    async def fetch_time_slots(self, branch_id: int, date: date) -> List[TimeSlot]:
        self.calls.append((branch_id, date))
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


async def settle(rounds: int = 10) -> None:
    """Let pending tasks run up to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def settings():
    return Settings(
        api_base_url="http://crm.test",
        api_token="test-token",
        request_timeout=5.0,
        slot_fetch_timeout=1.0,
        timezone="UTC",
    )


@pytest.fixture
def date_utils():
    return FixedDateUtils()


@pytest.fixture
def vehicle():
    return Vehicle(id=7, brand="Toyota", model="Corolla", license_plate="34 ABC 123", vin="JT123")


@pytest.fixture
def branch():
    return Branch(id=1, name="Kadikoy")


@pytest.fixture
def other_branch():
    return Branch(id=2, name="Besiktas")


@pytest.fixture
def service():
    return ServiceOffering(id=11, label="Oil change", cost=450.0, duration_minutes=45)


@pytest.fixture
def other_service():
    return ServiceOffering(id=12, label="Brake inspection", cost=300.0, duration_minutes=30)


@pytest.fixture
def slots():
    return [
        TimeSlot(start_time="09:00", is_available=True, remaining_quota=2),
        TimeSlot(start_time="10:00", is_available=False, remaining_quota=0),
    ]


@pytest.fixture
def mock_external_api():
    """Mock external API service."""
    api = Mock(spec=ExternalAPIService)
    api.get_vehicles = AsyncMock(return_value=[
        {"id": 7, "brand": "Toyota", "model": "Corolla", "license_plate": "34 ABC 123", "vin": "JT123"}
    ])
    api.get_branches = AsyncMock(return_value=[{"id": 1, "name": "Kadikoy", "address": "Moda Cd."}])
    api.get_service_types = AsyncMock(return_value=[
        {"id": 11, "label": "Oil change", "cost": "450.00", "durationMinutes": 45}
    ])
    api.get_time_slots = AsyncMock(return_value=[
        {"slot_time": "10:00", "is_available": False, "remaining_quota": 0},
        {"slot_time": "09:00", "is_available": True, "remaining_quota": 2},
    ])
    api.create_booking = AsyncMock(return_value={"message": "Booked", "bookingId": 99})
    api.get_vehicle = AsyncMock()
    api.create_vehicle = AsyncMock(return_value={"message": "Vehicle registered"})
    api.update_vehicle = AsyncMock(return_value={"message": "Vehicle updated"})
    api.get_campaigns = AsyncMock(return_value=[])
    api.book_campaign = AsyncMock(return_value={"message": "ok"})
    api.cancel_campaign = AsyncMock(return_value={"message": "ok"})
    api.get_notifications = AsyncMock(return_value=[])
    api.mark_notification_read = AsyncMock(return_value=None)
    api.subscribe_newsletter = AsyncMock(return_value={"message": "Subscribed"})
    return api


@pytest.fixture
def booking_service(mock_external_api):
    """Create booking service with mocked dependencies."""
    return BookingService(mock_external_api)


@pytest.fixture
def submitter():
    sub = Mock(spec=BookingSubmitter)
    sub.submit_booking = AsyncMock()
    return sub


@pytest.fixture
def make_wizard(settings, date_utils, submitter):
    """Factory for a wizard around a given fetcher."""

    def _make(fetcher, **kwargs):
        kwargs.setdefault("submitter", submitter)
        return BookingWizard(fetcher, settings=settings, date_utils=date_utils, **kwargs)

    return _make

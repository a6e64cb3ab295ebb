"""
Booking service module.
"""

from .ports import AvailabilityFetcher, BookingSubmitter
from .service import BookingService
from .step_engine import StepEngine
from .wizard import BookingWizard, SlotQuery

__all__ = [
    "AvailabilityFetcher",
    "BookingSubmitter",
    "BookingService",
    "StepEngine",
    "BookingWizard",
    "SlotQuery",
]

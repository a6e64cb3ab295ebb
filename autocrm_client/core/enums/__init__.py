"""
Enums for the AutoCRM client.
"""

from .booking import BookingStep, StepOutcome
from .campaign import CampaignPriority
from .notification import NotificationType

__all__ = [
    "BookingStep",
    "StepOutcome",
    "CampaignPriority",
    "NotificationType",
]

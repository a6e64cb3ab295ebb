"""
Core data models for the AutoCRM client.
"""

from .vehicle import Vehicle, VehicleDetails, VehicleForm
from .booking import (
    Branch,
    ServiceOffering,
    TimeSlot,
    BookingRequest,
    BookingConfirmation,
    BookingSelectionState,
    WizardResult,
)
from .campaign import Campaign, CampaignBoard
from .notification import Notification
from .newsletter import NewsletterSubscription, NotificationChannels, NewsletterPreferences

__all__ = [
    "Vehicle",
    "VehicleDetails",
    "VehicleForm",
    "Branch",
    "ServiceOffering",
    "TimeSlot",
    "BookingRequest",
    "BookingConfirmation",
    "BookingSelectionState",
    "WizardResult",
    "Campaign",
    "CampaignBoard",
    "Notification",
    "NewsletterSubscription",
    "NotificationChannels",
    "NewsletterPreferences",
]

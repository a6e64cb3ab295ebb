"""
Service layer for the AutoCRM client.
"""

from .external import ExternalAPIService
from .booking import BookingService, BookingWizard, StepEngine
from .vehicle import VehicleService
from .campaign import CampaignService
from .notification import NotificationService
from .newsletter import NewsletterService

__all__ = [
    "ExternalAPIService",
    "BookingService",
    "BookingWizard",
    "StepEngine",
    "VehicleService",
    "CampaignService",
    "NotificationService",
    "NewsletterService",
]

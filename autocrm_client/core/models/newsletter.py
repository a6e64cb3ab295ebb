"""
Newsletter subscription models.
"""

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict, Field


class NotificationChannels(BaseModel):
    """Channels the customer wants to be contacted through."""

    email: bool = True
    sms: bool = False
    phone: bool = False


class NewsletterPreferences(BaseModel):
    """Newsletter content preferences."""

    model_config = ConfigDict(populate_by_name=True)

    weekly_digest: bool = Field(default=True, serialization_alias="weeklyDigest")
    monthly_offers: bool = Field(default=False, serialization_alias="monthlyOffers")
    reminders: bool = False


class NewsletterSubscription(BaseModel):
    """Newsletter sign-up form."""

    email: str = ""
    phone: str = ""
    notifications: NotificationChannels = Field(default_factory=NotificationChannels)
    preferences: NewsletterPreferences = Field(default_factory=NewsletterPreferences)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

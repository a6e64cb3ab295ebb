"""
External API configuration.
"""

from typing import Optional
from pydantic import BaseModel

from .settings import Settings


class ExternalAPIConfig(BaseModel):
    """CRM REST API configuration and endpoint URLs."""

    base_url: str = "http://localhost:3007"
    api_token: Optional[str] = None
    timeout: float = 15.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExternalAPIConfig":
        """Build the API config from application settings."""
        return cls(
            base_url=settings.api_base_url,
            api_token=settings.api_token,
            timeout=settings.request_timeout,
        )

    def url(self, path: str) -> str:
        """Join an API path onto the base URL."""
        return f"{self.base_url.rstrip('/')}/api/{path.lstrip('/')}"

    def get_vehicles_url(self) -> str:
        return self.url("vehicles")

    def get_vehicle_url(self, vehicle_id: int) -> str:
        return self.url(f"vehicles/{vehicle_id}")

    def get_branches_url(self) -> str:
        return self.url("branch")

    def get_service_types_url(self) -> str:
        return self.url("servicetype")

    def get_time_slots_url(self) -> str:
        return self.url("timeslots")

    def get_bookings_url(self) -> str:
        return self.url("bookings")

    def get_campaigns_url(self) -> str:
        return self.url("campaigns")

    def get_campaign_action_url(self, campaign_id: int, action: str) -> str:
        """Get the book/cancel URL for a campaign."""
        return self.url(f"campaigns/{campaign_id}/{action}")

    def get_notifications_url(self, email: str) -> str:
        return self.url(f"notifications/{email}")

    def get_mark_read_url(self, notification_id: int) -> str:
        return self.url(f"notifications/mark-read/{notification_id}")

    def get_newsletter_url(self) -> str:
        return self.url("newsletter")

    def is_authenticated(self) -> bool:
        """Check if a bearer token is configured."""
        return bool(self.api_token)

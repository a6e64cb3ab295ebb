"""
Service campaign models.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict

from ..enums import CampaignPriority


class Campaign(BaseModel):
    """Maintenance campaign offered to the customer."""

    model_config = ConfigDict(extra="forbid")

    id: int
    title: str
    description: Optional[str] = None
    type: str = "General"
    priority: CampaignPriority = CampaignPriority.UNKNOWN
    brand: str = "All"
    model: str = "All"
    year: int = 0
    discount_percent: Optional[float] = None
    valid_until: Optional[str] = None
    booked_by_user: bool = False

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Campaign":
        """Map a raw campaign record from the API."""
        return cls(
            id=data["id"],
            title=data.get("campaign_title") or data.get("title") or "",
            description=data.get("description"),
            type=data.get("maintenance_type") or "General",
            priority=CampaignPriority.from_string(data.get("priority") or ""),
            brand=data.get("brand_filter") or "All",
            model=data.get("model_filter") or "All",
            year=data.get("year_filter") or 0,
            discount_percent=data.get("discount_percent") or None,
            valid_until=data.get("validUntil"),
            booked_by_user=bool(data.get("bookedByUser")),
        )

    @property
    def discount_label(self) -> Optional[str]:
        if not self.discount_percent:
            return None
        return f"{self.discount_percent:g}% OFF"


@dataclass
class CampaignBoard:
    """Campaigns split into those the user booked and those still open."""

    active: List[Campaign] = field(default_factory=list)
    available: List[Campaign] = field(default_factory=list)

    @classmethod
    def from_campaigns(cls, campaigns: List[Campaign]) -> "CampaignBoard":
        return cls(
            active=[c for c in campaigns if c.booked_by_user],
            available=[c for c in campaigns if not c.booked_by_user],
        )

    def mark_booked(self, campaign: Campaign) -> None:
        self.available = [c for c in self.available if c.id != campaign.id]
        self.active.append(campaign.model_copy(update={"booked_by_user": True}))

    def mark_cancelled(self, campaign: Campaign) -> None:
        self.active = [c for c in self.active if c.id != campaign.id]
        self.available.append(campaign.model_copy(update={"booked_by_user": False}))

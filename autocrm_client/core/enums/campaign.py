"""
Campaign-related enums.
"""

from enum import Enum


class CampaignPriority(str, Enum):
    """Priority of a service campaign."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str) -> "CampaignPriority":
        """Convert an API priority string, falling back to UNKNOWN."""
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN

    @property
    def color(self) -> str:
        return {
            CampaignPriority.HIGH: "#e53935",
            CampaignPriority.MEDIUM: "#fb8c00",
            CampaignPriority.LOW: "#4caf50",
        }.get(self, "#9e9e9e")

"""
Date utilities for values crossing the API boundary.
"""

from datetime import date, datetime
from typing import Optional
import pytz

from ..config import get_settings


class DateUtils:
    """Calendar date helpers bound to the configured timezone."""

    def __init__(self, timezone: Optional[str] = None):
        self.tz = pytz.timezone(timezone or get_settings().timezone)

    def today(self) -> date:
        """Today's date in the configured timezone."""
        return datetime.now(self.tz).date()

    def is_past(self, value: date) -> bool:
        """Check if value is before today. Today itself is bookable."""
        return value < self.today()

    @staticmethod
    def to_iso(value: date) -> str:
        """Format a calendar date as YYYY-MM-DD."""
        return value.strftime("%Y-%m-%d")

    @staticmethod
    def from_iso(value: str) -> Optional[date]:
        """
        Parse a YYYY-MM-DD string.

        Args:
            value: Date string, optionally followed by a time part

        Returns:
            The calendar date or None if the string is not a valid date
        """
        if not value:
            return None
        try:
            return datetime.strptime(value[:10], "%Y-%m-%d").date()
        except ValueError:
            return None

"""
Notification-related enums.
"""

from enum import Enum


class NotificationType(str, Enum):
    """Notification categories, plus the two list filters."""

    SERVICE = "Service"
    CAMPAIGN = "Campaign"
    NEWSLETTER = "Newsletter"
    ALL = "All"
    UNREAD = "Unread"

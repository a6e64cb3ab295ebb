"""
Notification service module.
"""

from .service import NotificationService

__all__ = ["NotificationService"]

"""
Notification service for the customer's in-app notifications.
"""

from typing import List, Union

from ...core.enums import NotificationType
from ...core.models.notification import Notification
from ...utils.validation import ValidationUtils
from ..external import ExternalAPIService


class NotificationService:
    """Service for handling notifications."""

    def __init__(self, external_api: ExternalAPIService):
        self.external_api = external_api

    async def list_notifications(self, email: str) -> List[Notification]:
        items = await self.external_api.get_notifications(email)
        return ValidationUtils.parse_records(Notification, items)

    async def mark_read(self, notifications: List[Notification], notification_id: int) -> None:
        """Mark a notification as read on the server and in the local list."""
        await self.external_api.mark_notification_read(notification_id)
        for notification in notifications:
            if notification.id == notification_id:
                notification.is_read = True

    @staticmethod
    def unread_count(notifications: List[Notification]) -> int:
        return sum(1 for n in notifications if not n.is_read)

    @staticmethod
    def filter_by_type(
        notifications: List[Notification],
        kind: Union[NotificationType, str] = NotificationType.ALL,
    ) -> List[Notification]:
        """Filter by category; ALL keeps everything and UNREAD keeps unread ones."""
        kind = NotificationType(kind)
        if kind is NotificationType.ALL:
            return list(notifications)
        if kind is NotificationType.UNREAD:
            return [n for n in notifications if not n.is_read]
        return [n for n in notifications if n.type == kind.value]

"""
Notification models.
"""

from pydantic import BaseModel, ConfigDict


class Notification(BaseModel):
    """In-app notification for the customer."""

    model_config = ConfigDict(extra="ignore")

    id: int
    title: str
    message: str
    type: str = "Service"
    is_read: bool = False

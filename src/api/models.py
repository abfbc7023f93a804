"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from typing import Any

from pydantic import BaseModel, EmailStr, Field

from src.api.notifications import Notification, NotificationType


class RepeatActivationRequest(BaseModel):
    """Request model for re-sending an activation link."""

    email: EmailStr


class NotificationModel(BaseModel):
    """Serialized flash notification."""

    type: NotificationType
    text: str

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationModel":
        return cls(type=notification.type, text=notification.text)


class StatusResponse(BaseModel):
    """Standard envelope: status keyword, optional data, notifications."""

    status: str
    data: dict[str, Any] | None = None
    notifications: list[NotificationModel] = Field(default_factory=list)


class SentPageData(BaseModel):
    """Data needed to render the "activation sent" page."""

    access_mode_any: bool
    captcha_key: str | None = None

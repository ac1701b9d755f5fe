"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NotificationSummaryRead(_CamelModel):
    """Notification entry as rendered by the notification bell."""

    id: int
    complaint_id: int
    subject: str
    tracking_number: str
    priority: str
    created_at: datetime | None = None
    is_read: bool


class NotificationFeedRead(_CamelModel):
    """Latest notifications of the caller plus the unread total."""

    notifications: list[NotificationSummaryRead] = Field(default_factory=list)
    total: int = 0


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark one notification, or all of them, as read."""

    id: int | None = Field(
        default=None,
        description="Identificador de la notificación; si se omite se marcan todas",
    )


class NotificationDeleteRequest(BaseModel):
    """Payload used to hide a notification from the feed."""

    id: int | None = Field(default=None, description="Identificador de la notificación")


class AcknowledgementResponse(BaseModel):
    """Plain acknowledgement returned by notification mutations."""

    success: bool = True


class ConnectionStatsRead(_CamelModel):
    connection_count: int
    total_connections: int


__all__ = [
    "AcknowledgementResponse",
    "ConnectionStatsRead",
    "NotificationDeleteRequest",
    "NotificationFeedRead",
    "NotificationMarkReadRequest",
    "NotificationSummaryRead",
]

"""Domain entities describing per-user complaint notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Notification:
    """Ties one staff user to one complaint they should be told about."""

    id: int | None
    user_id: int
    complaint_id: int
    is_read: bool = False
    is_deleted: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class NotificationSummary:
    """Notification joined with the complaint fields shown in the bell."""

    id: int
    complaint_id: int
    subject: str
    tracking_number: str
    priority: str
    status: str
    created_at: datetime | None
    is_read: bool


@dataclass(frozen=True)
class NotificationFeed:
    """Most recent notifications of a user plus their unread count."""

    notifications: list[NotificationSummary] = field(default_factory=list)
    total: int = 0


__all__ = ["Notification", "NotificationFeed", "NotificationSummary"]

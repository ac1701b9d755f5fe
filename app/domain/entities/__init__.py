"""Domain entities exposed by the application."""

from .complaint import (
    COMPLAINT_CATEGORIES,
    COMPLAINT_PRIORITIES,
    COMPLAINT_STATUSES,
    COMPLAINT_STATUS_ARCHIVED,
    COMPLAINT_STATUS_NEW,
    COMPLAINT_STATUS_PIPELINE,
    Complaint,
)
from .notification import Notification, NotificationFeed, NotificationSummary
from .role import DEFAULT_ROLES, ROLE_ADMIN, ROLE_VIEWER, Role
from .user import User

__all__ = [
    "COMPLAINT_CATEGORIES",
    "COMPLAINT_PRIORITIES",
    "COMPLAINT_STATUSES",
    "COMPLAINT_STATUS_ARCHIVED",
    "COMPLAINT_STATUS_NEW",
    "COMPLAINT_STATUS_PIPELINE",
    "Complaint",
    "DEFAULT_ROLES",
    "Notification",
    "NotificationFeed",
    "NotificationSummary",
    "ROLE_ADMIN",
    "ROLE_VIEWER",
    "Role",
    "User",
]

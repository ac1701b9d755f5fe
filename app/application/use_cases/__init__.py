"""Aggregate application use cases."""

from .complaints import submit_complaint, track_complaint, update_complaint_status
from .notifications import (
    delete_notification,
    get_notification_feed,
    mark_notifications_read,
    reconcile_notifications,
)
from .users import authenticate_user, create_user, record_login

__all__ = [
    "authenticate_user",
    "create_user",
    "delete_notification",
    "get_notification_feed",
    "mark_notifications_read",
    "reconcile_notifications",
    "record_login",
    "submit_complaint",
    "track_complaint",
    "update_complaint_status",
]

"""Use cases backing the notification feed."""

from .delete_notification import delete_notification
from .get_notification_feed import DEFAULT_FEED_LIMIT, get_notification_feed
from .mark_notifications_read import mark_notifications_read
from .reconcile_notifications import reconcile_notifications

__all__ = [
    "DEFAULT_FEED_LIMIT",
    "delete_notification",
    "get_notification_feed",
    "mark_notifications_read",
    "reconcile_notifications",
]

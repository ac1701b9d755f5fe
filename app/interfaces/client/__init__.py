"""Client helpers for consuming the notification stream."""

from .notification_bell import (
    BellAuthenticationError,
    BellNotification,
    ConnectionStatus,
    NotificationBell,
    iter_frames,
)

__all__ = [
    "BellAuthenticationError",
    "BellNotification",
    "ConnectionStatus",
    "NotificationBell",
    "iter_frames",
]

"""Builders for the JSON frames pushed over notification streams.

Every frame is a single JSON object carrying a ``type`` discriminator and is
written to the wire as one ``data: <json>`` event terminated by a blank line.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from app.domain.entities import NotificationFeed, NotificationSummary
from app.utils import isoformat_or_none, now_in_app_timezone

FRAME_CONNECTION = "connection"
FRAME_INITIAL = "initial"
FRAME_UPDATE = "update"
FRAME_HEARTBEAT = "heartbeat"
FRAME_ERROR = "error"
FRAME_DISCONNECT = "disconnect"

FRAME_TYPES = frozenset(
    {
        FRAME_CONNECTION,
        FRAME_INITIAL,
        FRAME_UPDATE,
        FRAME_HEARTBEAT,
        FRAME_ERROR,
        FRAME_DISCONNECT,
    }
)


def encode_frame(message: dict[str, Any]) -> str:
    """Return the server-sent event chunk for ``message``."""

    return f"data: {json.dumps(message, ensure_ascii=False, default=str)}\n\n"


def serialize_summary(summary: NotificationSummary) -> dict[str, Any]:
    return {
        "id": summary.id,
        "complaintId": summary.complaint_id,
        "subject": summary.subject,
        "trackingNumber": summary.tracking_number,
        "priority": summary.priority,
        "createdAt": isoformat_or_none(summary.created_at),
        "isRead": summary.is_read,
    }


def serialize_feed(feed: NotificationFeed) -> dict[str, Any]:
    return {
        "notifications": [serialize_summary(item) for item in feed.notifications],
        "total": feed.total,
    }


def connection_frame(connection_count: int) -> dict[str, Any]:
    return {
        "type": FRAME_CONNECTION,
        "status": "connected",
        "connectionCount": connection_count,
    }


def feed_frame(frame_type: str, feed: NotificationFeed) -> dict[str, Any]:
    if frame_type not in (FRAME_INITIAL, FRAME_UPDATE):
        raise ValueError(f"Unsupported feed frame type: {frame_type}")
    return {"type": frame_type, **serialize_feed(feed)}


def heartbeat_frame(timestamp: datetime | None = None) -> dict[str, Any]:
    moment = timestamp or now_in_app_timezone()
    return {"type": FRAME_HEARTBEAT, "timestamp": moment.isoformat()}


def error_frame(message: str) -> dict[str, Any]:
    return {"type": FRAME_ERROR, "message": message}


def disconnect_frame(reason: str) -> dict[str, Any]:
    return {"type": FRAME_DISCONNECT, "reason": reason}


__all__ = [
    "FRAME_CONNECTION",
    "FRAME_DISCONNECT",
    "FRAME_ERROR",
    "FRAME_HEARTBEAT",
    "FRAME_INITIAL",
    "FRAME_TYPES",
    "FRAME_UPDATE",
    "connection_frame",
    "disconnect_frame",
    "encode_frame",
    "error_frame",
    "feed_frame",
    "heartbeat_frame",
    "serialize_feed",
    "serialize_summary",
]

"""Realtime notification helpers for the infrastructure layer."""

from .channel import ChannelClosedError, PushChannel
from .frames import (
    FRAME_CONNECTION,
    FRAME_DISCONNECT,
    FRAME_ERROR,
    FRAME_HEARTBEAT,
    FRAME_INITIAL,
    FRAME_TYPES,
    FRAME_UPDATE,
    encode_frame,
    serialize_feed,
    serialize_summary,
)
from .heartbeat import HeartbeatScheduler
from .manager import EVICTION_REASON, ConnectionRegistry
from .session import FEED_ERROR_MESSAGE, FeedLoader, PushSession, PushSessionState

__all__ = [
    "ChannelClosedError",
    "ConnectionRegistry",
    "EVICTION_REASON",
    "FEED_ERROR_MESSAGE",
    "FRAME_CONNECTION",
    "FRAME_DISCONNECT",
    "FRAME_ERROR",
    "FRAME_HEARTBEAT",
    "FRAME_INITIAL",
    "FRAME_TYPES",
    "FRAME_UPDATE",
    "FeedLoader",
    "HeartbeatScheduler",
    "PushChannel",
    "PushSession",
    "PushSessionState",
    "encode_frame",
    "serialize_feed",
    "serialize_summary",
]

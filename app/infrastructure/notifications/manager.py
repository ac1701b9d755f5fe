"""Connection management helpers for notification streams."""

from __future__ import annotations

import logging
from typing import Any, Dict

from .channel import PushChannel
from .frames import disconnect_frame, encode_frame, heartbeat_frame

logger = logging.getLogger(__name__)

EVICTION_REASON = "Too many connections"


class ConnectionRegistry:
    """Track the open push channels of every user.

    Each user owns an insertion-ordered bucket of channels capped at
    ``max_connections_per_user``. Admitting a channel beyond the cap evicts
    the oldest channel of that user.
    """

    def __init__(self, *, max_connections_per_user: int = 3) -> None:
        if max_connections_per_user < 1:
            raise ValueError("max_connections_per_user must be at least 1")
        self.max_connections_per_user = max_connections_per_user
        # dict keys keep registration order; values are unused.
        self._connections: Dict[int, Dict[PushChannel, None]] = {}

    def register(self, user_id: int, channel: PushChannel) -> bool:
        """Register ``channel`` for ``user_id``, evicting the oldest on overflow."""

        bucket = self._connections.setdefault(user_id, {})
        while len(bucket) >= self.max_connections_per_user:
            oldest = next(iter(bucket))
            self._evict(user_id, oldest)
            bucket.pop(oldest, None)

        bucket[channel] = None
        logger.debug(
            "Registered %r for user %s (%d open)", channel, user_id, len(bucket)
        )
        return True

    def unregister(self, user_id: int, channel: PushChannel) -> None:
        """Remove ``channel`` from the pool for ``user_id``."""

        bucket = self._connections.get(user_id)
        if bucket is None:
            return
        if bucket.pop(channel, False) is not False:
            logger.debug("Unregistered %r for user %s", channel, user_id)
        if not bucket:
            self._connections.pop(user_id, None)

    def send(self, user_id: int, message: dict[str, Any]) -> int:
        """Deliver ``message`` to every channel of ``user_id``.

        Channels that fail are unregistered and closed once the loop finishes. Returns the
        number of successful deliveries.
        """

        bucket = self._connections.get(user_id)
        if not bucket:
            return 0

        chunk = encode_frame(message)
        failed: list[PushChannel] = []
        delivered = 0
        for channel in bucket:
            try:
                channel.push(chunk)
            except Exception as exc:
                logger.warning(
                    "Dropping %r for user %s after failed delivery: %s",
                    channel,
                    user_id,
                    exc,
                )
                failed.append(channel)
            else:
                delivered += 1

        for channel in failed:
            self.unregister(user_id, channel)
            channel.close()
        return delivered

    def broadcast_heartbeat(self) -> int:
        """Send a heartbeat frame to every registered channel."""

        message = heartbeat_frame()
        delivered = 0
        for user_id in list(self._connections):
            delivered += self.send(user_id, message)
        logger.debug("Heartbeat delivered to %d channel(s)", delivered)
        return delivered

    def connection_count(self, user_id: int) -> int:
        return len(self._connections.get(user_id, ()))

    def total_connections(self) -> int:
        return sum(len(bucket) for bucket in self._connections.values())

    def is_registered(self, user_id: int, channel: PushChannel) -> bool:
        return channel in self._connections.get(user_id, ())

    def _evict(self, user_id: int, channel: PushChannel) -> None:
        logger.info(
            "Evicting %r for user %s: connection limit of %d reached",
            channel,
            user_id,
            self.max_connections_per_user,
        )
        try:
            channel.push(encode_frame(disconnect_frame(EVICTION_REASON)))
        except Exception as exc:
            logger.warning("Could not notify evicted %r: %s", channel, exc)
        channel.close()


__all__ = ["ConnectionRegistry", "EVICTION_REASON"]

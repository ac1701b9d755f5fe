"""Per-connection protocol driver for the notification stream."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from anyio import to_thread

from app.domain.entities import NotificationFeed

from .channel import ChannelClosedError, PushChannel
from .frames import (
    FRAME_INITIAL,
    FRAME_UPDATE,
    connection_frame,
    encode_frame,
    error_frame,
    feed_frame,
)
from .manager import ConnectionRegistry

logger = logging.getLogger(__name__)

FEED_ERROR_MESSAGE = "Error fetching notifications"

FeedLoader = Callable[[int], NotificationFeed]


class PushSessionState(str, enum.Enum):
    INITIALIZING = "initializing"
    STREAMING = "streaming"
    CLOSED = "closed"


class PushSession:
    """Drive one notification stream from registration to teardown.

    On start the channel is registered and receives a ``connection`` frame
    followed by an ``initial`` feed snapshot. While streaming, the feed is
    recomputed every ``poll_interval`` seconds and an ``update`` frame is
    emitted whenever the unread total is positive. The store exposes no
    change feed, so updates lag by at most one poll interval.

    ``feed_loader`` is a blocking callable; it runs in a worker thread.
    """

    def __init__(
        self,
        user_id: int,
        registry: ConnectionRegistry,
        feed_loader: FeedLoader,
        *,
        poll_interval: float = 15,
        channel: PushChannel | None = None,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self.user_id = user_id
        self.channel = channel or PushChannel()
        self.poll_interval = poll_interval
        self.state = PushSessionState.INITIALIZING
        self._registry = registry
        self._feed_loader = feed_loader
        self._poll_task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Register the channel, send the opening frames and start polling."""

        if self.state is not PushSessionState.INITIALIZING:
            raise RuntimeError(f"Cannot start a session in state {self.state.value}")

        self._registry.register(self.user_id, self.channel)
        self._emit(connection_frame(self._registry.connection_count(self.user_id)))

        feed = await self._load_feed()
        if feed is not None:
            self._emit(feed_frame(FRAME_INITIAL, feed))

        if self.state is PushSessionState.CLOSED:
            return
        self.state = PushSessionState.STREAMING
        self._poll_task = asyncio.get_running_loop().create_task(
            self._poll_forever(), name=f"notification-poll-{self.user_id}"
        )
        logger.info(
            "Notification stream opened for user %s (%d open)",
            self.user_id,
            self._registry.connection_count(self.user_id),
        )

    async def poll_once(self) -> bool:
        """Recompute the feed and emit an ``update`` when unread items exist.

        Returns ``True`` when an ``update`` frame was emitted.
        """

        feed = await self._load_feed()
        if feed is None or feed.total <= 0:
            return False
        return self._emit(feed_frame(FRAME_UPDATE, feed))

    def close(self) -> None:
        """Stop polling and release the channel. Safe to call repeatedly."""

        if self.state is PushSessionState.CLOSED:
            return
        self.state = PushSessionState.CLOSED
        task, self._poll_task = self._poll_task, None
        if task is not None and task is not _current_task():
            task.cancel()
        self._registry.unregister(self.user_id, self.channel)
        self.channel.close()
        logger.info("Notification stream closed for user %s", self.user_id)

    async def stream(
        self,
        *,
        is_disconnected: Callable[[], Awaitable[bool]] | None = None,
    ) -> AsyncIterator[str]:
        """Yield wire chunks for this session until the client goes away."""

        await self.start()
        try:
            async for chunk in self.channel.iter_chunks(is_disconnected=is_disconnected):
                yield chunk
        finally:
            self.close()

    async def _poll_forever(self) -> None:
        while self.state is PushSessionState.STREAMING:
            await asyncio.sleep(self.poll_interval)
            if self.state is not PushSessionState.STREAMING:
                return
            await self.poll_once()
            if self.channel.closed:
                self.close()
                return

    async def _load_feed(self) -> NotificationFeed | None:
        try:
            return await to_thread.run_sync(self._feed_loader, self.user_id)
        except Exception:
            logger.exception("Failed to compute notification feed for user %s", self.user_id)
            self._emit(error_frame(FEED_ERROR_MESSAGE))
            return None

    def _emit(self, message: dict[str, Any]) -> bool:
        try:
            self.channel.push(encode_frame(message))
        except ChannelClosedError as exc:
            logger.debug("Frame %s not delivered to user %s: %s", message.get("type"), self.user_id, exc)
            return False
        except asyncio.QueueFull:
            logger.warning(
                "Closing stream of user %s: client is not reading (%s frame dropped)",
                self.user_id,
                message.get("type"),
            )
            self.channel.close()
            return False
        return True


def _current_task() -> asyncio.Task[Any] | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None


__all__ = ["FEED_ERROR_MESSAGE", "FeedLoader", "PushSession", "PushSessionState"]

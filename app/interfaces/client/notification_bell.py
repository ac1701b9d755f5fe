"""Async consumer of the notification stream used by dashboard clients."""

from __future__ import annotations

import asyncio
import enum
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, replace
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_STREAM_PATH = "/notifications/sse"


class ConnectionStatus(str, enum.Enum):
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class BellAuthenticationError(RuntimeError):
    """The server rejected the credentials used to open the stream."""


@dataclass(frozen=True)
class BellNotification:
    id: int
    complaint_id: int | None
    subject: str
    tracking_number: str
    priority: str
    created_at: str | None
    is_read: bool

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "BellNotification":
        return cls(
            id=int(payload["id"]),
            complaint_id=payload.get("complaintId"),
            subject=payload.get("subject", ""),
            tracking_number=payload.get("trackingNumber", ""),
            priority=payload.get("priority", ""),
            created_at=payload.get("createdAt"),
            is_read=bool(payload.get("isRead", False)),
        )


async def iter_frames(lines: AsyncIterator[str]) -> AsyncIterator[dict[str, Any]]:
    """Group server-sent event lines into decoded JSON frames.

    Comment lines and fields other than ``data`` are skipped, as are payloads
    that are not JSON objects.
    """

    data: list[str] = []
    async for raw_line in lines:
        line = raw_line.rstrip("\r")
        if line:
            if line.startswith("data:"):
                data.append(line[5:].lstrip(" "))
            continue
        if not data:
            continue
        payload, data = "\n".join(data), []
        try:
            frame = json.loads(payload)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed frame: %s", payload)
            continue
        if isinstance(frame, dict):
            yield frame


class NotificationBell:
    """Keep a local, optimistic view of the caller's notification feed.

    The bell holds one stream open, replaces its list on every ``initial`` or
    ``update`` frame and reconnects with exponential backoff when the stream
    drops. Read and delete actions update the local view first and are then
    confirmed with the API; a failed confirmation restores the prior view.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        client: httpx.AsyncClient | None = None,
        stream_path: str = DEFAULT_STREAM_PATH,
        reconnect_delay: float = 5.0,
        max_reconnect_delay: float = 60.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        on_new_notifications: Callable[[int], None] | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(base_url=base_url)
        self._owns_client = client is None
        self._token = token
        self.stream_path = stream_path
        self.reconnect_delay = reconnect_delay
        self.max_reconnect_delay = max_reconnect_delay
        self._sleep = sleep
        self._on_new_notifications = on_new_notifications

        self.connection_status = ConnectionStatus.DISCONNECTED
        self.connection_count = 0
        self.last_error: str | None = None
        self.notifications: list[BellNotification] = []
        self.total = 0

        self._server_items: list[BellNotification] = []
        self._server_total = 0
        self._pending_read: set[int] = set()
        self._pending_deleted: set[int] = set()
        self._pending_all_read = False
        self._failed_attempts = 0
        self._stopped = False

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"}

    # -- stream -----------------------------------------------------------

    async def run(self) -> None:
        """Consume the stream until :meth:`stop` is called."""

        self._stopped = False
        while not self._stopped:
            try:
                await self.connect_once()
            except BellAuthenticationError:
                self.connection_status = ConnectionStatus.DISCONNECTED
                raise
            except httpx.HTTPError as exc:
                self.last_error = str(exc) or exc.__class__.__name__
                logger.warning("Notification stream failed: %s", self.last_error)
                self._failed_attempts += 1
            if self._stopped:
                break
            delay = self.next_reconnect_delay()
            logger.info("Reconnecting notification stream in %.1fs", delay)
            await self._sleep(delay)

    def stop(self) -> None:
        self._stopped = True

    async def aclose(self) -> None:
        self.stop()
        if self._owns_client:
            await self._client.aclose()

    def next_reconnect_delay(self) -> float:
        delay = self.reconnect_delay * (2 ** max(self._failed_attempts - 1, 0))
        return min(delay, self.max_reconnect_delay)

    async def connect_once(self) -> None:
        """Open the stream and process frames until it ends."""

        self.connection_status = ConnectionStatus.CONNECTING
        timeout = httpx.Timeout(10.0, read=None)
        try:
            async with self._client.stream(
                "GET", self.stream_path, headers=self._headers, timeout=timeout
            ) as response:
                if response.status_code == httpx.codes.UNAUTHORIZED:
                    raise BellAuthenticationError("Notification stream rejected the token")
                response.raise_for_status()
                self.connection_status = ConnectionStatus.CONNECTED
                self._failed_attempts = 0
                async for frame in iter_frames(response.aiter_lines()):
                    if not self.handle_frame(frame):
                        self._failed_attempts += 1
                        break
        finally:
            self.connection_status = ConnectionStatus.DISCONNECTED

    def handle_frame(self, frame: dict[str, Any]) -> bool:
        """Apply ``frame`` to the local state.

        Returns ``False`` when the server asked the client to disconnect.
        """

        frame_type = frame.get("type")
        if frame_type == "connection":
            self.connection_status = ConnectionStatus.CONNECTED
            self.connection_count = int(frame.get("connectionCount") or 0)
        elif frame_type in ("initial", "update"):
            self.last_error = None
            self._apply_feed(frame.get("notifications") or [], int(frame.get("total") or 0))
        elif frame_type == "error":
            self.last_error = frame.get("message") or "Error"
            logger.warning("Notification stream reported: %s", self.last_error)
        elif frame_type == "disconnect":
            self.last_error = frame.get("reason")
            logger.info("Notification stream closed by server: %s", self.last_error)
            return False
        # heartbeat and unknown frame types need no action
        return True

    # -- local state ------------------------------------------------------

    def _apply_feed(self, items: list[dict[str, Any]], total: int) -> None:
        seen: set[int] = set()
        server_items: list[BellNotification] = []
        for payload in items:
            try:
                item = BellNotification.from_payload(payload)
            except (KeyError, TypeError, ValueError):
                logger.warning("Ignoring malformed notification: %r", payload)
                continue
            if item.id in seen:
                continue
            seen.add(item.id)
            server_items.append(item)

        # Drop optimistic marks the server now agrees with.
        unread_ids = {item.id for item in server_items if not item.is_read}
        self._pending_read &= unread_ids
        self._pending_deleted &= seen

        self._server_items = server_items
        self._server_total = total
        self._render()

    def _render(self) -> None:
        previous_total = self.total
        visible: list[BellNotification] = []
        for item in self._server_items:
            if item.id in self._pending_deleted:
                continue
            locally_read = self._pending_all_read or item.id in self._pending_read
            if locally_read and not item.is_read:
                item = replace(item, is_read=True)
            visible.append(item)

        if self._pending_all_read:
            total = 0
        else:
            overridden = sum(
                1
                for item in self._server_items
                if not item.is_read
                and (item.id in self._pending_read or item.id in self._pending_deleted)
            )
            total = max(0, self._server_total - overridden)

        self.notifications = visible
        self.total = total
        if total > previous_total and self._on_new_notifications is not None:
            self._on_new_notifications(total - previous_total)

    # -- actions ----------------------------------------------------------

    async def mark_all_read(self) -> bool:
        self._pending_all_read = True
        self._render()
        try:
            response = await self._client.post(
                "/notifications/read", json={}, headers=self._headers
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Could not mark notifications as read: %s", exc)
            self._pending_all_read = False
            self._render()
            return False
        # Items visible now are read on the server; later arrivals are not.
        self._pending_read |= {item.id for item in self._server_items if not item.is_read}
        self._pending_all_read = False
        self._render()
        return True

    async def mark_read(self, notification_id: int) -> bool:
        already_pending = notification_id in self._pending_read
        self._pending_read.add(notification_id)
        self._render()
        try:
            response = await self._client.post(
                f"/notifications/{notification_id}/read", headers=self._headers
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Could not mark notification %s as read: %s", notification_id, exc)
            if not already_pending:
                self._pending_read.discard(notification_id)
            self._render()
            return False
        return True

    async def delete(self, notification_id: int) -> bool:
        self._pending_deleted.add(notification_id)
        self._render()
        try:
            response = await self._client.delete(
                f"/notifications/{notification_id}", headers=self._headers
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Could not delete notification %s: %s", notification_id, exc)
            self._pending_deleted.discard(notification_id)
            self._render()
            return False
        return True


__all__ = [
    "BellAuthenticationError",
    "BellNotification",
    "ConnectionStatus",
    "NotificationBell",
    "iter_frames",
]

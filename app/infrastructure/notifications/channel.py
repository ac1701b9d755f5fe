"""In-memory push channel backing one open notification stream."""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import AsyncIterator, Awaitable, Callable

_channel_ids = itertools.count(1)


class ChannelClosedError(RuntimeError):
    """Raised when writing to a channel that has already been closed."""


class PushChannel:
    """Queue of encoded frames drained by a streaming HTTP response.

    Writers call :meth:`push` synchronously; the response body iterates
    :meth:`iter_chunks` until the channel is closed. Frames are delivered in
    the order they were pushed.
    """

    def __init__(self, *, max_pending: int = 0) -> None:
        self.id = next(_channel_ids)
        self._queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=max_pending)
        self._closed = False

    def __repr__(self) -> str:
        return f"PushChannel(id={self.id}, closed={self._closed})"

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, chunk: str) -> None:
        """Enqueue ``chunk`` without blocking.

        Raises :class:`ChannelClosedError` once the channel is closed and
        :class:`asyncio.QueueFull` when a bounded channel is saturated.
        """

        if self._closed:
            raise ChannelClosedError(f"Channel {self.id} is closed")
        self._queue.put_nowait(chunk)

    def close(self) -> None:
        """Stop accepting frames; pending frames are still drained."""

        if self._closed:
            return
        self._closed = True
        try:
            self._queue.put_nowait(None)
        except asyncio.QueueFull:
            # Saturated bounded queue: drop the backlog so the reader stops.
            while not self._queue.empty():
                self._queue.get_nowait()
            self._queue.put_nowait(None)

    async def iter_chunks(
        self,
        *,
        is_disconnected: Callable[[], Awaitable[bool]] | None = None,
        disconnect_check_interval: float = 1.0,
    ) -> AsyncIterator[str]:
        """Yield queued chunks until the channel closes or the peer leaves."""

        while True:
            if is_disconnected is None:
                chunk = await self._queue.get()
            else:
                try:
                    chunk = await asyncio.wait_for(
                        self._queue.get(), timeout=disconnect_check_interval
                    )
                except asyncio.TimeoutError:
                    if await is_disconnected():
                        return
                    continue
            if chunk is None:
                return
            yield chunk


__all__ = ["ChannelClosedError", "PushChannel"]

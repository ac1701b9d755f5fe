"""Process-wide keepalive broadcaster for notification streams."""

from __future__ import annotations

import asyncio
import contextlib
import logging

from .manager import ConnectionRegistry

logger = logging.getLogger(__name__)


class HeartbeatScheduler:
    """Periodically push heartbeat frames to every open channel.

    Proxies between the browser and the API drop streams that stay silent
    for too long; a heartbeat every ``interval`` seconds keeps them open.
    """

    def __init__(self, registry: ConnectionRegistry, *, interval: float = 30) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._registry = registry
        self.interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the timer on the running event loop; repeated calls are ignored."""

        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="notification-heartbeat"
        )
        logger.info("Heartbeat scheduler started (every %ss)", self.interval)

    def tick(self) -> int:
        return self._registry.broadcast_heartbeat()

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Heartbeat scheduler stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.tick()
            except Exception:
                logger.exception("Heartbeat broadcast failed")


__all__ = ["HeartbeatScheduler"]

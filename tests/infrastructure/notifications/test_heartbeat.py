"""Tests for the heartbeat scheduler."""

from __future__ import annotations

import asyncio
import json

import pytest

from app.infrastructure.notifications import ConnectionRegistry, HeartbeatScheduler, PushChannel


def test_rejects_non_positive_interval() -> None:
    with pytest.raises(ValueError):
        HeartbeatScheduler(ConnectionRegistry(), interval=0)


def test_tick_without_connections_sends_nothing() -> None:
    assert HeartbeatScheduler(ConnectionRegistry()).tick() == 0


def test_scheduler_broadcasts_until_stopped() -> None:
    async def scenario():
        registry = ConnectionRegistry()
        first, second = PushChannel(), PushChannel()
        registry.register(1, first)
        registry.register(2, second)

        scheduler = HeartbeatScheduler(registry, interval=0.01)
        scheduler.start()
        scheduler.start()
        assert scheduler.running
        await asyncio.sleep(0.1)
        await scheduler.stop()
        assert not scheduler.running

        results = []
        for channel in (first, second):
            channel.close()
            results.append([json.loads(chunk[len("data: "):]) async for chunk in channel.iter_chunks()])
        return results

    results = asyncio.run(scenario())

    for frames in results:
        assert frames
        assert {frame["type"] for frame in frames} == {"heartbeat"}


def test_stop_without_start_is_noop() -> None:
    asyncio.run(HeartbeatScheduler(ConnectionRegistry()).stop())

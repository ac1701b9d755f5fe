"""Tests for the notification bell stream consumer."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from app.interfaces.client import (
    BellAuthenticationError,
    ConnectionStatus,
    NotificationBell,
    iter_frames,
)

BASE_URL = "http://testserver"


def _item(notification_id: int, *, is_read: bool = False) -> dict:
    return {
        "id": notification_id,
        "complaintId": notification_id + 100,
        "subject": f"Complaint {notification_id}",
        "trackingNumber": f"CMP-20240101-{1000 + notification_id}",
        "priority": "medium",
        "createdAt": "2024-01-01T10:00:00+07:00",
        "isRead": is_read,
    }


def _sse(*frames: dict) -> bytes:
    return "".join(f"data: {json.dumps(frame)}\n\n" for frame in frames).encode()


def _bell(handler, **kwargs) -> NotificationBell:
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return NotificationBell(BASE_URL, "token-123", client=client, **kwargs)


def _ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"success": True})


def _failing(request: httpx.Request) -> httpx.Response:
    return httpx.Response(500, json={"detail": "boom"})


async def _lines(*lines: str):
    for line in lines:
        yield line


def test_iter_frames_groups_data_lines_and_skips_noise() -> None:
    async def collect():
        lines = _lines(
            ": comment",
            'data: {"type": "heartbeat"}',
            "",
            "data: not-json",
            "",
            "event: ignored",
            'data: {"type":',
            'data: "error", "message": "x"}',
            "",
            "data: [1, 2]",
            "",
        )
        return [frame async for frame in iter_frames(lines)]

    frames = asyncio.run(collect())

    assert frames == [{"type": "heartbeat"}, {"type": "error", "message": "x"}]


def test_feed_frames_replace_list_and_deduplicate() -> None:
    bell = _bell(_ok)

    bell.handle_frame({"type": "initial", "notifications": [_item(1), _item(1), _item(2)], "total": 2})
    assert [item.id for item in bell.notifications] == [1, 2]
    assert bell.total == 2

    bell.handle_frame({"type": "update", "notifications": [_item(3)], "total": 1})
    assert [item.id for item in bell.notifications] == [3]
    assert bell.total == 1


def test_new_notifications_callback_fires_on_increase() -> None:
    increases: list[int] = []
    bell = _bell(_ok, on_new_notifications=increases.append)

    bell.handle_frame({"type": "initial", "notifications": [_item(1)], "total": 1})
    bell.handle_frame({"type": "update", "notifications": [_item(2), _item(1)], "total": 2})
    bell.handle_frame({"type": "update", "notifications": [_item(2), _item(1)], "total": 2})

    assert increases == [1, 1]


def test_connection_error_and_heartbeat_frames() -> None:
    bell = _bell(_ok)

    assert bell.handle_frame({"type": "connection", "status": "connected", "connectionCount": 2})
    assert bell.connection_status is ConnectionStatus.CONNECTED
    assert bell.connection_count == 2

    assert bell.handle_frame({"type": "error", "message": "Error fetching notifications"})
    assert bell.last_error == "Error fetching notifications"

    assert bell.handle_frame({"type": "heartbeat", "timestamp": "2024-01-01T00:00:00+07:00"})
    assert bell.handle_frame({"type": "something-new"})
    assert bell.handle_frame({"type": "disconnect", "reason": "Too many connections"}) is False
    assert bell.last_error == "Too many connections"


def test_mark_all_read_is_optimistic() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"success": True})

    bell = _bell(handler)
    bell.handle_frame({"type": "initial", "notifications": [_item(1), _item(2)], "total": 2})

    assert asyncio.run(bell.mark_all_read()) is True

    assert bell.total == 0
    assert all(item.is_read for item in bell.notifications)
    assert requests[0].method == "POST"
    assert requests[0].url.path == "/notifications/read"
    assert requests[0].headers["Authorization"] == "Bearer token-123"

    # A late snapshot still showing the old items unread does not resurrect them,
    # while a genuinely new arrival is counted.
    bell.handle_frame(
        {"type": "update", "notifications": [_item(3), _item(2), _item(1)], "total": 3}
    )
    assert bell.total == 1
    assert {item.id: item.is_read for item in bell.notifications} == {3: False, 2: True, 1: True}


def test_mark_all_read_rolls_back_on_failure() -> None:
    bell = _bell(_failing)
    bell.handle_frame({"type": "initial", "notifications": [_item(1), _item(2)], "total": 2})

    assert asyncio.run(bell.mark_all_read()) is False

    assert bell.total == 2
    assert not any(item.is_read for item in bell.notifications)


def test_mark_single_read() -> None:
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json={"success": True})

    bell = _bell(handler)
    bell.handle_frame({"type": "initial", "notifications": [_item(1), _item(2)], "total": 2})

    assert asyncio.run(bell.mark_read(2)) is True

    assert paths == ["/notifications/2/read"]
    assert bell.total == 1
    assert {item.id: item.is_read for item in bell.notifications} == {1: False, 2: True}

    bell.handle_frame(
        {"type": "update", "notifications": [_item(1), _item(2, is_read=True)], "total": 1}
    )
    assert bell.total == 1


def test_mark_single_read_rolls_back_on_failure() -> None:
    bell = _bell(_failing)
    bell.handle_frame({"type": "initial", "notifications": [_item(1)], "total": 1})

    assert asyncio.run(bell.mark_read(1)) is False

    assert bell.total == 1
    assert bell.notifications[0].is_read is False


def test_delete_hides_item_and_rolls_back_on_failure() -> None:
    methods: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        methods.append((request.method, request.url.path))
        return httpx.Response(200, json={"success": True})

    bell = _bell(handler)
    bell.handle_frame({"type": "initial", "notifications": [_item(1), _item(2)], "total": 2})

    assert asyncio.run(bell.delete(1)) is True
    assert methods == [("DELETE", "/notifications/1")]
    assert [item.id for item in bell.notifications] == [2]
    assert bell.total == 1

    failing = _bell(_failing)
    failing.handle_frame({"type": "initial", "notifications": [_item(1)], "total": 1})
    assert asyncio.run(failing.delete(1)) is False
    assert [item.id for item in failing.notifications] == [1]
    assert failing.total == 1


def test_connect_once_consumes_stream() -> None:
    body = _sse(
        {"type": "connection", "status": "connected", "connectionCount": 1},
        {"type": "initial", "notifications": [_item(1)], "total": 1},
        {"type": "heartbeat", "timestamp": "2024-01-01T00:00:00+07:00"},
    )

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/notifications/sse"
        assert request.headers["Authorization"] == "Bearer token-123"
        return httpx.Response(200, content=body, headers={"Content-Type": "text/event-stream"})

    bell = _bell(handler)
    asyncio.run(bell.connect_once())

    assert bell.connection_count == 1
    assert [item.id for item in bell.notifications] == [1]
    assert bell.total == 1
    assert bell.connection_status is ConnectionStatus.DISCONNECTED


def test_connect_once_raises_on_rejected_token() -> None:
    bell = _bell(lambda request: httpx.Response(401, json={"detail": "No autenticado"}))

    with pytest.raises(BellAuthenticationError):
        asyncio.run(bell.connect_once())


def test_run_reconnects_with_backoff() -> None:
    delays: list[float] = []

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    async def fake_sleep(delay: float) -> None:
        delays.append(delay)
        if len(delays) == 5:
            bell.stop()

    bell = _bell(handler, reconnect_delay=5.0, max_reconnect_delay=30.0, sleep=fake_sleep)
    asyncio.run(bell.run())

    assert delays == [5.0, 10.0, 20.0, 30.0, 30.0]
    assert bell.last_error


def test_run_reconnects_after_eviction() -> None:
    calls = {"count": 0}
    delays: list[float] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        body = _sse(
            {"type": "connection", "status": "connected", "connectionCount": 3},
            {"type": "disconnect", "reason": "Too many connections"},
        )
        return httpx.Response(200, content=body)

    async def fake_sleep(delay: float) -> None:
        delays.append(delay)
        bell.stop()

    bell = _bell(handler, sleep=fake_sleep)
    asyncio.run(bell.run())

    assert calls["count"] == 1
    assert delays == [5.0]
    assert bell.last_error == "Too many connections"


def test_run_stops_on_authentication_failure() -> None:
    bell = _bell(lambda request: httpx.Response(401))

    with pytest.raises(BellAuthenticationError):
        asyncio.run(bell.run())
    assert bell.connection_status is ConnectionStatus.DISCONNECTED

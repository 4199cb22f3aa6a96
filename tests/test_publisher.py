"""Tests for the best-effort websocket publisher."""

from __future__ import annotations

import asyncio
from uuid import uuid4

from campus_feed.domain.entities import Notification
from campus_feed.infrastructure.notifications import (
    NotificationConnectionManager,
    NotificationPublisher,
)
from campus_feed.utils import now_in_app_timezone


class RecordingManager:
    def __init__(self, connected):
        self.connected = set(connected)
        self.sent: list[tuple] = []

    def connected_users(self) -> frozenset:
        return frozenset(self.connected)

    async def send_to_user(self, user_id, message) -> None:
        self.sent.append((user_id, message))


def _notification() -> Notification:
    return Notification(
        id=uuid4(),
        title="Fee reminder",
        body="Pay before Friday",
        created_at=now_in_app_timezone(),
    )


def test_dispatch_only_targets_connected_users() -> None:
    online, offline = uuid4(), uuid4()
    manager = RecordingManager([online])
    publisher = NotificationPublisher(manager)
    notification = _notification()

    async def run() -> int:
        scheduled = publisher.dispatch(notification, [online, offline])
        await asyncio.sleep(0)
        return scheduled

    assert asyncio.run(run()) == 1
    [(user_id, message)] = manager.sent
    assert user_id == online
    assert message["type"] == "notification"
    assert message["data"]["id"] == str(notification.id)
    assert message["data"]["expires_at"] is None


def test_dispatch_without_event_loop_is_dropped() -> None:
    online = uuid4()
    manager = RecordingManager([online])

    scheduled = NotificationPublisher(manager).dispatch(_notification(), [online])

    assert scheduled == 0
    assert manager.sent == []


class FakeSocket:
    def __init__(self, closed: bool = False) -> None:
        self.closed = closed
        self.accepted = False
        self.received: list[dict] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message) -> None:
        if self.closed:
            raise RuntimeError("Cannot call send once a close message has been sent.")
        self.received.append(message)


def test_manager_pushes_to_every_open_socket_and_drops_closed_ones() -> None:
    manager = NotificationConnectionManager()
    user_id = uuid4()
    laptop, phone, stale = FakeSocket(), FakeSocket(), FakeSocket(closed=True)

    async def run() -> tuple[int, int]:
        for socket in (laptop, phone, stale):
            await manager.connect(user_id, socket)
        first = await manager.send_to_user(user_id, {"type": "ping"})
        second = await manager.send_to_user(user_id, {"type": "ping"})
        return first, second

    assert asyncio.run(run()) == (2, 2)
    assert laptop.accepted and phone.accepted
    assert len(laptop.received) == 2
    assert manager.connected_users() == frozenset({user_id})

    manager.disconnect(user_id, laptop)
    manager.disconnect(user_id, phone)
    assert manager.connected_users() == frozenset()

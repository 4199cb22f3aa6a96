"""Registry of the websocket subscribers waiting for notification pushes."""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Track open notification sockets per user; a user may hold several tabs."""

    def __init__(self) -> None:
        self._subscribers: dict[UUID, list[WebSocket]] = {}

    async def connect(self, user_id: UUID, websocket: WebSocket) -> None:
        await websocket.accept()
        sockets = self._subscribers.setdefault(user_id, [])
        if websocket not in sockets:
            sockets.append(websocket)
        logger.debug("User %s subscribed (%s open sockets)", user_id, len(sockets))

    def disconnect(self, user_id: UUID, websocket: WebSocket) -> None:
        sockets = self._subscribers.get(user_id, [])
        if websocket in sockets:
            sockets.remove(websocket)
        if not sockets:
            self._subscribers.pop(user_id, None)

    def connected_users(self) -> frozenset[UUID]:
        return frozenset(self._subscribers)

    async def send_to_user(self, user_id: UUID, message: dict[str, Any]) -> int:
        """Push ``message`` to every socket of ``user_id`` and return how many got it.

        Sockets that were closed underneath us are unsubscribed.
        """

        reached = 0
        for websocket in list(self._subscribers.get(user_id, [])):
            try:
                await websocket.send_json(message)
            except (WebSocketDisconnect, RuntimeError):
                logger.debug("Dropping closed notification socket of user %s", user_id)
                self.disconnect(user_id, websocket)
                continue
            reached += 1
        return reached


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]

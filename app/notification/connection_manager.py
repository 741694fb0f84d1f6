"""
In-memory connection manager for notification WebSockets: connect/disconnect/send by user_id.
"""
import asyncio
import json
import logging
import uuid
from typing import Any, Dict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks WebSocket connections per user and pushes events to them."""

    def __init__(self) -> None:
        # user_id -> set of WebSocket (one per open device/tab)
        self._users: Dict[uuid.UUID, Set[WebSocket]] = {}
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket, user_id: uuid.UUID) -> None:
        async with self._lock:
            self._users.setdefault(user_id, set()).add(websocket)
        logger.debug("Notification socket connected for user %s", user_id)

    async def disconnect(self, websocket: WebSocket, user_id: uuid.UUID) -> None:
        async with self._lock:
            if user_id in self._users:
                self._users[user_id].discard(websocket)
                if not self._users[user_id]:
                    del self._users[user_id]
        logger.debug("Notification socket disconnected for user %s", user_id)

    def is_connected(self, user_id: uuid.UUID) -> bool:
        return bool(self._users.get(user_id))

    async def send_to_user(self, user_id: uuid.UUID, event: str, payload: Any) -> int:
        """Send a JSON event to every socket of user_id. Returns number of sockets reached."""
        msg = json.dumps({
            "event": event,
            "user_id": str(user_id),
            "payload": payload,
        }, default=str)
        async with self._lock:
            sockets = set(self._users.get(user_id) or [])
        sent = 0
        dead = []
        for ws in sockets:
            try:
                await ws.send_text(msg)
                sent += 1
            except Exception as e:
                logger.warning("Notification send failed: %s", e)
                dead.append(ws)
        if dead:
            async with self._lock:
                for ws in dead:
                    if user_id in self._users:
                        self._users[user_id].discard(ws)
                if user_id in self._users and not self._users[user_id]:
                    del self._users[user_id]
        return sent


connection_manager = ConnectionManager()

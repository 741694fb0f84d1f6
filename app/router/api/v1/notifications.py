"""
Notifications WebSocket: push postcard events to the connected user.
"""
import logging
import uuid

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from app.notification import connection_manager
from app.session import get_session

router = APIRouter()
logger = logging.getLogger(__name__)


@router.websocket("/ws")
async def notifications_ws(websocket: WebSocket, token: str):
    """
    Connect with ?token=<session token>. Server sends
    {"event": "postcard.locked" | "postcard.unlocked", "user_id", "payload"}.
    """
    try:
        session = get_session(token)
    except Exception as e:
        logger.warning(f"Session lookup failed for notifications socket: {e}")
        session = None
    if not session:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    user_id = uuid.UUID(session["user_id"])
    await websocket.accept()
    await connection_manager.connect(websocket, user_id)
    try:
        while True:
            # Client messages are ignored; receiving keeps the disconnect detectable.
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await connection_manager.disconnect(websocket, user_id)

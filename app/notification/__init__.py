"""
Postcard event notifications.
"""
from app.notification.connection_manager import ConnectionManager, connection_manager
from app.notification.dispatcher import (
    EVENT_POSTCARD_LOCKED,
    EVENT_POSTCARD_UNLOCKED,
    NotificationDispatcher,
    notification_dispatcher,
)

__all__ = [
    "ConnectionManager",
    "connection_manager",
    "EVENT_POSTCARD_LOCKED",
    "EVENT_POSTCARD_UNLOCKED",
    "NotificationDispatcher",
    "notification_dispatcher",
]

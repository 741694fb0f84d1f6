"""
Notification dispatcher: best-effort, fire-and-forget delivery of postcard events.

Events are pushed to the user's open notification sockets and, when
SNS_TOPIC_ARN is set, published to SNS for mobile push fan-out.
"""
import asyncio
import logging
import uuid
from typing import Any, Dict, Optional

from app.core.config import settings
from app.notification.connection_manager import ConnectionManager, connection_manager

logger = logging.getLogger(__name__)

EVENT_POSTCARD_LOCKED = "postcard.locked"
EVENT_POSTCARD_UNLOCKED = "postcard.unlocked"


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class NotificationDispatcher:
    """Never raises and never blocks the caller on delivery."""

    def __init__(
        self,
        manager: Optional[ConnectionManager] = None,
        sns_topic_arn: Optional[str] = None,
    ) -> None:
        self.manager = manager or connection_manager
        self.sns_topic_arn = sns_topic_arn
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def bind_loop(self, loop: Optional[asyncio.AbstractEventLoop]) -> None:
        """Remember the app's event loop so worker threads (the sweeper) can schedule delivery."""
        self._loop = loop

    def notify(self, user_id: uuid.UUID, event_type: str, payload: Dict[str, Any]) -> None:
        try:
            loop = _running_loop() or self._loop
            if loop is None or loop.is_closed():
                # No event loop (scripts): sockets are unreachable, SNS still works.
                self._publish_sns(user_id, event_type, payload)
                return
            asyncio.run_coroutine_threadsafe(self._deliver(user_id, event_type, payload), loop)
        except Exception as e:
            logger.warning("Notification dispatch failed for user %s (%s): %s", user_id, event_type, e)

    async def _deliver(self, user_id: uuid.UUID, event_type: str, payload: Dict[str, Any]) -> None:
        try:
            sent = await self.manager.send_to_user(user_id, event_type, payload)
            logger.debug("Pushed %s to %s socket(s) of user %s", event_type, sent, user_id)
        except Exception as e:
            logger.warning("Socket push failed for user %s (%s): %s", user_id, event_type, e)
        if self.sns_topic_arn:
            await asyncio.to_thread(self._publish_sns, user_id, event_type, payload)

    def _publish_sns(self, user_id: uuid.UUID, event_type: str, payload: Dict[str, Any]) -> None:
        if not self.sns_topic_arn:
            return
        from app.aws.sns import publish_notification

        try:
            publish_notification(
                topic_arn=self.sns_topic_arn,
                user_id=user_id,
                event_type=event_type,
                payload=payload,
            )
        except Exception as e:
            logger.warning("SNS publish failed for user %s (%s): %s", user_id, event_type, e)


notification_dispatcher = NotificationDispatcher(sns_topic_arn=settings.SNS_TOPIC_ARN)

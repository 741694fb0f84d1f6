"""
LOCKED -> UNLOCKED transition shared by the time-lock sweep and the geo check.
"""
import logging

from sqlalchemy.orm import Session

from app.crud import postcard_crud
from app.model.postcard import Postcard, PostcardStatus
from app.notification import EVENT_POSTCARD_UNLOCKED

logger = logging.getLogger(__name__)


def unlock_postcard(db: Session, postcard: Postcard, notifier, trigger: str) -> bool:
    """
    Conditionally unlock one postcard and notify its recipient.

    Returns True if this call performed the transition. False means the row
    was no longer LOCKED (another writer won); that is not an error.
    """
    postcard_id = postcard.id
    recipient_id = postcard.recipient_id
    sender_id = postcard.sender_id
    sender_name = postcard.sender.name if postcard.sender is not None else None

    unlocked = postcard_crud.update_status(
        db,
        postcard_id=postcard_id,
        expected_status=PostcardStatus.LOCKED,
        new_status=PostcardStatus.UNLOCKED,
        fields={"unlock_notification_sent": True},
    )
    if not unlocked:
        logger.info("Postcard %s already unlocked, skipping (%s)", postcard_id, trigger)
        return False

    try:
        notifier.notify(
            recipient_id,
            EVENT_POSTCARD_UNLOCKED,
            {
                "postcard_id": str(postcard_id),
                "sender_id": str(sender_id),
                "sender_name": sender_name,
                "trigger": trigger,
            },
        )
    except Exception as e:
        # The transition is already committed
        logger.warning(f"Unlocked-postcard notification failed for {postcard_id}: {e}")
    return True

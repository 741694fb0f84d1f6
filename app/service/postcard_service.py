"""
Postcard lifecycle service: create, draft, read and list.
"""
from datetime import datetime, timezone, tzinfo
from typing import Callable, List, Optional
import uuid
import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import NotFound, RecipientNotFollowed, RecipientNotFound
from app.crud import follow_crud, postcard_crud, user_crud
from app.model.postcard import Postcard, PostcardStatus
from app.notification import EVENT_POSTCARD_LOCKED, notification_dispatcher
from app.schema.postcard import PostcardCreateIn, PostcardResponse
from app.service.unlock_validator import (
    as_utc,
    has_geo_lock,
    validate_unlock_condition,
    validate_unlock_radius,
)
from app.service.visibility import ensure_participant, project

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PostcardService:
    """Handles postcard creation and reads for one request."""

    def __init__(
        self,
        db: Session,
        notifier=None,
        clock: Callable[[], datetime] = _utcnow,
        tz: Optional[tzinfo] = None,
    ):
        self.db = db
        self.notifier = notifier or notification_dispatcher
        self.clock = clock
        self.tz = tz

    def _validate_recipient(self, sender_id: uuid.UUID, recipient_id: uuid.UUID) -> None:
        """Self-postcards are always allowed; anyone else must exist and be followed."""
        if sender_id == recipient_id:
            return
        if not user_crud.exists(self.db, recipient_id):
            raise RecipientNotFound()
        if not follow_crud.is_following(self.db, follower_id=sender_id, followee_id=recipient_id):
            raise RecipientNotFollowed()

    def _persist(self, sender_id: uuid.UUID, recipient_id: uuid.UUID, data: PostcardCreateIn, status: PostcardStatus, radius: float) -> Postcard:
        geo = has_geo_lock(data)
        obj_in = {
            "id": uuid.uuid4(),
            "sender_id": sender_id,
            "recipient_id": recipient_id,
            "message": data.message,
            "media_url": data.media_url,
            "unlock_date": as_utc(data.unlock_date) if data.unlock_date is not None else None,
            "unlock_latitude": data.unlock_latitude if geo else None,
            "unlock_longitude": data.unlock_longitude if geo else None,
            "unlock_radius": radius,
            "status": status,
            "unlock_notification_sent": False,
            "created_at": self.clock(),
        }
        return postcard_crud.create_from_dict(self.db, obj_in=obj_in)

    def create(self, sender_id: uuid.UUID, data: PostcardCreateIn) -> PostcardResponse:
        """Validate the unlock contract and persist a LOCKED postcard."""
        validate_unlock_condition(data, self.clock(), self.tz)
        radius = validate_unlock_radius(data.unlock_radius, settings.DEFAULT_UNLOCK_RADIUS_M)

        recipient_id = data.recipient_id or sender_id
        self._validate_recipient(sender_id, recipient_id)

        postcard = self._persist(sender_id, recipient_id, data, PostcardStatus.LOCKED, radius)
        logger.info(f"Postcard created: {postcard.id} ({sender_id} -> {recipient_id})")

        sender_name = postcard.sender.name if postcard.sender is not None else None
        try:
            self.notifier.notify(
                recipient_id,
                EVENT_POSTCARD_LOCKED,
                {"postcard_id": str(postcard.id), "sender_id": str(sender_id), "sender_name": sender_name},
            )
        except Exception as e:
            logger.warning(f"Locked-postcard notification failed for {postcard.id}: {e}")

        # Sender sees their own content immediately
        return project(postcard, sender_id)

    def save_draft(self, sender_id: uuid.UUID, data: PostcardCreateIn) -> PostcardResponse:
        """Persist a DRAFT; the unlock condition may still be missing."""
        radius = validate_unlock_radius(data.unlock_radius, settings.DEFAULT_UNLOCK_RADIUS_M)
        recipient_id = data.recipient_id or sender_id
        self._validate_recipient(sender_id, recipient_id)

        postcard = self._persist(sender_id, recipient_id, data, PostcardStatus.DRAFT, radius)
        logger.info(f"Draft saved: {postcard.id}")
        return project(postcard, sender_id)

    def get_by_id(self, postcard_id: uuid.UUID, viewer_id: uuid.UUID) -> PostcardResponse:
        postcard = postcard_crud.get_by_id(self.db, postcard_id=postcard_id)
        if not postcard:
            raise NotFound("Postcard")
        ensure_participant(postcard, viewer_id)

        if (
            postcard.recipient_id == viewer_id
            and postcard.status == PostcardStatus.UNLOCKED
            and postcard.viewed_at is None
        ):
            postcard_crud.mark_viewed(self.db, postcard_id=postcard_id, viewed_at=self.clock())
            self.db.refresh(postcard)

        return project(postcard, viewer_id)

    def list_received(self, user_id: uuid.UUID) -> List[PostcardResponse]:
        postcards = postcard_crud.list_by_recipient(self.db, user_id=user_id)
        return [project(p, user_id) for p in postcards]

    def list_sent(self, user_id: uuid.UUID) -> List[PostcardResponse]:
        """The caller is the sender of every item, so the sender block is dropped."""
        postcards = postcard_crud.list_by_sender(self.db, user_id=user_id)
        return [project(p, user_id, include_sender=False) for p in postcards]

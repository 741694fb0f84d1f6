"""
Geo-lock check: unlock the caller's postcards near their reported location.
"""
import logging
import uuid
from typing import List

from sqlalchemy.orm import Session

from app.crud import postcard_crud
from app.notification import notification_dispatcher
from app.schema.postcard import GeoUnlockedItem
from app.service.unlocking import unlock_postcard
from app.utils.geo import distance_meters, is_within_radius

logger = logging.getLogger(__name__)


class GeoLockChecker:
    """Request-scoped: only ever reads and unlocks postcards addressed to the caller."""

    def __init__(self, db: Session, notifier=None):
        self.db = db
        self.notifier = notifier or notification_dispatcher

    def check_and_unlock(self, user_id: uuid.UUID, latitude: float, longitude: float) -> List[GeoUnlockedItem]:
        unlocked: List[GeoUnlockedItem] = []
        candidates = postcard_crud.list_locked_geo_for_recipient(self.db, recipient_id=user_id)

        for postcard in candidates:
            distance = distance_meters(
                latitude,
                longitude,
                postcard.unlock_latitude,
                postcard.unlock_longitude,
            )
            if not is_within_radius(distance, postcard.unlock_radius):
                continue

            postcard_id = postcard.id
            sender_name = postcard.sender.name if postcard.sender is not None else None
            if unlock_postcard(self.db, postcard, self.notifier, trigger="geo"):
                unlocked.append(
                    GeoUnlockedItem(id=postcard_id, sender_name=sender_name, distance_meters=round(distance))
                )
                logger.info(f"Geo-unlocked postcard {postcard_id} for user {user_id} (distance: {distance:.1f}m)")

        return unlocked

"""
Postcard CRUD operations.
Status changes go through conditional updates so racing writers cannot double-unlock.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
import uuid
from sqlalchemy.orm import Session
from sqlalchemy import desc

from app.model.postcard import Postcard, PostcardStatus
from app.crud.base import CRUDBase


class CRUDPostcard(CRUDBase[Postcard, Dict[str, Any], Dict[str, Any]]):
    """Postcard repository."""

    def get_by_id(self, db: Session, *, postcard_id: uuid.UUID) -> Optional[Postcard]:
        return db.query(self.model).filter(self.model.id == postcard_id).first()

    def list_by_status(self, db: Session, *, status: PostcardStatus, criteria: tuple = ()) -> List[Postcard]:
        """All postcards in a status, narrowed by extra SQLAlchemy filter criteria."""
        return (
            db.query(self.model)
            .filter(self.model.status == status, *criteria)
            .order_by(self.model.created_at)
            .all()
        )

    def list_due_time_locked(self, db: Session, *, now: datetime) -> List[Postcard]:
        """LOCKED postcards whose unlock date has passed."""
        return self.list_by_status(
            db,
            status=PostcardStatus.LOCKED,
            criteria=(
                self.model.unlock_date.isnot(None),
                self.model.unlock_date <= now,
            ),
        )

    def list_locked_geo_for_recipient(self, db: Session, *, recipient_id: uuid.UUID) -> List[Postcard]:
        """LOCKED geo-lock postcards addressed to one user."""
        return self.list_by_status(
            db,
            status=PostcardStatus.LOCKED,
            criteria=(
                self.model.recipient_id == recipient_id,
                self.model.unlock_latitude.isnot(None),
                self.model.unlock_longitude.isnot(None),
            ),
        )

    def list_by_recipient(self, db: Session, *, user_id: uuid.UUID) -> List[Postcard]:
        """Non-draft postcards addressed to the user (newest first)."""
        return (
            db.query(self.model)
            .filter(self.model.recipient_id == user_id, self.model.status != PostcardStatus.DRAFT)
            .order_by(desc(self.model.created_at))
            .all()
        )

    def list_by_sender(self, db: Session, *, user_id: uuid.UUID) -> List[Postcard]:
        """Non-draft postcards sent by the user (newest first)."""
        return (
            db.query(self.model)
            .filter(self.model.sender_id == user_id, self.model.status != PostcardStatus.DRAFT)
            .order_by(desc(self.model.created_at))
            .all()
        )

    def update_status(
        self,
        db: Session,
        *,
        postcard_id: uuid.UUID,
        expected_status: PostcardStatus,
        new_status: PostcardStatus,
        fields: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Compare-and-swap status change.
        Returns False (and writes nothing) if the row is no longer in expected_status.
        """
        values = {"status": new_status}
        if fields:
            values.update(fields)
        updated = (
            db.query(self.model)
            .filter(self.model.id == postcard_id, self.model.status == expected_status)
            .update(values, synchronize_session=False)
        )
        db.commit()
        return updated == 1

    def mark_viewed(self, db: Session, *, postcard_id: uuid.UUID, viewed_at: datetime) -> bool:
        """Set viewed_at once; later calls are no-ops."""
        updated = (
            db.query(self.model)
            .filter(
                self.model.id == postcard_id,
                self.model.status == PostcardStatus.UNLOCKED,
                self.model.viewed_at.is_(None),
            )
            .update({"viewed_at": viewed_at}, synchronize_session=False)
        )
        db.commit()
        return updated == 1


postcard_crud = CRUDPostcard(Postcard)

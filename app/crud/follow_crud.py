"""
Follow CRUD operations (social graph membership).
"""
import uuid
from sqlalchemy.orm import Session

from app.model.follow import Follow
from app.crud.base import CRUDBase


class CRUDFollow(CRUDBase[Follow, dict, dict]):

    def is_following(self, db: Session, *, follower_id: uuid.UUID, followee_id: uuid.UUID) -> bool:
        """True if follower_id follows followee_id."""
        return db.get(self.model, (follower_id, followee_id)) is not None


follow_crud = CRUDFollow(Follow)

"""
User CRUD operations.
"""
import uuid
from sqlalchemy.orm import Session
from app.model.user import User
from app.crud.base import CRUDBase


class CRUDUser(CRUDBase[User, dict, dict]):
    """User directory lookups."""

    def exists(self, db: Session, user_id: uuid.UUID) -> bool:
        return self.get(db, user_id) is not None


user_crud = CRUDUser(User)
